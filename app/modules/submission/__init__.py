from flask_restful import Api

from core.blueprints.base_blueprint import BaseBlueprint

submission_bp = BaseBlueprint("submission", __name__, template_folder="templates")


api = Api(submission_bp)
