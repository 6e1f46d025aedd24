from flask_restful import Api

from core.blueprints.base_blueprint import BaseBlueprint

review_bp = BaseBlueprint("review", __name__, template_folder="templates")


api = Api(review_bp)
