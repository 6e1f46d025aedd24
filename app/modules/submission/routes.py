import logging

from flask import current_app, render_template
from flask_restful import Resource

from app.modules.submission import api, submission_bp
from app.modules.submission.components import SubmissionPage
from app.modules.submission.forms import GameSubmissionForm
from app.modules.submission.repositories import SubmissionRepository
from app.modules.submission.services import SubmissionService
from core.pocketbase import http_status, new_client

logger = logging.getLogger(__name__)


def build_submission_page() -> SubmissionPage:
    repository = SubmissionRepository(new_client(), current_app.config["GAMES_COLLECTION"])
    return SubmissionPage(SubmissionService(repository), page_size=current_app.config["SUBMISSIONS_PAGE_SIZE"])


@submission_bp.route("/", methods=["GET", "POST"])
def index():
    page = build_submission_page()
    form = GameSubmissionForm()
    status = 200

    if form.is_submitted():
        if form.validate():
            created = page.submit_game(form.get_fields(), form.screenshot.data)
            if created is not None:
                logger.info("Rendering refreshed list after submission %s", created.id)
                form = GameSubmissionForm(formdata=None)
            else:
                status = http_status(page.form.error_kind)
        else:
            status = 400

    page.mount()
    return render_template("submission/index.html", page=page, form=form), status


class SubmissionListResource(Resource):
    def get(self):
        page = build_submission_page()
        page.mount()
        if page.error:
            return {"message": page.error, "items": []}, 502
        return {"items": [submission.to_dict() for submission in page.submissions]}


api.add_resource(SubmissionListResource, "/api/games")
