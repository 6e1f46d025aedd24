import logging

from flask import current_app, render_template, request
from flask_restful import Resource

from app.modules.review import api, review_bp
from app.modules.review.components import ReviewModal
from app.modules.review.forms import ReviewForm
from app.modules.review.repositories import ReviewRepository
from app.modules.review.services import ReviewService
from core.pocketbase import http_status, new_client

logger = logging.getLogger(__name__)


def build_review_modal(on_review_added=None) -> ReviewModal:
    config = current_app.config
    repository = ReviewRepository(new_client(), config["REVIEWS_COLLECTION"], config["REVIEW_GAME_FIELD"])
    return ReviewModal(ReviewService(repository), on_review_added=on_review_added, page_size=config["REVIEWS_PAGE_SIZE"])


def log_review_added(review):
    logger.info("Review %s added to game %s", review.id, review.game_id)


@review_bp.route("/games/<game_id>/reviews", methods=["GET", "POST"])
def reviews(game_id):
    modal = build_review_modal(on_review_added=log_review_added)
    modal.open(game_id)

    form = ReviewForm()
    status = 200
    if form.is_submitted():
        if form.validate():
            review = modal.submit_review(game_id, **form.get_review())
            if review is not None:
                form = ReviewForm(formdata=None)
            else:
                status = http_status(modal.form.error_kind)
        else:
            status = 400

    partial = bool(request.args.get("partial"))
    template = "review/modal.html" if partial else "review/page.html"
    return render_template(template, modal=modal, form=form, partial=partial), status


class ReviewListResource(Resource):
    def get(self, game_id):
        modal = build_review_modal()
        modal.open(game_id)
        if modal.error:
            return {"message": modal.error, "items": []}, 502
        return {"game_id": game_id, "items": [review.to_dict() for review in modal.reviews]}

    def post(self, game_id):
        payload = request.get_json(silent=True) if request.is_json else request.form
        if not isinstance(payload, dict):
            return {"message": "Expected a JSON object with name, rating and comment."}, 400
        modal = build_review_modal(on_review_added=log_review_added)
        review = modal.submit_review(game_id, payload.get("name"), payload.get("rating"), payload.get("comment"))
        if review is None:
            return {"message": modal.error, "field_errors": modal.form.field_errors}, http_status(modal.form.error_kind)
        return review.to_dict(), 201


api.add_resource(ReviewListResource, "/api/games/<game_id>/reviews")
