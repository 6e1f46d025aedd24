import logging
from typing import Callable, List, Optional

from app.modules.review.models import Review
from app.modules.review.services import ReviewService
from core.pocketbase import ClientResponseError, ErrorKind
from core.state import FormState, KeyedTrigger
from core.validation import FormValidationError

logger = logging.getLogger(__name__)

EMPTY_REVIEW = {"name": "", "rating": 0, "comment": ""}

OTHER_GAME_ERROR = "This review belongs to a different game"
UNEXPECTED_ERROR = "Something went wrong. Please try again."


class ReviewModal:
    """Reviews of one game plus the form to add another.

    ``open`` is keyed by game id: switching games clears what was shown and
    fetches again, reopening the same game does nothing. A fetch that the
    client reports as superseded leaves the state untouched.
    """

    def __init__(
        self,
        service: ReviewService,
        on_review_added: Optional[Callable[[Review], None]] = None,
        page_size: int = 50,
    ):
        self.service = service
        self.on_review_added = on_review_added
        self.page_size = page_size
        self.game_id: Optional[str] = None
        self.reviews: List[Review] = []
        self.error: Optional[str] = None
        self.form = FormState(EMPTY_REVIEW)
        self._opened = KeyedTrigger()

    def open(self, game_id: str) -> None:
        if not game_id or not self._opened.fire(game_id):
            return
        self.game_id = game_id
        self.reviews = []
        self.error = None
        self.form.reset()
        self.list_reviews(game_id)

    def close(self) -> None:
        self._opened.reset()
        self.game_id = None
        self.reviews = []
        self.error = None
        self.form.reset()

    def list_reviews(self, game_id: Optional[str] = None) -> List[Review]:
        if game_id and game_id != self.game_id:
            # another game's reviews are only ever fetched by switching the modal to it
            self.open(game_id)
            return self.reviews
        game_id = self.game_id
        if not game_id:
            return []

        logger.debug("Fetching reviews for game %s", game_id)
        try:
            reviews = self.service.list_for_game(game_id, self.page_size)
        except ClientResponseError as exc:
            if exc.is_cancelled:
                logger.debug("Review fetch for game %s superseded", game_id)
                return self.reviews
            logger.error("Error fetching reviews for game %s: %r %s", game_id, exc, exc.message)
            self.error = f"Failed to load reviews: {exc.message}"
            self.reviews = []
            return []

        self.reviews = reviews
        return reviews

    def submit_review(self, game_id: str, name, rating, comment) -> Optional[Review]:
        self.form.begin()
        self.form.update(name=name or "", rating=rating or 0, comment=comment or "")
        self.error = None

        if self.game_id is None and game_id:
            self._opened.fire(game_id)
            self.game_id = game_id
        elif game_id and game_id != self.game_id:
            self.error = f"Failed to submit review: {OTHER_GAME_ERROR}"
            self.form.fail(self.error, field_errors={"game_id": OTHER_GAME_ERROR}, kind=ErrorKind.VALIDATION_FAILED)
            return None

        try:
            review = self.service.add_review(game_id, name, rating, comment)
        except FormValidationError as exc:
            self.error = f"Failed to submit review: {exc.message}"
            self.form.fail(self.error, field_errors=exc.errors, kind=exc.kind)
            return None
        except ClientResponseError as exc:
            logger.error("Error submitting review for game %s: %r %s", game_id, exc, exc.message)
            self.error = f"Failed to submit review: {exc.message}"
            self.form.fail(self.error, field_errors=exc.field_errors, kind=exc.kind)
            return None
        except Exception:
            logger.exception("Unexpected error submitting review for game %s", game_id)
            self.error = f"Failed to submit review: {UNEXPECTED_ERROR}"
            self.form.fail(self.error, kind=ErrorKind.COLLABORATOR_ERROR)
            return None

        self.form.succeed()
        self.list_reviews(game_id)
        if self.on_review_added is not None:
            self.on_review_added(review)
        return review
