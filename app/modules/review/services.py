import logging
from typing import List, Tuple

from app.modules.review.models import MAX_RATING, MIN_RATING, Review
from app.modules.review.repositories import ReviewRepository
from core.services.BaseService import BaseService
from core.validation import FormValidationError

logger = logging.getLogger(__name__)

RANGE_MESSAGE = f"Rating must be between {MIN_RATING} and {MAX_RATING}"


class ReviewService(BaseService):
    def __init__(self, repository: ReviewRepository):
        super().__init__(repository)

    def parse_rating(self, rating) -> int:
        """Whole stars from an int or a string of digits; 0 when the rating was left empty."""
        if rating is None or rating == "":
            return 0
        if isinstance(rating, str) and rating.strip().isascii() and rating.strip().isdigit():
            return int(rating.strip())
        if isinstance(rating, int) and not isinstance(rating, bool):
            return rating
        raise FormValidationError({"rating": RANGE_MESSAGE})

    def validate(self, name, rating, comment) -> Tuple[str, int, str]:
        """
        Returns the cleaned (name, rating, comment).

        Checks run in form order and stop at the first failure, which is
        raised as a :class:`FormValidationError` for that single field.
        Values that are not text count as missing.
        """
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            raise FormValidationError({"name": "Name is required"})

        rating = self.parse_rating(rating)
        if not rating:
            raise FormValidationError({"rating": "Rating is required"})
        if not MIN_RATING <= rating <= MAX_RATING:
            raise FormValidationError({"rating": RANGE_MESSAGE})

        comment = comment.strip() if isinstance(comment, str) else ""
        if not comment:
            raise FormValidationError({"comment": "Comment is required"})

        return name, rating, comment

    def add_review(self, game_id: str, name, rating, comment) -> Review:
        if not game_id:
            raise FormValidationError({"game_id": "Game is required"})
        name, rating, comment = self.validate(name, rating, comment)
        review = self.repository.create_for_game(game_id, name, rating, comment)
        logger.info("Review submitted: %r", review)
        return review

    def list_for_game(self, game_id: str, limit: int = 50) -> List[Review]:
        return self.repository.by_game(game_id, limit)
