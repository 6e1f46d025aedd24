from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

MIN_RATING = 1
MAX_RATING = 5


@dataclass
class Review:
    id: str
    game_id: str
    name: str
    rating: int
    comment: str
    created: str = ""

    def __repr__(self):
        return f"Review<{self.id}:{self.game_id} {self.rating}*>"

    @classmethod
    def from_record(cls, record: Dict[str, Any], game_field: str = "wap_game") -> "Review":
        try:
            rating = int(record.get("rating") or 0)
        except (TypeError, ValueError):
            rating = 0
        return cls(
            id=record["id"],
            game_id=record.get(game_field, ""),
            name=record.get("name", ""),
            rating=rating,
            comment=record.get("comment", ""),
            created=record.get("created", ""),
        )

    @property
    def created_date(self) -> Optional[date]:
        """Day the review was written; PocketBase stamps look like ``2025-03-01 12:00:00.000Z``."""
        if not self.created:
            return None
        try:
            return datetime.fromisoformat(self.created.replace("Z", "+00:00")).date()
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
