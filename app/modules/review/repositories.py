from typing import Any, Dict, List

from app.modules.review.models import Review
from core.repositories.BaseRepository import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    def __init__(self, client, collection: str = "wap_games_comments", game_field: str = "wap_game"):
        super().__init__(client, collection)
        self.game_field = game_field

    @property
    def list_request_key(self) -> str:
        # every review list of one client shares a key: a newer fetch supersedes the older one
        return f"{self.collection}:list"

    def to_model(self, record: Dict[str, Any]) -> Review:
        return Review.from_record(record, game_field=self.game_field)

    def by_game(self, game_id: str, limit: int) -> List[Review]:
        return self.list(
            page=1,
            per_page=limit,
            sort="-created",
            filter=self.client.filter(f"{self.game_field} = {{:game}}", {"game": game_id}),
            request_key=self.list_request_key,
        )

    def create_for_game(self, game_id: str, name: str, rating: int, comment: str) -> Review:
        return self.create(name=name, comment=comment, rating=rating, **{self.game_field: game_id})
