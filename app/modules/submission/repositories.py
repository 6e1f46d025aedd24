from typing import Any, Dict, List

from app.modules.submission.models import Submission
from core.repositories.BaseRepository import BaseRepository

THUMBNAIL_SIZE = "100x100"


class SubmissionRepository(BaseRepository[Submission]):
    def __init__(self, client, collection: str = "wap_games"):
        super().__init__(client, collection)

    def to_model(self, record: Dict[str, Any]) -> Submission:
        filename = record.get("screenshot") or ""
        return Submission.from_record(
            record,
            screenshot_url=self.client.files.get_url(record, filename),
            thumbnail_url=self.client.files.get_url(record, filename, thumb=THUMBNAIL_SIZE),
        )

    def newest(self, limit: int) -> List[Submission]:
        return self.list(page=1, per_page=limit, sort="-created", request_key=f"{self.collection}:list")
