from typing import Any, Dict, Generic, List, Optional, TypeVar

from core.pocketbase.client import DEFAULT_KEY

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Records of one PocketBase collection, mapped to ``T`` by ``to_model``."""

    def __init__(self, client, collection: str):
        self.client = client
        self.collection = collection

    @property
    def records(self):
        return self.client.collection(self.collection)

    def to_model(self, record: Dict[str, Any]) -> T:
        raise NotImplementedError

    def list(
        self,
        page: int = 1,
        per_page: int = 30,
        sort: Optional[str] = None,
        filter: Optional[str] = None,
        request_key=DEFAULT_KEY,
    ) -> List[T]:
        result = self.records.get_list(page=page, per_page=per_page, sort=sort, filter=filter, request_key=request_key)
        return [self.to_model(record) for record in result.items]

    def create(self, files: Optional[Dict[str, Any]] = None, **fields) -> T:
        return self.to_model(self.records.create(fields, files=files))
