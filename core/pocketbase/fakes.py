"""In-memory stand-in for a PocketBase server, used by the test suite."""

import itertools
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from core.pocketbase.client import DEFAULT_KEY, FileService, ListResult, PocketBaseClient
from core.pocketbase.errors import ClientResponseError, ErrorKind

FILTER_RE = re.compile(r"^\s*(\w+)\s*=\s*'((?:[^'\\]|\\.)*)'\s*$")


class FakeRecordService:
    def __init__(self, backend: "FakePocketBase", collection: str):
        self.backend = backend
        self.collection = collection

    def get_list(self, page=1, per_page=30, sort=None, filter=None, request_key=DEFAULT_KEY) -> ListResult:
        self.backend.calls.append(("list", self.collection, {"page": page, "perPage": per_page, "sort": sort,
                                                              "filter": filter}))
        self.backend._raise_queued("list")

        items = list(self.backend.records.get(self.collection, []))
        if filter:
            match = FILTER_RE.match(filter)
            if not match:
                raise ClientResponseError(ErrorKind.COLLABORATOR_ERROR, "Invalid filter parameters.", status=400)
            name, value = match.group(1), match.group(2).replace("\\'", "'")
            items = [item for item in items if str(item.get(name)) == value]
        if sort:
            for part in reversed(sort.split(",")):
                reverse = part.startswith("-")
                name = part.lstrip("-+")
                items.sort(key=lambda item: item.get(name) or "", reverse=reverse)

        total = len(items)
        start = (page - 1) * per_page
        return ListResult(
            page=page,
            per_page=per_page,
            total_items=total,
            total_pages=(total + per_page - 1) // per_page if per_page else 0,
            items=[dict(item) for item in items[start:start + per_page]],
        )

    def create(self, body: Dict[str, Any], files: Optional[Dict[str, Any]] = None, request_key=None) -> Dict[str, Any]:
        self.backend.calls.append(("create", self.collection, dict(body)))
        self.backend._raise_queued("create")

        record = {
            "id": secrets.token_hex(8)[:15],
            "collectionId": f"pbc_{self.collection}",
            "collectionName": self.collection,
            "created": self.backend.next_timestamp(),
        }
        record.update(body)
        for name, upload in (files or {}).items():
            record[name] = upload[0] if isinstance(upload, tuple) else getattr(upload, "filename", str(upload))
        record["updated"] = record["created"]
        self.backend.records.setdefault(self.collection, []).append(record)
        return dict(record)


class FakePocketBase:
    """Drop-in replacement for :class:`PocketBaseClient` keeping records in dicts.

    ``fail_next`` queues errors raised by the next list/create calls; every
    call is recorded in ``calls`` so tests can assert that nothing was sent.
    """

    base_url = "http://pocketbase.test"

    def __init__(self):
        self.records: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self.files = FileService(self)
        self._failures: List[tuple] = []
        self._clock = itertools.count()
        self._epoch = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

    def collection(self, name: str) -> FakeRecordService:
        return FakeRecordService(self, name)

    def build_url(self, path: str) -> str:
        return self.base_url + "/" + path.lstrip("/")

    def health(self) -> Dict[str, Any]:
        self._raise_queued("health")
        return {"code": 200, "message": "API is healthy.", "data": {}}

    filter = staticmethod(PocketBaseClient.filter)

    def fail_next(self, error: ClientResponseError, on: Optional[str] = None) -> None:
        """Raise ``error`` from the next call, or the next ``on`` call ("list", "create", "health")."""
        self._failures.append((on, error))

    def next_timestamp(self) -> str:
        stamp = self._epoch + timedelta(seconds=next(self._clock))
        return stamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3] + "Z"

    def writes(self) -> List[tuple]:
        return [call for call in self.calls if call[0] == "create"]

    def _raise_queued(self, operation: str):
        for index, (on, error) in enumerate(self._failures):
            if on is None or on == operation:
                del self._failures[index]
                raise error
