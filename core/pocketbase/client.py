import itertools
import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode

import requests

from core.pocketbase.errors import ClientResponseError

logger = logging.getLogger(__name__)

# Sentinel: derive the request key from method + path (GET requests only).
DEFAULT_KEY = object()


@dataclass
class ListResult:
    page: int = 1
    per_page: int = 0
    total_items: int = 0
    total_pages: int = 0
    items: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ListResult":
        return cls(
            page=payload.get("page", 1),
            per_page=payload.get("perPage", 0),
            total_items=payload.get("totalItems", 0),
            total_pages=payload.get("totalPages", 0),
            items=list(payload.get("items") or []),
        )


class RecordService:
    """List/create access to the records of one collection."""

    def __init__(self, client: "PocketBaseClient", collection: str):
        self.client = client
        self.collection = collection

    @property
    def base_path(self) -> str:
        return f"/api/collections/{quote(self.collection, safe='')}/records"

    def get_list(
        self,
        page: int = 1,
        per_page: int = 30,
        sort: Optional[str] = None,
        filter: Optional[str] = None,
        request_key=DEFAULT_KEY,
    ) -> ListResult:
        params = {"page": page, "perPage": per_page}
        if sort:
            params["sort"] = sort
        if filter:
            params["filter"] = filter
        payload = self.client.send(self.base_path, method="GET", params=params, request_key=request_key)
        return ListResult.from_payload(payload)

    def create(self, body: Dict[str, Any], files: Optional[Dict[str, Any]] = None, request_key=None) -> Dict[str, Any]:
        if files:
            # multipart: plain string fields plus the file parts
            data = {name: "" if value is None else str(value) for name, value in body.items()}
            return self.client.send(self.base_path, method="POST", data=data, files=files, request_key=request_key)
        return self.client.send(self.base_path, method="POST", json=body, request_key=request_key)


class FileService:
    def __init__(self, client: "PocketBaseClient"):
        self.client = client

    def get_url(self, record: Dict[str, Any], filename: str, thumb: Optional[str] = None) -> str:
        """Return the public URL of a file stored on ``record``, or ``""``."""
        record_id = record.get("id")
        collection = record.get("collectionId") or record.get("collectionName")
        if not filename or not record_id or not collection:
            return ""

        url = self.client.build_url(
            "/api/files/{}/{}/{}".format(
                quote(collection, safe=""),
                quote(record_id, safe=""),
                quote(filename, safe=""),
            )
        )
        if thumb:
            url += "?" + urlencode({"thumb": thumb})
        return url


class PocketBaseClient:
    """Thin REST client for a PocketBase server.

    Requests sharing a request key auto-cancel each other: when a newer
    request with the same key is started, the older one raises a
    ``CANCELLED`` :class:`ClientResponseError` once its response arrives
    instead of returning stale data.
    """

    def __init__(self, base_url: str, timeout: int = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.auto_cancellation = True
        self.files = FileService(self)

        self._lock = threading.Lock()
        self._tokens = itertools.count(1)
        self._pending: Dict[str, int] = {}

    def __repr__(self):
        return f"PocketBaseClient<{self.base_url}>"

    def collection(self, name: str) -> RecordService:
        return RecordService(self, name)

    def build_url(self, path: str) -> str:
        return self.base_url + "/" + path.lstrip("/")

    def health(self) -> Dict[str, Any]:
        return self.send("/api/health", method="GET", request_key=None)

    @staticmethod
    def filter(expression: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Substitute ``{:name}`` placeholders with safely quoted values.

        >>> PocketBaseClient.filter("wap_game = {:id}", {"id": "abc123"})
        "wap_game = 'abc123'"
        """
        if not params:
            return expression

        for name, value in params.items():
            if value is None:
                literal = "null"
            elif isinstance(value, bool):
                literal = "true" if value else "false"
            elif isinstance(value, (int, float)):
                literal = str(value)
            elif isinstance(value, datetime):
                stamp = value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3] + "Z"
                literal = f"'{stamp}'"
            elif isinstance(value, str):
                literal = "'" + value.replace("'", "\\'") + "'"
            else:
                literal = "'" + json.dumps(value).replace("'", "\\'") + "'"
            expression = expression.replace("{:" + name + "}", literal)
        return expression

    # ------------------------------------------------------------------
    # request bookkeeping
    # ------------------------------------------------------------------

    def cancel_request(self, request_key: str) -> None:
        with self._lock:
            self._pending.pop(request_key, None)

    def cancel_all_requests(self) -> None:
        with self._lock:
            self._pending.clear()

    def _resolve_key(self, method: str, path: str, request_key) -> Optional[str]:
        if not self.auto_cancellation:
            return None
        if request_key is DEFAULT_KEY:
            return f"{method}{path}" if method == "GET" else None
        return request_key

    def _register(self, request_key: str) -> int:
        with self._lock:
            token = next(self._tokens)
            if request_key in self._pending:
                logger.debug("Request %s supersedes an in-flight request", request_key)
            self._pending[request_key] = token
            return token

    def _finish(self, request_key: str, token: int) -> bool:
        """Release ``request_key``; return False when the request was superseded."""
        with self._lock:
            if self._pending.get(request_key) != token:
                return False
            del self._pending[request_key]
            return True

    def send(
        self,
        path: str,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        request_key=DEFAULT_KEY,
    ) -> Dict[str, Any]:
        url = self.build_url(path)
        key = self._resolve_key(method, path, request_key)
        token = self._register(key) if key else None

        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                data=data,
                files=files,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            if key and not self._finish(key, token):
                raise ClientResponseError.cancelled(url) from exc
            raise ClientResponseError.from_transport(url, exc) from exc

        if key and not self._finish(key, token):
            raise ClientResponseError.cancelled(url)

        try:
            payload = response.json() if response.content else {}
        except ValueError:
            payload = {}

        if response.status_code >= 400:
            raise ClientResponseError.from_response(response.status_code, url, payload)
        return payload
