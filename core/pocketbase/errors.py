from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    CANCELLED = "cancelled"
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    COLLABORATOR_ERROR = "collaborator_error"


class ClientResponseError(Exception):
    """Failure reported by the PocketBase client.

    ``kind`` is decided here, from the HTTP status and the request
    bookkeeping, so callers never inspect the message text.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str = "",
        status: int = 0,
        url: str = "",
        data: Optional[Dict[str, Any]] = None,
    ):
        self.kind = kind
        self.message = message or "Something went wrong while processing your request."
        self.status = status
        self.url = url
        self.data = data or {}
        super().__init__(self.message)

    def __repr__(self):
        return f"ClientResponseError<{self.kind.value}:{self.status} {self.url}>"

    @property
    def is_cancelled(self) -> bool:
        return self.kind is ErrorKind.CANCELLED

    @property
    def field_errors(self) -> Dict[str, str]:
        """Per-field messages from a 400 response body (``data.<field>.message``)."""
        errors = {}
        for field, detail in self.data.items():
            if isinstance(detail, dict) and detail.get("message"):
                errors[field] = detail["message"]
        return errors

    @classmethod
    def cancelled(cls, url: str = "") -> "ClientResponseError":
        return cls(ErrorKind.CANCELLED, "The request was autocancelled.", status=0, url=url)

    @classmethod
    def from_response(cls, status: int, url: str, payload: Any) -> "ClientResponseError":
        payload = payload if isinstance(payload, dict) else {}
        message = payload.get("message") or ""
        data = payload.get("data") if isinstance(payload.get("data"), dict) else {}

        if status == 404:
            kind = ErrorKind.NOT_FOUND
        elif status == 400 and data:
            kind = ErrorKind.VALIDATION_FAILED
        else:
            kind = ErrorKind.COLLABORATOR_ERROR
        return cls(kind, message, status=status, url=url, data=data)

    @classmethod
    def from_transport(cls, url: str, exc: Exception) -> "ClientResponseError":
        return cls(ErrorKind.COLLABORATOR_ERROR, f"Could not reach the server ({exc.__class__.__name__}).", url=url)


HTTP_STATUS = {
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CANCELLED: 409,
    ErrorKind.COLLABORATOR_ERROR: 502,
}


def http_status(kind: Optional[ErrorKind]) -> int:
    """Status code a route answers with for a failure of ``kind``."""
    return HTTP_STATUS.get(kind, 502)
