from flask import current_app

from core.pocketbase.client import DEFAULT_KEY, ListResult, PocketBaseClient
from core.pocketbase.errors import ClientResponseError, ErrorKind, http_status

__all__ = [
    "DEFAULT_KEY",
    "ClientResponseError",
    "ErrorKind",
    "http_status",
    "ListResult",
    "PocketBaseClient",
    "client_factory",
    "new_client",
]


def client_factory(app):
    """Build a callable producing a fresh client for ``app``'s configuration."""

    def factory():
        return PocketBaseClient(app.config["POCKETBASE_URL"], timeout=app.config["POCKETBASE_TIMEOUT"])

    return factory


def new_client():
    """Return a new client for the current application.

    Each component gets its own client, so auto-cancellation is scoped to
    the component that issued the requests.
    """
    return current_app.extensions["pocketbase"]()
