from typing import Dict

from core.pocketbase.errors import ErrorKind


class FormValidationError(ValueError):
    """Local validation failure; raised before anything is sent to the server."""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(self.message)

    @property
    def field(self) -> str:
        return next(iter(self.errors), "")

    @property
    def message(self) -> str:
        return next(iter(self.errors.values()), "Invalid form data.")
