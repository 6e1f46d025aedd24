from enum import Enum
from typing import Any, Dict, Optional

from core.pocketbase.errors import ErrorKind


class FormStatus(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class FormState:
    """Input values and status of a form: IDLE -> SUBMITTING -> SUCCESS | FAILED.

    SUCCESS and FAILED are resting states; a new submission may begin from
    any state except SUBMITTING.
    """

    def __init__(self, initial: Dict[str, Any]):
        self._initial = dict(initial)
        self.fields: Dict[str, Any] = dict(initial)
        self.status = FormStatus.IDLE
        self.error: Optional[str] = None
        self.field_errors: Dict[str, str] = {}
        self.error_kind: Optional[ErrorKind] = None

    def __repr__(self):
        return f"FormState<{self.status.value}>"

    @property
    def disabled(self) -> bool:
        return self.status is FormStatus.SUBMITTING

    @property
    def is_idle(self) -> bool:
        return self.status is not FormStatus.SUBMITTING

    def update(self, **values) -> None:
        self.fields.update(values)

    def begin(self) -> None:
        if self.status is FormStatus.SUBMITTING:
            raise RuntimeError("A submission is already in progress.")
        self.status = FormStatus.SUBMITTING
        self.error = None
        self.field_errors = {}
        self.error_kind = None

    def succeed(self) -> None:
        self.status = FormStatus.SUCCESS
        self.fields = dict(self._initial)

    def fail(
        self,
        message: Optional[str] = None,
        field_errors: Optional[Dict[str, str]] = None,
        kind: Optional[ErrorKind] = None,
    ) -> None:
        self.status = FormStatus.FAILED
        self.error = message
        self.field_errors = dict(field_errors or {})
        self.error_kind = kind

    def reset(self) -> None:
        self.status = FormStatus.IDLE
        self.fields = dict(self._initial)
        self.error = None
        self.field_errors = {}
        self.error_kind = None
