import logging
from typing import Any, List, Mapping, Optional

from app.modules.submission.models import Submission
from app.modules.submission.services import SubmissionService
from core.pocketbase import ClientResponseError, ErrorKind
from core.state import FormState, KeyedTrigger
from core.validation import FormValidationError

logger = logging.getLogger(__name__)

LIST_ERROR = "Failed to load submissions. Please try again later."
SUBMIT_ERROR_PREFIX = "Failed to submit game"
UNEXPECTED_ERROR = "Something went wrong. Please try again."

_MOUNT_KEY = "submissions"


class SubmissionPage:
    """View state of the submission screen: the form and the table below it.

    Lives for one page render. The list is only ever replaced wholesale by
    a refetch, never patched locally.
    """

    def __init__(self, service: SubmissionService, page_size: int = 500):
        self.service = service
        self.page_size = page_size
        self.form = FormState(service.empty_fields())
        self.submissions: List[Submission] = []
        self.error: Optional[str] = None
        self.loading = False
        self._mounted = KeyedTrigger()

    def mount(self) -> None:
        if self._mounted.fire(_MOUNT_KEY):
            self.list_submissions()

    def list_submissions(self) -> List[Submission]:
        self._mounted.fire(_MOUNT_KEY)
        self.loading = True
        try:
            submissions = self.service.list_newest(self.page_size)
        except ClientResponseError as exc:
            if exc.is_cancelled:
                logger.debug("Submission list request superseded")
                return self.submissions
            logger.error("Error fetching submissions: %r %s", exc, exc.message)
            self.error = LIST_ERROR
            return self.submissions
        finally:
            self.loading = False

        self.submissions = submissions
        if self.error == LIST_ERROR:
            self.error = None
        return submissions

    def submit_game(self, fields: Mapping[str, Any], screenshot) -> Optional[Submission]:
        self.form.begin()
        self.error = None
        try:
            self.form.update(**self.service.clean_fields(fields))
            submission = self.service.submit(fields, screenshot)
        except FormValidationError as exc:
            self.form.fail(field_errors=exc.errors, kind=exc.kind)
            return None
        except ClientResponseError as exc:
            logger.error("Error submitting game: %r %s", exc, exc.message)
            self.error = f"{SUBMIT_ERROR_PREFIX}: {exc.message}"
            self.form.fail(self.error, field_errors=exc.field_errors, kind=exc.kind)
            return None
        except Exception:
            logger.exception("Unexpected error submitting game")
            self.error = f"{SUBMIT_ERROR_PREFIX}: {UNEXPECTED_ERROR}"
            self.form.fail(self.error, kind=ErrorKind.COLLABORATOR_ERROR)
            return None

        self.form.succeed()
        self.list_submissions()
        return submission
