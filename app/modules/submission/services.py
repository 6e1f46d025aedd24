import logging
import os
from typing import Any, Dict, List, Mapping
from urllib.parse import urlparse

from PIL import Image

from app.modules.submission.models import EMAIL_RE, GITHUB_PREFIX, SUBMISSION_FIELDS, Submission
from app.modules.submission.repositories import SubmissionRepository
from core.services.BaseService import BaseService
from core.validation import FormValidationError

logger = logging.getLogger(__name__)


class SubmissionService(BaseService):
    def __init__(self, repository: SubmissionRepository):
        super().__init__(repository)

    MAX_SCREENSHOT_SIZE = 5 * 1024 * 1024  # 5MB
    ALLOWED_SCREENSHOT_EXTS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}

    REQUIRED_MESSAGES = {
        "full_name": "Full name is required.",
        "adypu_email": "ADYPU email is required.",
        "game_title": "Game title is required.",
        "hosted_link": "Game hosted link is required.",
        "github_link": "GitHub URL is required.",
    }

    def _validate_screenshot_extension(self, filename: str):
        _, ext = os.path.splitext(filename)
        if ext.lower() not in self.ALLOWED_SCREENSHOT_EXTS:
            raise ValueError("Invalid screenshot format. Allowed: png, jpg, jpeg, gif, webp.")

    def _validate_screenshot_size(self, screenshot):
        try:
            screenshot.stream.seek(0, os.SEEK_END)
            size = screenshot.stream.tell()
            screenshot.stream.seek(0)
        except (AttributeError, OSError):
            size = None
        if size is not None and size > self.MAX_SCREENSHOT_SIZE:
            raise ValueError("Screenshot is too large (max 5MB).")

    def _validate_screenshot_integrity(self, screenshot):
        try:
            img = Image.open(screenshot.stream)
            img.verify()
        except Exception:
            raise ValueError("Screenshot is not a valid image file.")
        finally:
            screenshot.stream.seek(0)

    def validate_screenshot(self, screenshot):
        if not screenshot or not getattr(screenshot, "filename", None):
            raise ValueError("Game screenshot is required.")
        self._validate_screenshot_extension(screenshot.filename)
        self._validate_screenshot_size(screenshot)
        self._validate_screenshot_integrity(screenshot)

    def clean_fields(self, fields: Mapping[str, Any]) -> Dict[str, str]:
        return {name: str(fields.get(name) or "").strip() for name in SUBMISSION_FIELDS}

    def validate(self, fields: Mapping[str, Any], screenshot) -> Dict[str, str]:
        """Return the cleaned text fields or raise :class:`FormValidationError` with every problem found."""
        cleaned = self.clean_fields(fields)
        errors = {name: self.REQUIRED_MESSAGES[name] for name, value in cleaned.items() if not value}

        if cleaned["adypu_email"] and not EMAIL_RE.match(cleaned["adypu_email"]):
            errors["adypu_email"] = "Please enter a valid ADYPU email address (ending with @adypu.edu.in)."

        if cleaned["hosted_link"]:
            parsed = urlparse(cleaned["hosted_link"])
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                errors["hosted_link"] = "Please enter a valid URL (starting with http:// or https://)."

        if cleaned["github_link"] and (
            not cleaned["github_link"].startswith(GITHUB_PREFIX) or len(cleaned["github_link"]) == len(GITHUB_PREFIX)
        ):
            errors["github_link"] = "Please enter a valid GitHub URL (starting with https://github.com/)."

        try:
            self.validate_screenshot(screenshot)
        except ValueError as exc:
            errors["screenshot"] = str(exc)

        if errors:
            raise FormValidationError(errors)
        return cleaned

    def submit(self, fields: Mapping[str, Any], screenshot) -> Submission:
        cleaned = self.validate(fields, screenshot)
        screenshot.stream.seek(0)
        files = {
            "screenshot": (
                os.path.basename(screenshot.filename),
                screenshot.stream,
                getattr(screenshot, "mimetype", None) or "application/octet-stream",
            )
        }
        submission = self.repository.create(files=files, **cleaned)
        logger.info("Game submitted: %r by %s", submission, cleaned["adypu_email"])
        return submission

    def list_newest(self, limit: int = 500) -> List[Submission]:
        return self.repository.newest(limit)

    def empty_fields(self) -> Dict[str, str]:
        return {name: "" for name in SUBMISSION_FIELDS}
