import re
from dataclasses import asdict, dataclass
from typing import Any, Dict

EMAIL_DOMAIN = "adypu.edu.in"
EMAIL_RE = re.compile(r"^[^@\s]+@adypu\.edu\.in$", re.IGNORECASE)
GITHUB_PREFIX = "https://github.com/"

SUBMISSION_FIELDS = ("full_name", "adypu_email", "game_title", "hosted_link", "github_link")


@dataclass
class Submission:
    id: str
    full_name: str
    adypu_email: str
    game_title: str
    hosted_link: str
    github_link: str
    screenshot: str = ""
    created: str = ""
    screenshot_url: str = ""
    thumbnail_url: str = ""

    def __repr__(self):
        return f"Submission<{self.id}:{self.game_title}>"

    @classmethod
    def from_record(cls, record: Dict[str, Any], screenshot_url: str = "", thumbnail_url: str = "") -> "Submission":
        return cls(
            id=record["id"],
            full_name=record.get("full_name", ""),
            adypu_email=record.get("adypu_email", ""),
            game_title=record.get("game_title", ""),
            hosted_link=record.get("hosted_link", ""),
            github_link=record.get("github_link", ""),
            screenshot=record.get("screenshot") or "",
            created=record.get("created", ""),
            screenshot_url=screenshot_url,
            thumbnail_url=thumbnail_url,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
