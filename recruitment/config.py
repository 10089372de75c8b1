import os
from datetime import datetime
from typing import Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from recruitment.errors import ConfigurationError

load_dotenv()

EVALUATION_TEAMS = ["technical", "social", "content", "outreach", "core"]


class Settings(BaseModel):
    """Deployment configuration read from the environment"""
    google_service_account_email: str = ""
    google_private_key: str = ""
    google_sheet_id: str = ""
    sheets_backend: str = "google"

    dashboard_password: str = ""
    evaluation_passwords: Dict[str, str] = {}

    secret_key: str = "change-me-in-production"
    access_token_expire_minutes: int = 480

    submission_deadline: Optional[datetime] = None
    review_status_path: str = ".review_status.json"
    submission_journal_path: str = ".submissions.jsonl"

    def require_sheet_credentials(self) -> None:
        """Fail closed when the store credentials are missing"""
        if self.sheets_backend == "memory":
            return
        if not (self.google_service_account_email and self.google_private_key and self.google_sheet_id):
            raise ConfigurationError("Missing Google credentials in environment variables")


def normalize_private_key(raw: str) -> str:
    # Keys pasted into .env files carry literal "\n" and stray quotes
    return raw.replace("\\n", "\n").replace('"', "")


def _parse_deadline(raw: str) -> Optional[datetime]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        raise ConfigurationError(f"SUBMISSION_DEADLINE is not an ISO-8601 timestamp: {raw!r}")


def get_settings() -> Settings:
    return Settings(
        google_service_account_email=os.getenv("GOOGLE_SERVICE_ACCOUNT_EMAIL", ""),
        google_private_key=normalize_private_key(os.getenv("GOOGLE_PRIVATE_KEY", "")),
        google_sheet_id=os.getenv("GOOGLE_SHEET_ID", ""),
        sheets_backend=os.getenv("SHEETS_BACKEND", "google").strip().lower(),
        dashboard_password=os.getenv("DASHBOARD_PASSWORD", ""),
        evaluation_passwords={
            team: os.getenv(f"EVAL_{team.upper()}_PASSWORD", "") for team in EVALUATION_TEAMS
        },
        secret_key=os.getenv("SECRET_KEY", "change-me-in-production"),
        access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "480")),
        submission_deadline=_parse_deadline(os.getenv("SUBMISSION_DEADLINE", "")),
        review_status_path=os.getenv("REVIEW_STATUS_PATH", ".review_status.json"),
        submission_journal_path=os.getenv("SUBMISSION_JOURNAL_PATH", ".submissions.jsonl"),
    )
