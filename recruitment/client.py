"""
Applicant-side submission client.

submit() keeps a best-effort local journal of every attempt, then posts the
answer map once. There is no retry and no idempotency key: a timeout after
the server stored the row reports failure, and submitting again stores a
second row.
"""
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from recruitment.models import FormSchema
from recruitment.validator import validate

logger = logging.getLogger(__name__)


class SubmitError(Exception):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class SubmitResult:
    def __init__(self, ok: bool, message: str = "", error: Optional[SubmitError] = None,
                 errors: Optional[Dict[str, str]] = None):
        self.ok = ok
        self.message = message
        self.error = error
        self.errors = errors or {}


class LocalJournal:
    """Append-only JSON-lines copy of submissions kept for operators"""

    def __init__(self, path: str):
        self.path = path

    def append(self, answers: Dict[str, Any]) -> None:
        entry = dict(answers)
        entry["timestamp"] = datetime.now(timezone.utc).isoformat()
        entry["id"] = uuid.uuid4().hex
        entry["status"] = "Applied"
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")

    def entries(self):
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return [json.loads(line) for line in f if line.strip()]
        except FileNotFoundError:
            return []


class SubmissionClient:
    def __init__(self, base_url: str = "", journal: Optional[LocalJournal] = None,
                 http: Optional[httpx.Client] = None):
        self.journal = journal
        self.http = http or httpx.Client(base_url=base_url)

    def submit(self, answers: Dict[str, Any]) -> SubmitResult:
        if self.journal is not None:
            try:
                self.journal.append(answers)
            except (OSError, TypeError, ValueError) as e:
                logger.warning("⚠️ Local journal write failed: %s", e)

        try:
            response = self.http.post("/submit", json=answers)
        except httpx.HTTPError as e:
            logger.error("❌ Submission failed to reach the server: %s", e)
            return SubmitResult(ok=False, error=SubmitError("network"))

        if not response.is_success:
            logger.error("❌ Server rejected submission with HTTP %s", response.status_code)
            return SubmitResult(ok=False, error=SubmitError("server"))

        return SubmitResult(ok=True, message=response.json().get("message", ""))

    def validate_and_submit(self, schema: FormSchema, answers: Dict[str, Any]) -> SubmitResult:
        """Post only when the answers pass validation; otherwise return the field errors"""
        errors = validate(schema, answers)
        if errors:
            return SubmitResult(ok=False, errors=errors)
        return self.submit(answers)
