"""
Error taxonomy for the intake and review service
"""
from typing import Dict, Optional


class IntakeError(Exception):
    """Base class for all service errors"""
    status_code = 500
    public_message = "Request failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ConfigurationError(IntakeError):
    """A required deployment credential or secret is missing"""
    status_code = 500
    public_message = "Server is not configured"


class ValidationError(IntakeError):
    """Submitted answers failed validation; carries the per-field error map"""
    status_code = 400
    public_message = "Please fix the highlighted fields"

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        super().__init__(message)
        self.errors = dict(errors)


class NotFoundError(IntakeError):
    """A target sheet tab does not exist"""
    status_code = 404
    public_message = "Not found"


class TransientIOError(IntakeError):
    """The tabular store or the network failed; the caller may try again"""
    status_code = 503
    public_message = "Something went wrong talking to the sheet. Please try again."


class AuthenticationError(IntakeError):
    status_code = 401
    public_message = "Incorrect password"


class SubmissionClosedError(IntakeError):
    status_code = 403
    public_message = "Applications are closed"


class SchemaError(ValueError):
    """A form definition violates its structural invariants"""
