"""
Interview engine error taxonomy.

Every error except ProviderError is surfaced to the caller through the
exception handler registered in app.main. ProviderError is always absorbed
by the session service and turned into placeholder content.
"""
from typing import Any, Dict, Optional


class InterviewError(Exception):
    """Base class for errors surfaced to API callers."""
    status_code: int = 400
    code: str = "interview_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detail": self.message,
            "error": self.code,
            "data": self.details,
        }


class ValidationError(InterviewError):
    """Malformed or missing input the user can correct."""
    status_code = 400
    code = "validation_error"


class ForbiddenError(InterviewError):
    """Caller does not own the requested resource."""
    status_code = 403
    code = "forbidden"


class NotFoundError(InterviewError):
    """Unknown session, question, role profile or resume."""
    status_code = 404
    code = "not_found"


class InvalidStateError(InterviewError):
    """Action attempted on a session in the wrong lifecycle state."""
    status_code = 400
    code = "invalid_state"


class DuplicateAnswerError(InterviewError):
    """The question already has an answer; answers are never overwritten."""
    status_code = 400
    code = "already_answered"


class ProviderError(Exception):
    """Question generation or answer evaluation failed upstream."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
