"""Domain error taxonomy shared by services, repositories and routers.

Services raise these; the API layer turns them into HTTP responses using
``status_code``.  Every error carries a human-readable message.
"""

from __future__ import annotations


class AssessmentError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(AssessmentError, ValueError):
    """Malformed or missing request data, or an unsupported language."""

    status_code = 400


class NotFoundError(AssessmentError, LookupError):
    """Nothing exists yet: no questions, no attempts, or an unknown user."""

    status_code = 404


class ConflictError(AssessmentError):
    status_code = 409


class PersistenceError(AssessmentError):
    """Storage unreachable or a write was rejected.  Safe to retry."""

    status_code = 503
