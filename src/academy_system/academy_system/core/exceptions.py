from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``field`` names the first offending input field, when there is one.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class StoreError(DomainError):
    """Raised when the backing store fails for reasons unrelated to input."""


class BulkAttendanceError(DomainError):
    """Raised when one or more creates of a bulk attendance batch failed."""

    def __init__(self, message: str, failed_student_ids: Sequence[int] = (), transitions: Sequence = ()):
        super().__init__(message)
        self.failed_student_ids = list(failed_student_ids)
        # states the batch went through, ending in IDLE
        self.transitions = tuple(transitions)
