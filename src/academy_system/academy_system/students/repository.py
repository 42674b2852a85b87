from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Student
from .schema import StudentInput


class StudentRepository(Protocol):
    """Repository interface for Student.

    Note (DIP): the service layer depends on this interface, not on a concrete store.
    """

    def list_all(self, *, search: Optional[str] = None) -> Sequence[Student]:
        """All students ordered by name, optionally filtered by a
        case-insensitive substring of the name."""

        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def create(self, data: StudentInput) -> int:
        raise NotImplementedError

    def update(self, student_id: int, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        raise NotImplementedError
