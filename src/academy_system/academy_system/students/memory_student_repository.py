from __future__ import annotations

import threading
from dataclasses import replace
from itertools import count
from typing import Any, Mapping, Optional, Sequence

from .model import Student
from .repository import StudentRepository
from .schema import StudentInput


class InMemoryStudentRepository(StudentRepository):
    """Process-local store with serial integer ids."""

    def __init__(self):
        self._rows: dict[int, Student] = {}
        self._ids = count(1)
        self._lock = threading.Lock()

    def list_all(self, *, search: Optional[str] = None) -> Sequence[Student]:
        with self._lock:
            items = list(self._rows.values())
        if search:
            needle = search.lower()
            items = [s for s in items if needle in s.name.lower()]
        items.sort(key=lambda s: (s.name, s.student_id))
        return items

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with self._lock:
            return self._rows.get(int(student_id))

    def create(self, data: StudentInput) -> int:
        with self._lock:
            student_id = next(self._ids)
            self._rows[student_id] = Student(
                student_id=student_id,
                name=data.name,
                current_lesson=data.current_lesson,
                status=data.status,
                fees_paid=data.fees_paid,
                class_id=data.class_id,
            )
            return student_id

    def update(self, student_id: int, changes: Mapping[str, Any]) -> bool:
        with self._lock:
            current = self._rows.get(int(student_id))
            if current is None:
                return False
            self._rows[current.student_id] = replace(current, **dict(changes))
            return True

    def delete_by_id(self, student_id: int) -> bool:
        with self._lock:
            return self._rows.pop(int(student_id), None) is not None
