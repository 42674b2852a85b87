"""Validated input for the student create/edit form.

Fields are checked in form order and the first failure is reported with the
wire (camelCase) field name, so the UI can show it inline.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..common.validators import require_bool, require_choice, require_enum, require_mapping, require_non_empty
from ..core.constants import CLASS_IDS, DEFAULT_CLASS_ID
from ..core.enums import StudentStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class StudentInput:
    name: str
    current_lesson: str
    status: StudentStatus
    fees_paid: bool = False
    class_id: str = DEFAULT_CLASS_ID


def _validate_field(key: str, value: Any) -> Any:
    if key == "name":
        return require_non_empty(value, "name")
    if key == "currentLesson":
        return require_non_empty(value, "currentLesson")
    if key == "status":
        return require_enum(value, "status", StudentStatus)
    if key == "feesPaid":
        return require_bool(value, "feesPaid")
    if key == "classId":
        return require_choice(value, "classId", CLASS_IDS)
    raise KeyError(key)


# wire name -> column/attribute name
_FIELDS = {
    "name": "name",
    "currentLesson": "current_lesson",
    "status": "status",
    "feesPaid": "fees_paid",
    "classId": "class_id",
}


def parse_student_input(payload: Any) -> StudentInput:
    data = require_mapping(payload)
    values: dict[str, Any] = {}
    for key, attr in _FIELDS.items():
        if key in data and data[key] is not None:
            values[attr] = _validate_field(key, data[key])
        elif key in ("name", "currentLesson", "status"):
            raise ValidationError(f"{key} is required", field=key)
    return StudentInput(**values)


def parse_student_changes(payload: Any) -> dict[str, Any]:
    """Partial variant used by edits: only the keys present are validated."""
    data = require_mapping(payload)
    changes: dict[str, Any] = {}
    for key, attr in _FIELDS.items():
        if key in data:
            changes[attr] = _validate_field(key, data[key])
    return changes
