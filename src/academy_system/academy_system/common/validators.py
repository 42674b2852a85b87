from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_datetime

E = TypeVar("E", bound=Enum)


def require_mapping(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object", field="body")
    return payload


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    return value.strip()


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string", field=field_name)
    return value.strip() or None


def require_bool(value: Any, field_name: str) -> bool:
    # JSON booleans only; "false" as a string is almost always a client bug.
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean", field=field_name)
    return value


def require_choice(value: Any, field_name: str, choices: Iterable[str]) -> str:
    options = tuple(choices)
    if value not in options:
        raise ValidationError(f"{field_name} must be one of: {', '.join(options)}", field=field_name)
    return value


def require_enum(value: Any, field_name: str, enum_type: Type[E]) -> E:
    try:
        return enum_type(value)
    except ValueError:
        options = ", ".join(m.value for m in enum_type)
        raise ValidationError(f"{field_name} must be one of: {options}", field=field_name)


def require_datetime(value: Any, field_name: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        try:
            return parse_iso_datetime(value)
        except ValueError:
            pass
    raise ValidationError(f"{field_name} must be an ISO-8601 date", field=field_name)
