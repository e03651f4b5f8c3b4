from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def as_text(value: Any, field_name: str) -> str:
    """Form and JSON input as a string; ``None`` is empty, other types are rejected."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text", field=field_name)
    return value


def require_non_empty(value: str, field_name: str) -> str:
    value = as_text(value, field_name)
    if not value.strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    value = as_text(value, field_name)
    if len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters", field=field_name)
    return value


def require_email(value: str, field_name: str = "email") -> str:
    value = as_text(value, field_name).strip()
    if not _EMAIL_RE.match(value):
        raise ValidationError("Please enter a valid email", field=field_name)
    return value.lower()


def require_date_order(start: date, end: date, *, field_name: str = "end_date") -> None:
    if end < start:
        raise ValidationError("End date must be on or after start date", field=field_name)


def require_time_order(start: Optional[datetime], end: datetime, *, field_name: str = "check_out") -> None:
    if start is not None and end < start:
        raise ValidationError("Check-out cannot be earlier than check-in", field=field_name)


def optional_text(value: Optional[str], field_name: str = "value") -> Optional[str]:
    value = as_text(value, field_name).strip()
    return value or None
