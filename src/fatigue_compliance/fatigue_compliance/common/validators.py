from __future__ import annotations

import re
from datetime import date
from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

_CLOCK_RE = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d(?::[0-5]\d)?$|^24:00(?::00)?$")


def require_id(value: Any, field_name: str) -> int:
    """Reject empty or non-positive identifiers before they reach the engine."""

    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if ident <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return ident


def require_clock(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not _CLOCK_RE.match(value.strip()):
        raise ValidationError(f"{field_name} must be HH:MM")
    return value.strip()[:5]


def require_date(value: Optional[str], field_name: str) -> date:
    if not value:
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be YYYY-MM-DD") from None


def require_rating(value: Any, field_name: str) -> int:
    rating = require_id(value, field_name)
    if rating > 5:
        raise ValidationError(f"{field_name} must be between 1 and 5")
    return rating


def require_object(value: Any, field_name: str) -> Mapping[str, Any]:
    """A JSON object, with a missing value read as empty."""

    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValidationError(f"{field_name} must be a JSON object")
    return value


def require_list(value: Any, field_name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} must be a list")
    return value
