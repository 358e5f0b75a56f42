from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from ..core import constants
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ComplianceLimits:
    """Every threshold the rule set uses; configurable per deployment."""

    max_shift_hours: float = constants.MAX_SHIFT_HOURS
    min_rest_hours: float = constants.MIN_REST_HOURS
    weekly_window_days: int = constants.ROLLING_WINDOW_DAYS
    weekly_level1_hours: float = constants.WEEKLY_LEVEL1_HOURS
    weekly_approaching_hours: float = constants.WEEKLY_APPROACHING_HOURS
    weekly_level2_hours: float = constants.WEEKLY_LEVEL2_HOURS
    consecutive_days_window: int = constants.CONSECUTIVE_DAYS_WINDOW
    max_consecutive_days: int = constants.MAX_CONSECUTIVE_DAYS
    consecutive_nights_warning: int = constants.CONSECUTIVE_NIGHTS_WARNING
    fri_breach: float = constants.FRI_BREACH
    fgi_day_level1: float = constants.FGI_DAY_LEVEL1
    fgi_night_level1: float = constants.FGI_NIGHT_LEVEL1
    fgi_day_good_practice: float = constants.FGI_DAY_GOOD_PRACTICE
    fgi_night_good_practice: float = constants.FGI_NIGHT_GOOD_PRACTICE
    check_fatigue: bool = True

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "ComplianceLimits":
        """Build from a settings dict; keys are the field names, case-insensitive."""

        if not values:
            return cls()

        known = {f.name: f for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, raw in values.items():
            name = str(key).lower()
            f = known.get(name)
            if f is None:
                raise ValidationError(f"Unknown compliance setting: {key}")
            if raw is None or raw == "":
                continue
            kwargs[name] = _coerce(f.type, raw, name)
        return cls(**kwargs)


def _coerce(type_name: Any, raw: Any, name: str) -> Any:
    try:
        if type_name in ("bool", bool):
            if isinstance(raw, str):
                return raw.strip().lower() in {"1", "true", "yes", "on"}
            return bool(raw)
        if type_name in ("int", int):
            return int(raw)
        return float(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid value for {name}: {raw!r}") from None
