import os


def get_settings_module() -> str:
    """Settings module for APP_ENV (default: development)."""

    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def compliance_from_env() -> dict:
    """Threshold overrides taken from the environment; unset keys keep defaults."""

    keys = (
        "MAX_SHIFT_HOURS",
        "MIN_REST_HOURS",
        "WEEKLY_LEVEL1_HOURS",
        "WEEKLY_APPROACHING_HOURS",
        "WEEKLY_LEVEL2_HOURS",
        "MAX_CONSECUTIVE_DAYS",
        "CONSECUTIVE_NIGHTS_WARNING",
        "FRI_BREACH",
        "FGI_DAY_LEVEL1",
        "FGI_NIGHT_LEVEL1",
        "FGI_DAY_GOOD_PRACTICE",
        "FGI_NIGHT_GOOD_PRACTICE",
        "CHECK_FATIGUE",
    )
    return {key: os.environ[key] for key in keys if os.getenv(key)}
