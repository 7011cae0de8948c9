"""Environment-driven feature switches, read at call time."""

import os

BREAKTHROUGH_V2_ENV = "CINEMATIC_BREAKTHROUGH_V2"


def parse_boolean_flag(value: str | None, default: bool) -> bool:
    """'true'/'false' (any case, surrounding whitespace ignored); anything else -> default."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return default


def is_breakthrough_v2_enabled() -> bool:
    """Kill switch for the selection/mutation subsystem. Enabled unless set to 'false'."""
    return parse_boolean_flag(os.environ.get(BREAKTHROUGH_V2_ENV), True)
