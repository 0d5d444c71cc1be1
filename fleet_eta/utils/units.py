"""Unit conversion and formatting helpers."""

import math
from datetime import datetime, timezone

KM_TO_MILES = 0.621371


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round halves away from zero for positive values (2.5 -> 3, 0.25 -> 0.3).

    The built-in ``round`` uses banker's rounding, which would turn
    12.5 seconds into 12.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def km_to_miles(km: float) -> float:
    """
    Convert kilometers to miles, rounded to one decimal.

    Args:
        km: Distance in kilometers

    Returns:
        Distance in miles, e.g. 100 -> 62.1
    """
    return round_half_up(km * KM_TO_MILES, 1)


def format_duration(seconds: int) -> str:
    """Format seconds as '1h 5m', or just '5m' under an hour."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def to_iso_utc(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a 'Z' suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    stamp = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
