# apps/dreams/domain/values.py
import math
from datetime import date, datetime, time
from typing import Optional, Union

import pytz
from dateutil.parser import isoparse

TimestampLike = Union[datetime, date, str, None]


def round_half_up(value: float) -> int:
    """Zaokrąglenie 'szkolne' (0.5 -> 1), a nie bankierskie jak round()."""
    return int(math.floor(value + 0.5))


def round_tenths(value: float) -> float:
    """Jedno miejsce po przecinku, także połówki w górę (9.95 -> 10.0)."""
    return round_half_up(value * 10) / 10


def clamp(value, low, high):
    return max(low, min(high, value))


def to_datetime(value: TimestampLike) -> Optional[datetime]:
    """
    Normalizuje znacznik czasu do datetime ze strefą UTC.
    Przyjmuje datetime (naive lub aware), date (północ UTC) albo string ISO-8601.
    """
    if value is None or value == "":
        return None

    if isinstance(value, str):
        value = isoparse(value)

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return pytz.UTC.localize(value)
        return value.astimezone(pytz.UTC)

    if isinstance(value, date):
        return pytz.UTC.localize(datetime.combine(value, time.min))

    raise TypeError(f"Unsupported timestamp value: {value!r}")


def to_amount(value) -> float:
    """Kwoty: None -> 0.0, Decimal z ORM -> float."""
    if value is None:
        return 0.0
    return float(value)

