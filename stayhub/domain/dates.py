"""
Calendar-day normalization.

Every date that reaches the availability logic goes through ``normalize`` and
comes out as a plain ``datetime.date``: no time of day, no zone. Date-only
strings are split into their components and never parsed as UTC, otherwise a
viewer west of Greenwich would see every blackout shifted one day back.
"""

import datetime
import logging
import re
from functools import lru_cache
from typing import Any, Iterator, Optional
from zoneinfo import ZoneInfo

from stayhub.core.config import settings

logger = logging.getLogger(__name__)

ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

# Wrapper types from document stores (Firestore, protobuf) expose one of these
TIMESTAMP_CONVERTERS = ("to_datetime", "ToDatetime", "to_date", "toDate")


@lru_cache(maxsize=None)
def _zone(name: str) -> Optional[ZoneInfo]:
    return ZoneInfo(name) if name else None


def local_zone() -> Optional[ZoneInfo]:
    """Configured zone, or None for the host's local zone."""
    return _zone(settings.local_timezone)


def today() -> datetime.date:
    return datetime.datetime.now(local_zone()).date()


def _from_datetime(value: datetime.datetime) -> datetime.date:
    if value.tzinfo is not None:
        value = value.astimezone(local_zone())
    return datetime.date(value.year, value.month, value.day)


def _from_string(value: str) -> Optional[datetime.date]:
    value = value.strip()
    match = ISO_DATE_RE.match(value)
    if match:
        year, month, day = (int(part) for part in match.groups())
        try:
            return datetime.date(year, month, day)
        except ValueError:
            return None

    try:
        parsed = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return _from_datetime(parsed)


def _from_epoch_ms(value: float) -> Optional[datetime.date]:
    try:
        parsed = datetime.datetime.fromtimestamp(value / 1000, tz=datetime.timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return _from_datetime(parsed)


def _from_wrapper(value: Any) -> Optional[datetime.date]:
    for name in TIMESTAMP_CONVERTERS:
        converter = getattr(value, name, None)
        if callable(converter):
            try:
                converted = converter()
            except Exception as e:
                logger.warning(f"Timestamp conversion failed for {value!r}: {e}")
                return None
            if isinstance(converted, (datetime.date, datetime.datetime)):
                return normalize(converted)
            return None
    return None


def normalize(raw: Any) -> Optional[datetime.date]:
    """
    Convert a raw date value to a calendar day.

    Returns None (and logs a warning) when the value cannot be interpreted.
    Callers must treat None as "cannot evaluate" and fail closed.
    """
    if raw is None or raw == "":
        return None

    result: Optional[datetime.date] = None

    # datetime is a subclass of date, check it first
    if isinstance(raw, datetime.datetime):
        result = _from_datetime(raw)
    elif isinstance(raw, datetime.date):
        result = datetime.date(raw.year, raw.month, raw.day)
    elif isinstance(raw, str):
        result = _from_string(raw)
    elif isinstance(raw, bool):
        result = None
    elif isinstance(raw, (int, float)):
        result = _from_epoch_ms(raw)
    else:
        result = _from_wrapper(raw)

    if result is None:
        logger.warning(f"Unable to parse date: {raw!r}")
    return result


def format_local_date(raw: Any) -> Optional[str]:
    """YYYY-MM-DD built from the local calendar fields (never via UTC)."""
    day = normalize(raw)
    if day is None:
        return None
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def calculate_nights(check_in: Any, check_out: Any) -> int:
    start = normalize(check_in)
    end = normalize(check_out)
    if start is None or end is None:
        return 0
    return max((end - start).days, 0)


def iter_nights(start: datetime.date, end: datetime.date) -> Iterator[datetime.date]:
    """Every day from start up to, but excluding, end."""
    current = start
    while current < end:
        yield current
        current += datetime.timedelta(days=1)
