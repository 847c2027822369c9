import datetime
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from stayhub.domain.dates import iter_nights, normalize, today as local_today
from stayhub.models import ACTIVE_RESERVATION_STATUSES

logger = logging.getLogger(__name__)

# Field names used by listing / reservation documents over time
BLACKOUT_FIELDS = ("blackout_dates", "blackoutDates", "unavailableDates")
CHECK_IN_FIELDS = ("check_in", "checkIn")
CHECK_OUT_FIELDS = ("check_out", "checkOut")


def _field(record: Any, names: Iterable[str]) -> Any:
    """Read the first present field from a mapping or an attribute object."""
    for name in names:
        if isinstance(record, Mapping):
            if record.get(name) is not None:
                return record[name]
        else:
            value = getattr(record, name, None)
            if value is not None:
                return value
    return None


def _status(reservation: Any) -> str:
    status = _field(reservation, ("status",))
    if status is None:
        return ""
    # str-based enums carry their value
    return str(getattr(status, "value", status)).lower()


@dataclass(frozen=True)
class AvailabilityIndex:
    blackout: frozenset[datetime.date]
    occupied: frozenset[datetime.date]
    today: datetime.date
    skipped_reservations: int = 0

    @property
    def unavailable(self) -> frozenset[datetime.date]:
        return self.blackout | self.occupied

    def is_unavailable(self, day: Any) -> bool:
        normalized = normalize(day)
        if normalized is None:
            return True
        return normalized in self.blackout or normalized in self.occupied

    def is_past(self, day: Any) -> bool:
        normalized = normalize(day)
        if normalized is None:
            return True
        return normalized < self.today

    def is_blocked(self, day: Any) -> bool:
        return self.is_past(day) or self.is_unavailable(day)


def occupied_nights(reservation: Any) -> Optional[frozenset[datetime.date]]:
    """
    Nights taken by a reservation: check-in inclusive, checkout exclusive.
    None when either end cannot be parsed.
    """
    check_in = normalize(_field(reservation, CHECK_IN_FIELDS))
    check_out = normalize(_field(reservation, CHECK_OUT_FIELDS))
    if check_in is None or check_out is None:
        return None
    return frozenset(iter_nights(check_in, check_out))


def build_availability(
    listing: Any,
    reservations: Optional[Iterable[Any]] = None,
    today: Optional[datetime.date] = None,
) -> AvailabilityIndex:
    """
    Merge host blackout dates with the nights of active reservations.

    A missing or empty reservation list means no known occupancy.
    """
    blackout: set[datetime.date] = set()
    for raw in _field(listing, BLACKOUT_FIELDS) or []:
        day = normalize(raw)
        if day is None:
            logger.warning(f"Dropping unparseable blackout date: {raw!r}")
            continue
        blackout.add(day)

    occupied: set[datetime.date] = set()
    skipped = 0
    for reservation in reservations or []:
        if _status(reservation) not in ACTIVE_RESERVATION_STATUSES:
            continue
        nights = occupied_nights(reservation)
        if nights is None:
            skipped += 1
            logger.warning(
                f"Skipping reservation with unparseable dates: "
                f"{_field(reservation, CHECK_IN_FIELDS)!r} - "
                f"{_field(reservation, CHECK_OUT_FIELDS)!r}"
            )
            continue
        occupied.update(nights)

    return AvailabilityIndex(
        blackout=frozenset(blackout),
        occupied=frozenset(occupied),
        today=today or local_today(),
        skipped_reservations=skipped,
    )


def reservations_on_day(reservations: Iterable[Any], day: Any) -> list[Any]:
    """
    Reservations covering a day on the host calendar.

    Stays cover check-in up to the night before checkout; bookings without a
    checkout (services, experiences) show on their check-in day only.
    """
    target = normalize(day)
    if target is None:
        return []

    matches = []
    for reservation in reservations:
        check_in = normalize(_field(reservation, CHECK_IN_FIELDS))
        if check_in is None:
            continue
        raw_check_out = _field(reservation, CHECK_OUT_FIELDS)
        if raw_check_out is None:
            if check_in == target:
                matches.append(reservation)
            continue
        check_out = normalize(raw_check_out)
        if check_out is not None and check_in <= target < check_out:
            matches.append(reservation)
    return matches
