import datetime
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from stayhub.domain.availability import AvailabilityIndex
from stayhub.domain.dates import iter_nights, normalize

logger = logging.getLogger(__name__)


class RangeReason(str, Enum):
    INVALID_DATE = "invalid-date"
    CHECKOUT_NOT_AFTER_CHECKIN = "checkout-not-after-checkin"
    SAME_DAY_CHECKOUT = "checkout-same-as-checkin"
    UNAVAILABLE_DATE = "range-contains-unavailable-date"


@dataclass(frozen=True)
class RangeCheck:
    valid: bool
    reason: Optional[RangeReason] = None
    conflict_day: Optional[datetime.date] = None

    def __bool__(self) -> bool:
        return self.valid


VALID = RangeCheck(valid=True)


def validate_range(start: Any, end: Any, availability: AvailabilityIndex) -> RangeCheck:
    """
    Check a proposed check-in / check-out pair.

    Only the nights actually slept are checked: the checkout day itself may be
    blocked (another guest arriving, a blackout) without invalidating the stay.
    """
    check_in = normalize(start)
    check_out = normalize(end)
    if check_in is None or check_out is None:
        return RangeCheck(valid=False, reason=RangeReason.INVALID_DATE)

    if check_out <= check_in:
        return RangeCheck(valid=False, reason=RangeReason.CHECKOUT_NOT_AFTER_CHECKIN)

    for night in iter_nights(check_in, check_out):
        if availability.is_unavailable(night):
            logger.info(
                f"Range {check_in.isoformat()} - {check_out.isoformat()} "
                f"blocked by {night.isoformat()}"
            )
            return RangeCheck(
                valid=False,
                reason=RangeReason.UNAVAILABLE_DATE,
                conflict_day=night,
            )

    return VALID
