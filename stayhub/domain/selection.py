"""
Two-click check-in / check-out picker.

The first click picks the check-in day, the second the checkout. Clicking a
day before the current check-in restarts the selection there instead of
failing, so an early first click can be corrected without clearing.
Hover only produces a preview and never touches the committed range.
"""

import datetime
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from stayhub.domain.availability import AvailabilityIndex
from stayhub.domain.dates import normalize
from stayhub.domain.validation import RangeReason, validate_range

logger = logging.getLogger(__name__)


class SelectionMode(str, Enum):
    PICKING_START = "picking_start"
    PICKING_END = "picking_end"


class SelectionState(str, Enum):
    EMPTY = "empty"
    AWAITING_END = "awaiting_end"
    COMPLETE = "complete"


class DayStyle(str, Enum):
    BLOCKED = "blocked"
    ENDPOINT = "endpoint"
    IN_RANGE = "in_range"
    IN_HOVER = "in_hover"
    PLAIN = "plain"


@dataclass(frozen=True)
class SelectionOutcome:
    accepted: bool
    reason: Optional[RangeReason] = None
    conflict_day: Optional[datetime.date] = None
    completed: bool = False


IGNORED = SelectionOutcome(accepted=False)


class RangeSelection:
    def __init__(self, availability: AvailabilityIndex):
        self.availability = availability
        self.start: Optional[datetime.date] = None
        self.end: Optional[datetime.date] = None
        self.mode = SelectionMode.PICKING_START
        self.hover_day: Optional[datetime.date] = None
        self.is_open = False

    @property
    def state(self) -> SelectionState:
        if self.start is None:
            return SelectionState.EMPTY
        if self.end is None:
            return SelectionState.AWAITING_END
        return SelectionState.COMPLETE

    def as_range(self) -> Optional[tuple[datetime.date, datetime.date]]:
        if self.start is None or self.end is None:
            return None
        return self.start, self.end

    def open(self, mode: Optional[SelectionMode] = None) -> None:
        """Show the picker; pass PICKING_START to force a new check-in pick."""
        self.is_open = True
        if mode is not None:
            self.mode = mode

    def clear(self) -> None:
        self.start = None
        self.end = None
        self.hover_day = None
        self.mode = SelectionMode.PICKING_START

    def _restart_at(self, day: datetime.date) -> None:
        self.start = day
        self.end = None
        self.hover_day = None
        self.mode = SelectionMode.PICKING_END

    def click(self, raw_day: Any) -> SelectionOutcome:
        day = normalize(raw_day)
        if day is None:
            logger.warning(f"Invalid day clicked: {raw_day!r}")
            return IGNORED
        if self.availability.is_blocked(day):
            return IGNORED

        if self.mode == SelectionMode.PICKING_START or self.start is None:
            self._restart_at(day)
            return SelectionOutcome(accepted=True)

        if day < self.start:
            self._restart_at(day)
            return SelectionOutcome(accepted=True)

        if day == self.start:
            return SelectionOutcome(accepted=False, reason=RangeReason.SAME_DAY_CHECKOUT)

        check = validate_range(self.start, day, self.availability)
        if not check.valid:
            return SelectionOutcome(
                accepted=False,
                reason=check.reason,
                conflict_day=check.conflict_day,
            )

        self.end = day
        self.hover_day = None
        self.is_open = False
        return SelectionOutcome(accepted=True, completed=True)

    def hover(self, raw_day: Any) -> None:
        day = normalize(raw_day)
        if day is None or self.availability.is_blocked(day):
            self.hover_day = None
            return
        self.hover_day = day

    def leave(self) -> None:
        self.hover_day = None

    def in_range(self, day: datetime.date) -> bool:
        if self.start is None or self.end is None:
            return False
        return self.start <= day <= self.end

    def in_hover_range(self, day: datetime.date) -> bool:
        if self.state != SelectionState.AWAITING_END or self.hover_day is None:
            return False
        low, high = sorted((self.start, self.hover_day))
        return low <= day <= high

    def day_style(self, raw_day: Any) -> DayStyle:
        day = normalize(raw_day)
        if day is None or self.availability.is_blocked(day):
            return DayStyle.BLOCKED
        if day == self.start or day == self.end:
            return DayStyle.ENDPOINT
        if self.in_range(day):
            return DayStyle.IN_RANGE
        if self.in_hover_range(day):
            return DayStyle.IN_HOVER
        return DayStyle.PLAIN
