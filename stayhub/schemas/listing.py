from datetime import date
from decimal import Decimal
from typing import Any, List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from stayhub.models import ListingCategory


class ListingRecord(BaseModel):
    """Listing fields the booking core reads."""

    id: Optional[str] = None
    rate: Optional[Decimal] = Decimal("0")
    discount: Optional[Decimal] = Decimal("0")
    category: str = ListingCategory.HOME.value
    guests: Optional[int] = 0
    # Raw values: strings, dates or store timestamps
    blackout_dates: List[Any] = Field(
        default_factory=list,
        validation_alias=AliasChoices("blackout_dates", "blackoutDates", "unavailableDates"),
    )

    model_config = ConfigDict(from_attributes=True, arbitrary_types_allowed=True)


class ReservationRecord(BaseModel):
    id: Optional[str] = None
    check_in: Any = Field(default=None, validation_alias=AliasChoices("check_in", "checkIn"))
    check_out: Any = Field(default=None, validation_alias=AliasChoices("check_out", "checkOut"))
    status: str = ""

    model_config = ConfigDict(from_attributes=True, arbitrary_types_allowed=True)


class AvailabilityOut(BaseModel):
    listing_id: str
    year: int
    month: int
    unavailable: List[date]
    past: List[date]
    skipped_reservations: int = 0
