from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from stayhub.models import ListingCategory


class ProposedBooking(BaseModel):
    """
    Handed to booking creation / payment.
    Dates are local YYYY-MM-DD strings so they survive a round trip
    through the date normalizer unchanged.
    """

    listing_id: str = Field(serialization_alias="listingId")
    check_in: Optional[str] = Field(default=None, serialization_alias="checkIn")
    check_out: Optional[str] = Field(default=None, serialization_alias="checkOut")
    guests: int = 1
    nights: int = 0
    category: str = ListingCategory.HOME.value


class QuoteOut(BaseModel):
    unit_price: Decimal
    unit_count: int
    guests: int
    subtotal: Decimal
    promo_discount: Decimal = Decimal("0")
    service_fee: Decimal
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class BookingDraftRequest(BaseModel):
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    guests: int = 1


class BookingDraftOut(BaseModel):
    booking: ProposedBooking
    quote: QuoteOut
