import logging
from dataclasses import dataclass
from typing import Any, Optional

from stayhub.core.config import settings
from stayhub.domain.availability import AvailabilityIndex
from stayhub.domain.dates import calculate_nights, format_local_date, normalize
from stayhub.domain.pricing import RateQuote, evaluate_promo, quote
from stayhub.domain.validation import RangeReason, validate_range
from stayhub.models import ListingCategory
from stayhub.schemas.booking import ProposedBooking
from stayhub.schemas.listing import ListingRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingDraft:
    booking: Optional[ProposedBooking] = None
    quote: Optional[RateQuote] = None
    reason: Optional[RangeReason] = None
    promo_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.booking is not None


class BookingService:
    """Turns a picked range into the booking handed to payment."""

    @staticmethod
    def clamp_guests(listing: ListingRecord, guests: Optional[int]) -> int:
        max_guests = listing.guests or settings.default_max_guests
        return min(max(int(guests or 1), 1), max_guests)

    def prepare_booking(
        self,
        listing_id: str,
        listing: ListingRecord,
        availability: AvailabilityIndex,
        check_in: Any = None,
        check_out: Any = None,
        guests: Optional[int] = 1,
        coupon: Any = None,
    ) -> BookingDraft:
        """
        Validate the stay and price it.

        Homes need a valid range. Services and experiences are booked per
        guest; their dates are passed through when given but not required.

        Note: availability is the snapshot loaded with the listing. Nothing
        here stops a concurrent client booking the same nights; the booking
        creation side has to recheck.
        """
        guests = self.clamp_guests(listing, guests)
        is_home = listing.category == ListingCategory.HOME.value

        if is_home and (check_in or check_out):
            if normalize(check_in) == normalize(check_out) and normalize(check_in) is not None:
                return BookingDraft(reason=RangeReason.SAME_DAY_CHECKOUT)

            check = validate_range(check_in, check_out, availability)
            if not check.valid:
                logger.info(
                    f"Booking draft rejected for listing {listing_id}: {check.reason.value}"
                )
                return BookingDraft(reason=check.reason)

        nights = calculate_nights(check_in, check_out) if is_home else 0

        rate_quote = quote(listing.rate, listing.discount, listing.category, nights, guests)

        promo_error = None
        if coupon is not None:
            promo = evaluate_promo(coupon, listing_id, rate_quote.subtotal)
            if promo.valid:
                rate_quote = quote(
                    listing.rate,
                    listing.discount,
                    listing.category,
                    nights,
                    guests,
                    promo_discount=promo.discount_amount,
                )
            else:
                promo_error = promo.reason

        booking = ProposedBooking(
            listing_id=listing_id,
            check_in=format_local_date(check_in),
            check_out=format_local_date(check_out),
            guests=guests,
            nights=nights,
            category=listing.category or ListingCategory.HOME.value,
        )
        return BookingDraft(booking=booking, quote=rate_quote, promo_error=promo_error)


booking_service = BookingService()
