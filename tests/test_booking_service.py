"""
Unit tests for booking draft preparation
"""
import pytest
from datetime import date
from decimal import Decimal

from stayhub.domain.availability import build_availability
from stayhub.domain.validation import RangeReason
from stayhub.schemas.listing import ListingRecord
from stayhub.services.booking_service import BookingService, booking_service


@pytest.fixture
def listing(sample_listing):
    return ListingRecord.model_validate(sample_listing)


@pytest.fixture
def availability(sample_listing, sample_reservations, today):
    return build_availability(sample_listing, sample_reservations, today=today)


class TestPrepareBooking:
    def test_valid_stay(self, listing, availability):
        draft = booking_service.prepare_booking(
            "listing-1", listing, availability,
            check_in=date(2025, 6, 5), check_out=date(2025, 6, 8), guests=2,
        )

        assert draft.ok
        assert draft.booking.check_in == "2025-06-05"
        assert draft.booking.check_out == "2025-06-08"
        assert draft.booking.nights == 3
        assert draft.booking.category == "home"
        assert draft.quote.total == Decimal("5040")

    def test_serializes_with_camel_case(self, listing, availability):
        draft = booking_service.prepare_booking(
            "listing-1", listing, availability,
            check_in="2025-06-05", check_out="2025-06-06",
        )
        payload = draft.booking.model_dump(by_alias=True)

        assert payload["listingId"] == "listing-1"
        assert payload["checkIn"] == "2025-06-05"
        assert payload["checkOut"] == "2025-06-06"

    def test_overlapping_stay_rejected(self, listing, availability):
        draft = booking_service.prepare_booking(
            "listing-1", listing, availability,
            check_in="2025-06-04", check_out="2025-06-06",
        )

        assert not draft.ok
        assert draft.reason == RangeReason.UNAVAILABLE_DATE

    def test_same_day_rejected(self, listing, availability):
        draft = booking_service.prepare_booking(
            "listing-1", listing, availability,
            check_in="2025-09-01", check_out="2025-09-01",
        )
        assert draft.reason == RangeReason.SAME_DAY_CHECKOUT

    def test_missing_checkout_rejected(self, listing, availability):
        draft = booking_service.prepare_booking(
            "listing-1", listing, availability, check_in="2025-09-01",
        )
        assert draft.reason == RangeReason.INVALID_DATE

    def test_home_without_dates_quotes_base_rate(self, listing, availability):
        draft = booking_service.prepare_booking("listing-1", listing, availability)

        assert draft.ok
        assert draft.booking.check_in is None
        assert draft.booking.nights == 0
        assert draft.quote.subtotal == Decimal("800")

    def test_service_needs_no_dates(self, availability):
        service = ListingRecord(rate=500, discount=0, category="service", guests=5)
        draft = booking_service.prepare_booking("svc-1", service, availability, guests=3)

        assert draft.ok
        assert draft.quote.total == Decimal("1575")

    def test_valid_promo_lowers_total(self, listing, availability):
        coupon = {"code": "TEN", "active": True, "discount": 10, "discountType": "percentage"}
        draft = booking_service.prepare_booking(
            "listing-1", listing, availability,
            check_in="2025-06-05", check_out="2025-06-08", guests=2, coupon=coupon,
        )

        assert draft.quote.promo_discount == Decimal("480")
        assert draft.quote.total == Decimal("4536")
        assert draft.promo_error is None

    def test_rejected_promo_keeps_price(self, listing, availability):
        coupon = {"code": "OLD", "active": False, "discount": 10}
        draft = booking_service.prepare_booking(
            "listing-1", listing, availability,
            check_in="2025-06-05", check_out="2025-06-08", guests=2, coupon=coupon,
        )

        assert draft.quote.total == Decimal("5040")
        assert "no longer active" in draft.promo_error

    def test_unreadable_promo_keeps_price(self, listing, availability):
        coupon = {"code": "BAD", "active": True, "discount": 10, "minPurchase": "abc"}
        draft = booking_service.prepare_booking(
            "listing-1", listing, availability,
            check_in="2025-06-05", check_out="2025-06-08", guests=2, coupon=coupon,
        )

        assert draft.ok
        assert draft.quote.total == Decimal("5040")
        assert "cannot be applied" in draft.promo_error


class TestGuestClamp:
    @pytest.mark.parametrize("guests, expected", [(0, 1), (None, 1), (3, 3), (9, 4)])
    def test_clamped_to_listing_capacity(self, listing, guests, expected):
        assert BookingService.clamp_guests(listing, guests) == expected

    def test_default_capacity(self):
        assert BookingService.clamp_guests(ListingRecord(guests=0), 50) == 10
