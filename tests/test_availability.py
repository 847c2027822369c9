"""
Unit tests for the availability index (blackouts + occupied nights)
"""
import pytest
from datetime import date, timedelta

from stayhub.domain.availability import (
    build_availability,
    occupied_nights,
    reservations_on_day,
)
from stayhub.models import ReservationStatus
from stayhub.schemas.listing import ListingRecord, ReservationRecord


class TestOccupiedNights:
    """Checkout day is never occupied"""

    @pytest.mark.parametrize("k", [1, 2, 5, 31])
    def test_reservation_occupies_checkin_to_night_before_checkout(self, k):
        d0 = date(2025, 6, 1)
        reservation = {"checkIn": d0.isoformat(), "checkOut": (d0 + timedelta(days=k)).isoformat()}

        nights = occupied_nights(reservation)

        assert nights == {d0 + timedelta(days=i) for i in range(k)}
        assert d0 + timedelta(days=k) not in nights

    def test_unparseable_reservation(self):
        assert occupied_nights({"checkIn": "soon", "checkOut": "2025-06-05"}) is None


class TestBuildAvailability:
    def test_blackout_and_occupied_are_merged(self, sample_listing, sample_reservations, today):
        availability = build_availability(sample_listing, sample_reservations, today=today)

        assert availability.is_unavailable("2025-12-25")
        assert availability.is_unavailable("2025-06-01")
        assert availability.is_unavailable("2025-06-04")
        assert not availability.is_unavailable("2025-06-05")
        assert availability.unavailable == availability.blackout | availability.occupied

    def test_only_active_statuses_occupy(self, sample_listing, sample_reservations, today):
        availability = build_availability(sample_listing, sample_reservations, today=today)

        # cancelled
        assert not availability.is_unavailable("2025-07-10")
        # pending
        assert availability.is_unavailable("2025-08-01")

    @pytest.mark.parametrize("status", ["pending", "confirmed", "reserved", ReservationStatus.RESERVED])
    def test_active_statuses(self, status, today):
        reservations = [{"checkIn": "2025-03-01", "checkOut": "2025-03-02", "status": status}]
        availability = build_availability({}, reservations, today=today)
        assert availability.is_unavailable(date(2025, 3, 1))

    @pytest.mark.parametrize("status", ["completed", "cancelled", "rejected", "", None])
    def test_inactive_statuses(self, status, today):
        reservations = [{"checkIn": "2025-03-01", "checkOut": "2025-03-02", "status": status}]
        availability = build_availability({}, reservations, today=today)
        assert not availability.is_unavailable(date(2025, 3, 1))

    def test_unparseable_blackout_is_dropped(self, today):
        availability = build_availability(
            {"blackout_dates": ["2025-05-01", "someday", None]}, [], today=today
        )
        assert availability.blackout == {date(2025, 5, 1)}

    def test_unparseable_reservation_is_skipped_and_counted(self, today, caplog):
        reservations = [
            {"checkIn": "2025-03-01", "checkOut": "???", "status": "confirmed"},
            {"checkIn": "2025-04-01", "checkOut": "2025-04-03", "status": "confirmed"},
        ]
        with caplog.at_level("WARNING"):
            availability = build_availability({}, reservations, today=today)

        assert availability.skipped_reservations == 1
        assert availability.occupied == {date(2025, 4, 1), date(2025, 4, 2)}
        assert "Skipping reservation" in caplog.text

    @pytest.mark.parametrize("reservations", [None, []])
    def test_no_reservations_means_no_occupancy(self, sample_listing, reservations, today):
        availability = build_availability(sample_listing, reservations, today=today)
        assert availability.occupied == frozenset()
        assert availability.blackout == {date(2025, 12, 25)}

    def test_original_unavailable_dates_field(self, today):
        availability = build_availability({"unavailableDates": ["2025-02-14"]}, [], today=today)
        assert availability.is_unavailable("2025-02-14")

    def test_accepts_pydantic_records(self, today):
        listing = ListingRecord.model_validate({"blackoutDates": ["2025-02-14"]})
        reservations = [
            ReservationRecord.model_validate(
                {"checkIn": "2025-02-20", "checkOut": "2025-02-22", "status": "reserved"}
            )
        ]
        availability = build_availability(listing, reservations, today=today)

        assert availability.is_unavailable("2025-02-14")
        assert availability.is_unavailable("2025-02-21")
        assert not availability.is_unavailable("2025-02-22")


class TestDayChecks:
    def test_past_days(self, today):
        availability = build_availability({}, [], today=today)
        assert availability.is_past(date(2024, 12, 31))
        assert not availability.is_past(today)
        assert availability.is_blocked(date(2024, 12, 31))

    def test_unparseable_day_fails_closed(self, today):
        availability = build_availability({}, [], today=today)
        assert availability.is_unavailable("nope")
        assert availability.is_past("nope")


class TestReservationsOnDay:
    """Host calendar: which bookings cover a given day"""

    def test_stay_covers_nights_only(self):
        stay = {"checkIn": "2025-06-01", "checkOut": "2025-06-03"}
        assert reservations_on_day([stay], "2025-06-01") == [stay]
        assert reservations_on_day([stay], "2025-06-02") == [stay]
        assert reservations_on_day([stay], "2025-06-03") == []

    def test_booking_without_checkout_shows_on_checkin_day(self):
        experience = {"checkIn": "2025-06-10"}
        assert reservations_on_day([experience], "2025-06-10") == [experience]
        assert reservations_on_day([experience], "2025-06-11") == []

    def test_invalid_day(self):
        assert reservations_on_day([{"checkIn": "2025-06-10"}], "bad") == []
