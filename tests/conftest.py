"""
Pytest configuration for StayHub tests
"""
import pytest
import sys
from datetime import date
from pathlib import Path

# Ensure stayhub is importable
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def today():
    """Fixed 'today' so past-day checks do not depend on the run date"""
    return date(2025, 1, 1)


@pytest.fixture
def sample_listing():
    """Home listing as stored by the host UI"""
    return {
        "id": "listing-1",
        "rate": 1000,
        "discount": 20,
        "category": "home",
        "guests": 4,
        "blackoutDates": ["2025-12-25"],
    }


@pytest.fixture
def sample_reservations():
    """Reservations on the sample listing, mixed statuses"""
    return [
        {"checkIn": "2025-06-01", "checkOut": "2025-06-05", "status": "confirmed"},
        {"checkIn": "2025-07-10", "checkOut": "2025-07-12", "status": "cancelled"},
        {"checkIn": "2025-08-01", "checkOut": "2025-08-03", "status": "pending"},
    ]
