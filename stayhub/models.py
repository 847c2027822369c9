import uuid
from datetime import datetime
from enum import Enum
from typing import Optional
from decimal import Decimal

from sqlalchemy import (
    JSON,
    String,
    Integer,
    DateTime,
    ForeignKey,
    Numeric,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stayhub.database import Base


class ListingCategory(str, Enum):
    HOME = "home"
    SERVICE = "service"
    EXPERIENCE = "experience"


class ReservationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    RESERVED = "reserved"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


# Reservations in these statuses hold their nights
ACTIVE_RESERVATION_STATUSES = frozenset(
    {
        ReservationStatus.PENDING.value,
        ReservationStatus.CONFIRMED.value,
        ReservationStatus.RESERVED.value,
    }
)


def _document_id() -> str:
    return uuid.uuid4().hex


class Listing(Base):
    __tablename__ = "listings"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_document_id)
    host_id: Mapped[Optional[str]] = mapped_column(String, index=True, nullable=True)
    title: Mapped[str] = mapped_column(String, default="")
    category: Mapped[str] = mapped_column(String, default=ListingCategory.HOME.value)

    # Pricing
    rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)
    discount: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=0)  # percent

    guests: Mapped[int] = mapped_column(Integer, default=0)  # max guests, 0 = default

    # Host-declared blackout days, stored as written by the host UI
    blackout_dates: Mapped[list] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    reservations: Mapped[list["Reservation"]] = relationship(back_populates="listing")


class Reservation(Base):
    __tablename__ = "reservations"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_document_id)

    listing_id: Mapped[str] = mapped_column(ForeignKey("listings.id"), index=True)
    listing: Mapped["Listing"] = relationship(back_populates="reservations")

    guest_id: Mapped[Optional[str]] = mapped_column(String, index=True, nullable=True)

    # Raw date values (YYYY-MM-DD or full ISO), normalized on read
    check_in: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    check_out: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    guests: Mapped[int] = mapped_column(Integer, default=1)

    # Plain string: legacy documents carry statuses outside ReservationStatus
    status: Mapped[str] = mapped_column(
        String, default=ReservationStatus.PENDING.value, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
