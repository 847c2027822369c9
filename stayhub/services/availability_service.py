import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.domain.availability import AvailabilityIndex, build_availability
from stayhub.models import ACTIVE_RESERVATION_STATUSES, Listing, Reservation
from stayhub.schemas.listing import ListingRecord, ReservationRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingSnapshot:
    """Listing plus its availability, as loaded at one point in time."""

    listing: ListingRecord
    availability: AvailabilityIndex


class AvailabilityService:
    @staticmethod
    async def get_listing(db: AsyncSession, listing_id: str) -> Optional[ListingRecord]:
        result = await db.execute(select(Listing).where(Listing.id == listing_id))
        listing = result.scalar_one_or_none()
        if listing is None:
            return None
        return ListingRecord.model_validate(listing)

    @staticmethod
    async def get_active_reservations(
        db: AsyncSession, listing_id: str
    ) -> List[ReservationRecord]:
        """
        Reservations holding nights on a listing.

        Falls back to an unfiltered query when the status filter fails and to
        an empty list when reading fails entirely (no known occupancy).
        """
        try:
            result = await db.execute(
                select(Reservation).where(
                    Reservation.listing_id == listing_id,
                    Reservation.status.in_(sorted(ACTIVE_RESERVATION_STATUSES)),
                )
            )
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.warning(f"Status-filtered reservation query failed, fetching all: {e}")
            try:
                await db.rollback()
                result = await db.execute(
                    select(Reservation).where(Reservation.listing_id == listing_id)
                )
                rows = result.scalars().all()
            except SQLAlchemyError as e2:
                logger.error(f"Error fetching reservations for listing {listing_id}: {e2}")
                return []

        return [ReservationRecord.model_validate(row) for row in rows]

    @staticmethod
    async def load_snapshot(db: AsyncSession, listing_id: str) -> Optional[ListingSnapshot]:
        listing = await AvailabilityService.get_listing(db, listing_id)
        if listing is None:
            logger.info(f"Listing {listing_id} not found")
            return None

        reservations = await AvailabilityService.get_active_reservations(db, listing_id)
        availability = build_availability(listing, reservations)

        if availability.skipped_reservations:
            logger.warning(
                f"Listing {listing_id}: {availability.skipped_reservations} reservation(s) "
                f"ignored because of unparseable dates"
            )

        return ListingSnapshot(listing=listing, availability=availability)
