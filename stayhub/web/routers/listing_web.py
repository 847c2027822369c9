from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.core.messages import messages
from stayhub.database import get_db
from stayhub.domain.calendar import get_month_dates
from stayhub.schemas.booking import BookingDraftOut, BookingDraftRequest, QuoteOut
from stayhub.schemas.listing import AvailabilityOut
from stayhub.services.availability_service import AvailabilityService, ListingSnapshot
from stayhub.services.booking_service import booking_service

router = APIRouter(prefix="/api/listings", tags=["listings"])


async def _snapshot_or_404(db: AsyncSession, listing_id: str) -> ListingSnapshot:
    snapshot = await AvailabilityService.load_snapshot(db, listing_id)
    if snapshot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")
    return snapshot


@router.get("/{listing_id}/availability", response_model=AvailabilityOut)
async def listing_availability(
    listing_id: str,
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: AsyncSession = Depends(get_db),
):
    """
    Unavailable and past days of one month, for rendering a calendar.
    Defaults to the current month.
    """
    snapshot = await _snapshot_or_404(db, listing_id)
    availability = snapshot.availability
    year = year or availability.today.year
    month = month or availability.today.month

    days = get_month_dates(year, month)
    return AvailabilityOut(
        listing_id=listing_id,
        year=year,
        month=month,
        unavailable=[day for day in days if availability.is_unavailable(day)],
        past=[day for day in days if availability.is_past(day)],
        skipped_reservations=availability.skipped_reservations,
    )


@router.post("/{listing_id}/booking-draft", response_model=BookingDraftOut)
async def create_booking_draft(
    listing_id: str,
    payload: BookingDraftRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Validate the picked dates against the current snapshot and price them.
    The result is what the payment step receives; nothing is stored.
    """
    snapshot = await _snapshot_or_404(db, listing_id)

    draft = booking_service.prepare_booking(
        listing_id,
        snapshot.listing,
        snapshot.availability,
        check_in=payload.check_in,
        check_out=payload.check_out,
        guests=payload.guests,
    )
    if not draft.ok:
        raise HTTPException(
            status_code=422,
            detail={"reason": draft.reason.value, "message": messages.reason(draft.reason)},
        )

    return BookingDraftOut(
        booking=draft.booking,
        quote=QuoteOut.model_validate(draft.quote),
    )
