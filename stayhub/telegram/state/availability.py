from dataclasses import dataclass

from stayhub.domain.selection import RangeSelection
from stayhub.schemas.listing import ListingRecord


@dataclass
class PickerSession:
    listing_id: str
    listing: ListingRecord
    selection: RangeSelection
    year: int
    month: int


# user_id -> session
picker_sessions: dict[int, PickerSession] = {}
