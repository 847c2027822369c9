from typing import Optional

from stayhub.domain.validation import RangeReason


class Messages:
    """
    Centralized store for user-facing messages.
    """

    REASONS = {
        RangeReason.INVALID_DATE: "Invalid date format. Please select dates again.",
        RangeReason.CHECKOUT_NOT_AFTER_CHECKIN: "Check-out date must be after check-in date.",
        RangeReason.SAME_DAY_CHECKOUT: "Check-out date must be at least 1 day after check-in date.",
        RangeReason.UNAVAILABLE_DATE: "Selected range contains unavailable dates. Please select a different range.",
    }

    PICK_CHECK_IN = "📅 <b>Select check-in date</b>"
    PICK_CHECK_OUT = "📅 <b>Select check-out date</b>"
    LISTING_NOT_FOUND = "❌ Listing not found"
    SESSION_EXPIRED = "Please start the date selection again"

    def reason(self, reason: Optional[RangeReason]) -> str:
        if reason is None:
            return ""
        return self.REASONS.get(reason, "Please select different dates.")

    def check_out_prompt(self, check_in: str) -> str:
        return f"{self.PICK_CHECK_OUT}\n\nCheck-in: {check_in}"


messages = Messages()
