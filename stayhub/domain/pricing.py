import datetime
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional, Tuple

from stayhub.core.config import settings
from stayhub.domain.dates import local_zone, normalize
from stayhub.models import ListingCategory

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
WHOLE = Decimal("1")


def _decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_amount(value: Decimal) -> Decimal:
    """Whole currency units, halves rounded up."""
    return value.quantize(WHOLE, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class RateQuote:
    unit_price: Decimal
    unit_count: int
    guests: int
    subtotal: Decimal
    promo_discount: Decimal
    service_fee: Decimal
    total: Decimal


def effective_unit_price(rate: Any, discount_percent: Any = None) -> Decimal:
    price = max(_decimal(rate), ZERO)
    discount = _decimal(discount_percent)
    if discount <= ZERO:
        return price
    discount = min(discount, HUNDRED)
    return price * (1 - discount / HUNDRED)


def quote(
    rate: Any,
    discount_percent: Any,
    category: Any,
    nights: int,
    guests: int,
    promo_discount: Any = None,
    fee_rate: Optional[float] = None,
) -> RateQuote:
    """
    Price a stay or a per-guest booking.

    Homes are priced per night and guest; without nights (no dates picked
    yet) the quote falls back to the base nightly rate. Services and
    experiences are priced per guest. Only the fee and the total are rounded.
    """
    unit_price = effective_unit_price(rate, discount_percent)
    nights = max(int(nights or 0), 0)
    guests = max(int(guests or 1), 1)

    if str(getattr(category, "value", category)) == ListingCategory.HOME.value:
        unit_count = nights
        subtotal = unit_price * nights * guests if nights > 0 else unit_price
    else:
        unit_count = guests
        subtotal = unit_price * guests

    promo = min(max(_decimal(promo_discount), ZERO), subtotal)
    payable = subtotal - promo

    rate_value = settings.service_fee_rate if fee_rate is None else fee_rate
    service_fee = round_amount(payable * _decimal(rate_value))
    total = payable + service_fee

    return RateQuote(
        unit_price=unit_price,
        unit_count=unit_count,
        guests=guests,
        subtotal=subtotal,
        promo_discount=promo,
        service_fee=service_fee,
        total=total,
    )


# -------------------------------------------------
# Promo codes
# -------------------------------------------------


@dataclass(frozen=True)
class PromoResult:
    valid: bool
    discount_amount: Decimal = ZERO
    reason: Optional[str] = None


def _field(coupon: Any, *names: str) -> Any:
    for name in names:
        value = coupon.get(name) if isinstance(coupon, dict) else getattr(coupon, name, None)
        if value is not None:
            return value
    return None


def _localize(value: datetime.datetime) -> datetime.datetime:
    """Naive values are wall-clock times in the configured (or host) zone."""
    if value.tzinfo is not None:
        return value
    zone = local_zone()
    return value.replace(tzinfo=zone) if zone else value.astimezone()


def _as_datetime(raw: Any) -> Optional[datetime.datetime]:
    if isinstance(raw, datetime.datetime):
        return _localize(raw)
    day = normalize(raw)
    if day is None:
        return None
    return _localize(datetime.datetime.combine(day, datetime.time.min))


def _coupon_numbers(coupon: Any) -> Tuple[Decimal, int, int, Decimal]:
    min_purchase = _decimal(_field(coupon, "min_purchase", "minPurchase"))
    max_uses = int(_field(coupon, "max_uses", "maxUses") or 0)
    usage_count = int(_field(coupon, "usage_count", "usageCount") or 0)
    value = _decimal(_field(coupon, "discount"))
    if not (min_purchase.is_finite() and value.is_finite()):
        raise InvalidOperation("non-finite coupon amount")
    return min_purchase, max_uses, usage_count, value


def evaluate_promo(
    coupon: Any,
    listing_id: Optional[str],
    subtotal: Any,
    now: Optional[datetime.datetime] = None,
) -> PromoResult:
    """Check a host coupon against a booking subtotal and compute the discount."""
    now = _localize(now or datetime.datetime.now(datetime.timezone.utc))
    amount = max(_decimal(subtotal), ZERO)

    if not _field(coupon, "active"):
        return PromoResult(valid=False, reason="This promo code is no longer active")

    valid_from = _as_datetime(_field(coupon, "valid_from", "validFrom"))
    if valid_from is not None and now < valid_from:
        return PromoResult(valid=False, reason="This promo code is not yet valid")

    valid_until = _as_datetime(_field(coupon, "valid_until", "validUntil"))
    if valid_until is not None and now > valid_until:
        return PromoResult(valid=False, reason="This promo code has expired")

    try:
        min_purchase, max_uses, usage_count, value = _coupon_numbers(coupon)
    except (InvalidOperation, TypeError, ValueError, OverflowError) as e:
        logger.warning(f"Promo {_field(coupon, 'code')!r} has unreadable amounts: {e}")
        return PromoResult(valid=False, reason="This promo code cannot be applied")

    if min_purchase > ZERO and amount < min_purchase:
        return PromoResult(
            valid=False,
            reason=f"Minimum purchase of {min_purchase:,.0f} required",
        )

    if max_uses and usage_count >= max_uses:
        return PromoResult(valid=False, reason="This promo code has reached its usage limit")

    coupon_listing = _field(coupon, "listing_id", "listingId")
    if coupon_listing and coupon_listing != listing_id:
        return PromoResult(valid=False, reason="This promo code is not valid for this listing")

    value = max(value, ZERO)
    if _field(coupon, "discount_type", "discountType") == "percentage":
        discount_amount = amount * min(value, HUNDRED) / HUNDRED
    else:
        discount_amount = min(value, amount)

    logger.info(f"Promo {_field(coupon, 'code')!r} accepted, discount {discount_amount}")
    return PromoResult(valid=True, discount_amount=discount_amount)
