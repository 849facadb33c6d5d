# storefront/domain/pricing.py
"""
Silnik cenowy checkoutu.

Wszystkie kwoty sa liczbami calkowitymi w minor units (paise). Podatek i rabat
procentowy zaokraglamy ROUND_HALF_UP do pelnej jednostki minor.
Modul nie robi I/O - kupon jest wyszukiwany wczesniej i przekazywany jako CouponTerms.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

MINOR_PER_MAJOR = 100

# polityka sklepu (GST 18%, darmowa dostawa powyzej 1000 INR)
TAX_RATE = Decimal("0.18")
FREE_SHIPPING_THRESHOLD_MINOR = 1000 * MINOR_PER_MAJOR
SHIPPING_FEE_MINOR = 50 * MINOR_PER_MAJOR

PERCENTAGE = "percentage"
FIXED_AMOUNT = "fixed_amount"


@dataclass(frozen=True)
class LineItem:
    """Pozycja koszyka z aktualna cena i danymi wariantu (snapshot z bazy)."""

    cart_item_id: str
    product_id: str
    variant_id: str
    sku: str
    name: str
    weight_grams: int
    stock_qty: int
    quantity: int
    unit_price_minor: int
    list_price_minor: int
    gift_note: Optional[str] = None

    @property
    def line_total_minor(self) -> int:
        return self.unit_price_minor * self.quantity


@dataclass(frozen=True)
class CouponTerms:
    code: str
    kind: str
    value: Decimal
    max_discount_minor: Optional[int]
    is_active: bool
    valid_from: datetime
    valid_until: datetime


@dataclass(frozen=True)
class CouponApplied:
    code: str
    amount: int
    applied: bool = True


@dataclass(frozen=True)
class CouponRejected:
    code: str
    reason: str  # not_found, inactive, not_yet_valid, expired, unsupported_kind
    applied: bool = False


CouponOutcome = Union[CouponApplied, CouponRejected]


@dataclass(frozen=True)
class Totals:
    subtotal_minor: int
    tax_minor: int
    shipping_minor: int
    discount_minor: int
    total_minor: int
    coupon: Optional[CouponOutcome] = None


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _as_utc(moment: datetime) -> datetime:
    #sqlite zwraca naive datetime, traktujemy jako UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def compute_subtotal(lines: Iterable[LineItem]) -> int:
    return sum((line.line_total_minor for line in lines), 0)


def compute_tax(subtotal_minor: int) -> int:
    return round_half_up(Decimal(subtotal_minor) * TAX_RATE)


def compute_shipping(subtotal_minor: int) -> int:
    # scisle wieksze: dokladnie 1000 INR nadal placi za dostawe
    if subtotal_minor > FREE_SHIPPING_THRESHOLD_MINOR:
        return 0
    return SHIPPING_FEE_MINOR


def evaluate_coupon(
    code: str,
    terms: Optional[CouponTerms],
    subtotal_minor: int,
    now: datetime,
) -> CouponOutcome:
    """
    Ocena kuponu. Nigdy nie rzuca - zly kupon to po prostu brak rabatu.
    Brak max_discount_minor oznacza brak limitu (nie zero).
    """
    if terms is None:
        return CouponRejected(code=code, reason="not_found")

    if not terms.is_active:
        return CouponRejected(code=code, reason="inactive")

    now = _as_utc(now)
    if now < _as_utc(terms.valid_from):
        return CouponRejected(code=code, reason="not_yet_valid")
    if now > _as_utc(terms.valid_until):
        return CouponRejected(code=code, reason="expired")

    if terms.kind == PERCENTAGE:
        amount = round_half_up(Decimal(subtotal_minor) * Decimal(terms.value) / Decimal(100))
        if terms.max_discount_minor is not None:
            amount = min(amount, terms.max_discount_minor)
    elif terms.kind == FIXED_AMOUNT:
        amount = round_half_up(Decimal(terms.value))
    else:
        return CouponRejected(code=code, reason="unsupported_kind")

    #rabat nigdy ujemny i nigdy wiekszy niz subtotal
    amount = max(0, min(amount, subtotal_minor))
    return CouponApplied(code=terms.code, amount=amount)


def price_cart(
    lines: Iterable[LineItem],
    coupon_code: Optional[str] = None,
    coupon_terms: Optional[CouponTerms] = None,
    now: Optional[datetime] = None,
) -> Totals:
    now = now or datetime.now(timezone.utc)

    subtotal = compute_subtotal(lines)
    tax = compute_tax(subtotal)
    shipping = compute_shipping(subtotal)

    outcome = None
    discount = 0
    if coupon_code:
        outcome = evaluate_coupon(coupon_code, coupon_terms, subtotal, now)
        if isinstance(outcome, CouponApplied):
            discount = outcome.amount

    return Totals(
        subtotal_minor=subtotal,
        tax_minor=tax,
        shipping_minor=shipping,
        discount_minor=discount,
        total_minor=subtotal + tax + shipping - discount,
        coupon=outcome,
    )
