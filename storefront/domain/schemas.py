# storefront/domain/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Na zewnatrz camelCase (jak front sklepu), w Pythonie snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =====================================================
# REQUESTS
# =====================================================
class CheckoutIn(CamelModel):
    """Schema dla zlozenia zamowienia."""

    shipping_address_id: str = Field(..., description="ID adresu dostawy")
    billing_address_id: str = Field(..., description="ID adresu rozliczeniowego")
    payment_method: Optional[str] = None
    coupon_code: Optional[str] = None

    @field_validator("shipping_address_id")
    @classmethod
    def _shipping_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Shipping address is required")
        return v

    @field_validator("billing_address_id")
    @classmethod
    def _billing_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Billing address is required")
        return v


class CheckoutPreviewIn(CamelModel):
    coupon_code: Optional[str] = None


class CartItemIn(CamelModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., min_length=1, description="ID produktu")
    variant_id: str = Field(..., min_length=1, description="ID wariantu")
    quantity: int = Field(..., ge=1, description="Ilosc (musi byc >= 1)")
    gift_note: Optional[str] = None


class CartItemUpdate(CamelModel):
    """quantity == 0 usuwa pozycje."""

    quantity: int = Field(..., ge=0)
    gift_note: Optional[str] = None


class WishlistItemIn(CamelModel):
    product_id: str = Field(..., min_length=1, description="ID produktu")
    variant_id: Optional[str] = None


class QuoteItemIn(CamelModel):
    product_id: str = Field(..., min_length=1, description="ID produktu")
    variant_id: str = Field(..., min_length=1, description="ID wariantu")
    quantity: int = Field(..., ge=1, description="Ilosc (musi byc >= 1)")


class QuoteIn(CamelModel):
    """Zapytanie ofertowe B2B: lista pozycji + opcjonalna notatka."""

    items: List[QuoteItemIn] = Field(..., min_length=1)
    notes: Optional[str] = Field(None, max_length=2000)


# =====================================================
# RESPONSES
# =====================================================
class ProductSummaryOut(CamelModel):
    id: str
    name: str
    slug: str
    origin: Optional[str] = None


class VariantOut(CamelModel):
    id: str
    sku: str
    name: str
    price_minor: int
    list_price_minor: int
    weight_grams: int
    stock_qty: int


class CartItemOut(CamelModel):
    id: str
    product_id: str
    variant_id: str
    quantity: int
    gift_note: Optional[str] = None
    created_at: datetime
    product: ProductSummaryOut
    variant: VariantOut


class CartSummaryOut(CamelModel):
    subtotal: int
    total_items: int
    total_weight: int
    item_count: int


class CartOut(CamelModel):
    items: List[CartItemOut]
    summary: CartSummaryOut


class CouponOutcomeOut(CamelModel):
    code: str
    applied: bool
    amount: int = 0
    reason: Optional[str] = None


class TotalsOut(CamelModel):
    subtotal_minor: int
    tax_minor: int
    shipping_minor: int
    discount_minor: int
    total_minor: int
    coupon: Optional[CouponOutcomeOut] = None


class CheckoutOut(CamelModel):
    order_id: str
    order_number: str


class OrderItemOut(CamelModel):
    product_id: str
    variant_id: str
    sku: str
    name: str
    weight_grams: int
    quantity: int
    unit_price_minor: int
    line_total_minor: int
    gift_note: Optional[str] = None


class OrderOut(CamelModel):
    id: str
    order_number: str
    user_id: str
    status: str
    payment_status: str
    payment_method: Optional[str] = None
    shipping_address_id: str
    billing_address_id: str
    subtotal_minor: int
    tax_minor: int
    shipping_minor: int
    discount_minor: int
    total_minor: int
    coupon_code: Optional[str] = None
    created_at: datetime
    items: List[OrderItemOut]


class PaginationOut(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class OrderListOut(CamelModel):
    orders: List[OrderOut]
    pagination: PaginationOut


class OrderDetailOut(CamelModel):
    order: OrderOut


class WishlistItemOut(CamelModel):
    id: str
    product_id: str
    variant_id: Optional[str] = None
    created_at: datetime
    product: ProductSummaryOut
    variant: Optional[VariantOut] = None


class WishlistOut(CamelModel):
    items: List[WishlistItemOut]


class QuoteItemOut(CamelModel):
    id: str
    product_id: str
    variant_id: str
    quantity: int
    price_minor: int
    total_minor: int
    product: ProductSummaryOut
    variant: VariantOut


class QuoteOut(CamelModel):
    id: str
    business_account_id: str
    status: str
    notes: Optional[str] = None
    total_minor: int
    created_at: datetime
    items: List[QuoteItemOut]


class QuoteListOut(CamelModel):
    quotes: List[QuoteOut]


class QuoteDetailOut(CamelModel):
    quote: QuoteOut


class MessageOut(CamelModel):
    message: str
