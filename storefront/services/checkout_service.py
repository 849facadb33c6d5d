# storefront/services/checkout_service.py
import secrets
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

import redis
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import (
    CheckoutInProgressError,
    EmptyCartError,
    InsufficientStockError,
    InvalidAddressError,
    PersistenceError,
    Unauthenticated,
)
from storefront.domain.pricing import (
    CouponApplied,
    CouponRejected,
    CouponTerms,
    LineItem,
    Totals,
    price_cart,
)
from storefront.domain.schemas import CheckoutIn
from storefront.repos.address_repo import AddressRepo
from storefront.repos.discount_repo import DiscountRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.cart_service import CartService
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.tasks.cart_cleanup import clear_cart_task
from storefront.utils.logging import get_logger
from storefront.utils.settings import CHECKOUT_LOCK_TTL_SECONDS, ORDER_NUMBER_PREFIX

logger = get_logger(__name__)


def generate_order_number(prefix: str = ORDER_NUMBER_PREFIX, now: Optional[datetime] = None) -> str:
    #czas w ms + 40 losowych bitow, kolumna i tak ma UNIQUE
    now = now or datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    return f"{prefix}{millis}{secrets.token_hex(5).upper()}"


def totals_to_dict(totals: Totals) -> Dict:
    coupon = None
    if isinstance(totals.coupon, CouponApplied):
        coupon = {"code": totals.coupon.code, "applied": True, "amount": totals.coupon.amount}
    elif isinstance(totals.coupon, CouponRejected):
        coupon = {"code": totals.coupon.code, "applied": False, "reason": totals.coupon.reason}

    return {
        "subtotal_minor": totals.subtotal_minor,
        "tax_minor": totals.tax_minor,
        "shipping_minor": totals.shipping_minor,
        "discount_minor": totals.discount_minor,
        "total_minor": totals.total_minor,
        "coupon": coupon,
    }


class CheckoutService:
    """
    Checkout: koszyk -> adresy -> wycena (kupon, podatek, dostawa) -> zamowienie -> pusty koszyk.

    Etapy ida tylko do przodu. Zamowienie, pozycje i zdjecie stanu magazynu
    sa w jednej transakcji. Czyszczenie koszyka jest w SAVEPOINT - jak padnie,
    zamowienie i tak zostaje, a koszyk czysci potem task Celery.
    Checkouty tego samego usera sa serializowane lockiem w Redis.
    """

    def __init__(
        self,
        db: Session,
        lock_service: Optional[LockService] = None,
        notification_service: Optional[NotificationService] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self.cart = CartService(db)
        self.addresses = AddressRepo(db)
        self.discounts = DiscountRepo(db)
        self.products = ProductRepo(db)
        self.orders = OrderRepo(db)
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    # =====================================================
    # COMMANDS
    # =====================================================
    def checkout(self, user_id: Optional[str], payload: CheckoutIn) -> Dict[str, str]:
        if not user_id:
            raise Unauthenticated("Unauthorized")

        token = uuid.uuid4().hex
        if not self.lock_service.acquire_checkout_lock(user_id, token, CHECKOUT_LOCK_TTL_SECONDS):
            logger.warning(f"Checkout already in progress for user {user_id}")
            raise CheckoutInProgressError()

        try:
            return self._checkout(user_id, payload)
        finally:
            try:
                self.lock_service.release_checkout_lock(user_id, token)
            except redis.RedisError as e:
                #lock i tak wygasnie po TTL
                logger.warning(f"Failed to release checkout lock for user {user_id}: {e}")

    def _checkout(self, user_id: str, payload: CheckoutIn) -> Dict[str, str]:
        lines = self.cart.read_lines(user_id)
        if not lines:
            raise EmptyCartError()

        self.validate_addresses(user_id, payload.shipping_address_id, payload.billing_address_id)

        totals = self.price(lines, payload.coupon_code)

        order = self._materialize(user_id, payload, lines, totals)

        self.notification_service.send_order_confirmation(user_id, order.id, order.order_number)

        return {"order_id": order.id, "order_number": order.order_number}

    # =====================================================
    # QUERY
    # =====================================================
    def preview(self, user_id: Optional[str], coupon_code: Optional[str] = None) -> Totals:
        """Wycena koszyka bez zapisu (strona checkoutu przed zlozeniem zamowienia)."""
        lines = self.cart.read_lines(user_id)
        if not lines:
            raise EmptyCartError()
        return self.price(lines, coupon_code)

    def validate_addresses(self, user_id: str, shipping_address_id: str, billing_address_id: str) -> None:
        # oba adresy jednym zapytaniem, niezalezne odczyty
        owned = self.addresses.get_owned(user_id, (shipping_address_id, billing_address_id))

        if shipping_address_id not in owned or billing_address_id not in owned:
            logger.info(f"Invalid address for user {user_id}")
            raise InvalidAddressError()

    def price(self, lines: List[LineItem], coupon_code: Optional[str]) -> Totals:
        code = (coupon_code or "").strip() or None
        now = self.clock()

        if not code:
            return price_cart(lines, now=now)

        try:
            terms = self._lookup_coupon(code)
        except SQLAlchemyError as e:
            # kupon nigdy nie blokuje checkoutu
            self.db.rollback()
            logger.warning(f"Coupon lookup for {code} failed, pricing without discount: {e}")
            totals = price_cart(lines, now=now)
            return replace(totals, coupon=CouponRejected(code=code, reason="lookup_failed"))

        totals = price_cart(lines, coupon_code=code, coupon_terms=terms, now=now)

        if isinstance(totals.coupon, CouponApplied):
            logger.info(f"Coupon {code} applied, discount {totals.coupon.amount}")
        else:
            logger.info(f"Coupon {code} not applied: {totals.coupon.reason}")

        return totals

    def _lookup_coupon(self, code: str) -> Optional[CouponTerms]:
        coupon = self.discounts.get_by_code(code)
        if not coupon:
            return None

        return CouponTerms(
            code=coupon.code,
            kind=coupon.kind,
            value=coupon.value,
            max_discount_minor=coupon.max_discount_minor,
            is_active=coupon.is_active,
            valid_from=coupon.valid_from,
            valid_until=coupon.valid_until,
        )

    def _materialize(
        self,
        user_id: str,
        payload: CheckoutIn,
        lines: List[LineItem],
        totals: Totals,
    ) -> OrderModel:
        order_number = generate_order_number(now=self.clock())
        cleanup_deferred = False

        try:
            #koniec fazy odczytu: transakcja zapisu zaczyna sie od UPDATE stanu,
            #wiec w SQLite czeka na lock zapisu zamiast dostac "database is locked"
            self.db.commit()

            with transaction(self.db):
                #stan magazynu: warunkowy update, zero wierszy = brak towaru
                for line in lines:
                    if self.products.decrement_stock(line.variant_id, line.quantity) == 0:
                        logger.info(f"Insufficient stock for {line.sku} (user {user_id})")
                        raise InsufficientStockError(line.sku)

                order = OrderModel(
                    order_number=order_number,
                    user_id=user_id,
                    status="pending",
                    payment_status="pending",
                    payment_method=payload.payment_method,
                    shipping_address_id=payload.shipping_address_id,
                    billing_address_id=payload.billing_address_id,
                    subtotal_minor=totals.subtotal_minor,
                    tax_minor=totals.tax_minor,
                    shipping_minor=totals.shipping_minor,
                    discount_minor=totals.discount_minor,
                    total_minor=totals.total_minor,
                    coupon_code=(payload.coupon_code or "").strip() or None,
                    created_at=self.clock(),
                    items=[
                        OrderItemModel(
                            position=position,
                            product_id=line.product_id,
                            variant_id=line.variant_id,
                            sku=line.sku,
                            name=line.name,
                            weight_grams=line.weight_grams,
                            quantity=line.quantity,
                            unit_price_minor=line.unit_price_minor,
                            line_total_minor=line.line_total_minor,
                            gift_note=line.gift_note,
                        )
                        for position, line in enumerate(lines)
                    ],
                )
                self.orders.add_order(order)

                try:
                    with self.db.begin_nested():
                        self.cart.repo.delete_all_by_user(user_id)
                except SQLAlchemyError as e:
                    cleanup_deferred = True
                    logger.warning(f"Cart cleanup for user {user_id} failed, deferring: {e}")

        except SQLAlchemyError as e:
            logger.exception(f"Order transaction failed for user {user_id}")
            raise PersistenceError() from e

        logger.info(
            f"Order {order.order_number} ({order.id}) created for user {user_id}, "
            f"total {order.total_minor}"
        )

        if cleanup_deferred:
            self._defer_cart_cleanup(user_id)

        return order

    def _defer_cart_cleanup(self, user_id: str) -> None:
        try:
            clear_cart_task.delay(user_id)
        except Exception as e:
            logger.error(f"Could not enqueue cart cleanup for user {user_id}: {e}")
