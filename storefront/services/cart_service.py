# storefront/services/cart_service.py
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import NotFoundError, StockLimitError, Unauthenticated
from storefront.domain.pricing import LineItem, compute_subtotal
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def to_line_item(item: CartItemModel) -> LineItem:
    #snapshot z aktualnego wariantu, nie z tego co przyslal klient
    variant = item.variant
    return LineItem(
        cart_item_id=item.id,
        product_id=item.product_id,
        variant_id=item.variant_id,
        sku=variant.sku,
        name=item.product.name,
        weight_grams=variant.weight_grams,
        stock_qty=variant.stock_qty,
        quantity=item.quantity,
        unit_price_minor=variant.price_minor,
        list_price_minor=variant.list_price_minor,
        gift_note=item.gift_note,
    )


class CartService:
    """
    Prosta implementacja cqrs dla koszyka
    commands (add, update, remove, clear) modyfikuja stan
    query (read_lines, get_cart) tylko odczyt
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query - odczyt
    def read_lines(self, user_id: Optional[str]) -> List[LineItem]:
        """
        Pozycje koszyka usera z aktualna cena/stanem/waga wariantu.
        Pusty koszyk to poprawny wynik, decyzja nalezy do wywolujacego.
        """
        if not user_id:
            raise Unauthenticated("Unauthorized")

        return [to_line_item(i) for i in self.repo.get_items_by_user(user_id)]

    def get_cart(self, user_id: str) -> Dict[str, Any]:
        if not user_id:
            raise Unauthenticated("Unauthorized")

        items = self.repo.get_items_by_user(user_id)
        lines = [to_line_item(i) for i in items]

        return {
            "items": items,
            "summary": {
                "subtotal": compute_subtotal(lines),
                "total_items": sum(line.quantity for line in lines),
                "total_weight": sum(line.weight_grams * line.quantity for line in lines),
                "item_count": len(lines),
            },
        }

    #commands
    def add_item(
        self,
        user_id: str,
        product_id: str,
        variant_id: str,
        quantity: int,
        gift_note: Optional[str] = None,
    ) -> CartItemModel:
        if quantity <= 0:
            raise ValueError("Quantity must be at least 1")

        variant = self.products.get_variant(variant_id)

        if not variant or not variant.is_active or not variant.product.is_active:
            raise NotFoundError("Product or variant not found")

        if variant.product_id != product_id:
            raise ValueError("Variant does not belong to the specified product")

        if variant.stock_qty < quantity:
            raise StockLimitError(f"Only {variant.stock_qty} items available in stock")

        existing = self.repo.get_item_by_variant(user_id, variant_id)

        if existing:
            new_quantity = existing.quantity + quantity
            if new_quantity > variant.stock_qty:
                raise StockLimitError(
                    f"Cannot add {quantity} more items. "
                    f"Only {variant.stock_qty - existing.quantity} more available."
                )
            logger.info(
                f"Variant {variant_id} already in cart of user {user_id}, "
                f"quantity {existing.quantity} -> {new_quantity}"
            )
            existing.quantity = new_quantity
            existing.gift_note = gift_note or existing.gift_note
            item = self.repo.add_item(existing)
        else:
            logger.info(f"Adding variant {variant_id} to cart of user {user_id}")
            item = self.repo.add_item(
                CartItemModel(
                    user_id=user_id,
                    product_id=product_id,
                    variant_id=variant_id,
                    quantity=quantity,
                    gift_note=gift_note,
                )
            )

        self.repo.commit()
        return self.repo.get_item(item.id)

    def update_item(
        self,
        user_id: str,
        item_id: str,
        quantity: int,
        gift_note: Optional[str] = None,
    ) -> CartItemModel | None:
        """quantity == 0 usuwa pozycje i zwraca None."""
        item = self.repo.get_item(item_id)

        if not item:
            raise NotFoundError("Cart item not found")

        if item.user_id != user_id:
            raise PermissionError("Unauthorized")

        if quantity == 0:
            self.repo.delete_item(item)
            self.repo.commit()
            logger.info(f"Cart item {item_id} removed (quantity 0)")
            return None

        if quantity > item.variant.stock_qty:
            raise StockLimitError(f"Only {item.variant.stock_qty} items available in stock")

        item.quantity = quantity
        if gift_note is not None:
            item.gift_note = gift_note

        self.repo.add_item(item)
        self.repo.commit()
        return self.repo.get_item(item_id)

    def remove_item(self, user_id: str, item_id: str) -> None:
        item = self.repo.get_item(item_id)

        if not item:
            raise NotFoundError("Cart item not found")

        if item.user_id != user_id:
            raise PermissionError("Unauthorized")

        self.repo.delete_item(item)
        self.repo.commit()
        logger.info(f"Cart item {item_id} removed from cart of user {user_id}")

    def clear_cart(self, user_id: str) -> int:
        removed = self.repo.delete_all_by_user(user_id)
        self.repo.commit()
        logger.info(f"Cart of user {user_id} cleared ({removed} items)")
        return removed
