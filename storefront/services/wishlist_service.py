# storefront/services/wishlist_service.py
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from storefront.data.models.wishlist_item import WishlistItemModel
from storefront.domain.errors import NotFoundError
from storefront.repos.product_repo import ProductRepo
from storefront.repos.wishlist_repo import WishlistRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class WishlistService:
    def __init__(self, db: Session):
        self.repo = WishlistRepo(db)
        self.products = ProductRepo(db)

    def list_items(self, user_id: str) -> List[WishlistItemModel]:
        return self.repo.list_by_user(user_id)

    def add_item(
        self,
        user_id: str,
        product_id: str,
        variant_id: Optional[str] = None,
    ) -> Tuple[WishlistItemModel, bool]:
        """Zwraca (pozycja, czy_nowa). Duplikat to nie blad."""
        existing = self.repo.find(user_id, product_id, variant_id)
        if existing:
            return existing, False

        if not self.products.get_product(product_id):
            raise NotFoundError("Product not found")

        if variant_id:
            variant = self.products.get_variant(variant_id)
            if not variant or variant.product_id != product_id:
                raise NotFoundError("Variant not found")

        item = self.repo.add_item(
            WishlistItemModel(user_id=user_id, product_id=product_id, variant_id=variant_id)
        )
        logger.info(f"Product {product_id} added to wishlist of user {user_id}")

        return item, True

    def remove_item(self, user_id: str, item_id: str) -> None:
        item = self.repo.get_item(item_id)

        if not item:
            raise NotFoundError("Wishlist item not found")

        if item.user_id != user_id:
            raise PermissionError("Unauthorized")

        self.repo.delete_item(item)
        logger.info(f"Wishlist item {item_id} removed for user {user_id}")
