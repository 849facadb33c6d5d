# storefront/repos/wishlist_repo.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from storefront.data.models.wishlist_item import WishlistItemModel


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_by_user(self, user_id: str) -> List[WishlistItemModel]:
        stmt = (
            select(WishlistItemModel)
            .options(joinedload(WishlistItemModel.product), joinedload(WishlistItemModel.variant))
            .where(WishlistItemModel.user_id == user_id)
            .order_by(WishlistItemModel.created_at.desc(), WishlistItemModel.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def find(self, user_id: str, product_id: str, variant_id: Optional[str]) -> WishlistItemModel | None:
        # NULL != NULL w unique constraint, wiec sprawdzamy recznie
        variant_filter = (
            WishlistItemModel.variant_id.is_(None)
            if variant_id is None
            else WishlistItemModel.variant_id == variant_id
        )
        return self.db.execute(
            select(WishlistItemModel).where(
                WishlistItemModel.user_id == user_id,
                WishlistItemModel.product_id == product_id,
                variant_filter,
            )
        ).scalar_one_or_none()

    def get_item(self, item_id: str) -> WishlistItemModel | None:
        return self.db.get(WishlistItemModel, item_id)

    def add_item(self, item: WishlistItemModel) -> WishlistItemModel:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_item(self, item: WishlistItemModel) -> None:
        self.db.delete(item)
        self.db.commit()
