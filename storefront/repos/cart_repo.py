# storefront/repos/cart_repo.py
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload

from storefront.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_items_by_user(self, user_id: str) -> List[CartItemModel]:
        #najnowsze pozycje na gorze, razem z produktem i wariantem
        stmt = (
            select(CartItemModel)
            .options(joinedload(CartItemModel.product), joinedload(CartItemModel.variant))
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.created_at.desc(), CartItemModel.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_item(self, item_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel)
            .options(joinedload(CartItemModel.product), joinedload(CartItemModel.variant))
            .where(CartItemModel.id == item_id)
        ).scalar_one_or_none()

    def get_item_by_variant(self, user_id: str, variant_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.variant_id == variant_id,
            )
        ).scalar_one_or_none()

    def add_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def delete_all_by_user(self, user_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.user_id == user_id)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()
