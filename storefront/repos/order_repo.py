# storefront/repos/order_repo.py
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        #bez commita - transakcja jest po stronie serwisu
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.id == order_id)
        ).scalar_one_or_none()

    def list_orders(
        self,
        user_id: str,
        status: Optional[str],
        offset: int,
        limit: int,
    ) -> Tuple[List[OrderModel], int]:
        filters = [OrderModel.user_id == user_id]
        if status:
            filters.append(OrderModel.status == status)

        orders = self.db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(*filters)
            .order_by(OrderModel.created_at.desc())
            .offset(offset)
            .limit(limit)
        ).scalars().all()

        total = self.db.execute(
            select(func.count()).select_from(OrderModel).where(*filters)
        ).scalar_one()

        return list(orders), total
