# storefront/services/order_service.py
import math
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from storefront.data.models.order import ORDER_STATUSES, OrderModel
from storefront.domain.errors import NotFoundError
from storefront.repos.order_repo import OrderRepo


class OrderService:
    """
    Odczyt zamowien. Zamowienia powstaja tylko w CheckoutService,
    zmiany statusu przychodza z platnosci/wysylki (poza serwisem).
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)

    def list_orders(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        if status == "all":
            status = None

        if status is not None and status not in ORDER_STATUSES:
            raise ValueError(f"Invalid status: {status}")

        orders, total = self.repo.list_orders(
            user_id=user_id,
            status=status,
            offset=(page - 1) * limit,
            limit=limit,
        )

        return {
            "orders": orders,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit),
            },
        }

    def get_order(self, order_id: str, user_id: str) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundError("Order not found")

        if order.user_id != user_id:
            raise PermissionError("Unauthorized")

        return order
