# storefront/api/routers/orders.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user_id
from storefront.data.database import get_db
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import OrderDetailOut, OrderListOut
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.get("", response_model=OrderListOut)
def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Zamowienia uzytkownika, najnowsze pierwsze. status=all = bez filtra.
    """
    svc = get_service(db)
    try:
        return svc.list_orders(user_id, page=page, limit=limit, status=status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Szczegoly zamowienia z zamrozonymi pozycjami.
    """
    svc = get_service(db)
    try:
        return {"order": svc.get_order(order_id, user_id)}
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
