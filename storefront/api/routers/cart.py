# storefront/api/routers/cart.py
from typing import Union

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user_id
from storefront.data.database import get_db
from storefront.domain.errors import NotFoundError, StockLimitError
from storefront.domain.schemas import (
    CartItemIn,
    CartItemOut,
    CartItemUpdate,
    CartOut,
    MessageOut,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def get_cart(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.get_cart(user_id)


@router.post("", response_model=CartItemOut, status_code=201)
def add_item(
    payload: CartItemIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_item(
            user_id=user_id,
            product_id=payload.product_id,
            variant_id=payload.variant_id,
            quantity=payload.quantity,
            gift_note=payload.gift_note,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (StockLimitError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("", response_model=MessageOut)
def clear_cart(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    svc.clear_cart(user_id)
    return {"message": "Cart cleared successfully"}


@router.patch("/{item_id}", response_model=Union[CartItemOut, MessageOut])
def update_item(
    item_id: str,
    payload: CartItemUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        item = svc.update_item(user_id, item_id, payload.quantity, payload.gift_note)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StockLimitError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if item is None:
        return {"message": "Item removed from cart"}
    return item


@router.delete("/{item_id}", response_model=MessageOut)
def remove_item(
    item_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.remove_item(user_id, item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return {"message": "Item removed from cart"}
