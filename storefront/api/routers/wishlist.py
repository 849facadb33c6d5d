# storefront/api/routers/wishlist.py
from typing import Union

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user_id
from storefront.data.database import get_db
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import MessageOut, WishlistItemIn, WishlistItemOut, WishlistOut
from storefront.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def get_service(db: Session):
    return WishlistService(db)


@router.get("", response_model=WishlistOut)
def list_items(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return {"items": svc.list_items(user_id)}


@router.post("", response_model=Union[WishlistItemOut, MessageOut], status_code=201)
def add_item(
    payload: WishlistItemIn,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        item, created = svc.add_item(user_id, payload.product_id, payload.variant_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if not created:
        response.status_code = 200
        return {"message": "Item already in wishlist"}
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
    return {"message": "Item removed from wishlist"}
