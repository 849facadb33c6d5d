# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user_id, get_lock_service
from storefront.data.database import get_db
from storefront.domain.errors import (
    CheckoutInProgressError,
    EmptyCartError,
    InsufficientStockError,
    InvalidAddressError,
    PersistenceError,
    Unauthenticated,
)
from storefront.domain.schemas import CheckoutIn, CheckoutOut, CheckoutPreviewIn, TotalsOut
from storefront.services.checkout_service import CheckoutService, totals_to_dict
from storefront.services.lock_service import LockService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.post("", response_model=CheckoutOut)
def checkout(
    payload: CheckoutIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Sklada zamowienie (pending) z koszyka uzytkownika i czysci koszyk.
    Platnosc jest obslugiwana osobno.
    """
    svc = CheckoutService(db, lock_service)
    try:
        return svc.checkout(user_id, payload)
    except Unauthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))
    except (EmptyCartError, InvalidAddressError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (InsufficientStockError, CheckoutInProgressError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceError:
        raise HTTPException(status_code=500, detail="Internal server error")
    except Exception:
        logger.exception(f"Checkout error for user {user_id}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/preview", response_model=TotalsOut)
def preview(
    payload: CheckoutPreviewIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    #sam odczyt, bez locka
    svc = CheckoutService(db)
    try:
        return totals_to_dict(svc.preview(user_id, payload.coupon_code))
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))
