# storefront/api/deps.py
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException

from storefront.services.lock_service import LockService


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """
    Sesje wydaje zewnetrzny dostawca tozsamosci, gateway przekazuje id w X-User-Id.
    Ufamy mu w calosci.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id.strip()


@lru_cache(maxsize=1)
def get_lock_service() -> LockService:
    return LockService()


def get_business_account_id(
    user_id: str = Depends(get_current_user_id),
    x_business_account_id: Optional[str] = Header(default=None),
) -> str:
    """
    Konto firmowe zatwierdza zewnetrzny proces B2B, gateway przekazuje
    id zatwierdzonego konta w X-Business-Account-Id.
    """
    if not x_business_account_id or not x_business_account_id.strip():
        raise HTTPException(status_code=403, detail="Business account required")
    return x_business_account_id.strip()
