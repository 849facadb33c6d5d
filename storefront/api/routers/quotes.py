# storefront/api/routers/quotes.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_business_account_id, get_current_user_id
from storefront.data.database import get_db
from storefront.domain.schemas import QuoteDetailOut, QuoteIn, QuoteListOut
from storefront.services.quote_service import QuoteService

router = APIRouter(prefix="/b2b/quotes", tags=["b2b"])


def get_service(db: Session):
    return QuoteService(db)


@router.get("", response_model=QuoteListOut)
def list_quotes(
    business_account_id: str = Depends(get_business_account_id),
    db: Session = Depends(get_db),
):
    """
    Zapytania ofertowe konta firmowego, najnowsze pierwsze.
    """
    svc = get_service(db)
    return {"quotes": svc.list_quotes(business_account_id)}


@router.post("", response_model=QuoteDetailOut, status_code=201)
def create_quote(
    payload: QuoteIn,
    user_id: str = Depends(get_current_user_id),
    business_account_id: str = Depends(get_business_account_id),
    db: Session = Depends(get_db),
):
    """
    Nowe zapytanie ofertowe. Ceny pozycji = 0 do wyceny przez admina.
    """
    svc = get_service(db)
    try:
        quote = svc.create_quote(business_account_id, user_id, payload.items, payload.notes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"quote": quote}
