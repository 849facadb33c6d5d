# storefront/repos/quote_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload, selectinload

from storefront.data.models.quote import QuoteModel
from storefront.data.models.quote_item import QuoteItemModel


class QuoteRepo:
    def __init__(self, db: Session):
        self.db = db

    def _with_items(self):
        return selectinload(QuoteModel.items).options(
            joinedload(QuoteItemModel.product),
            joinedload(QuoteItemModel.variant),
        )

    def list_by_account(self, business_account_id: str) -> List[QuoteModel]:
        stmt = (
            select(QuoteModel)
            .options(self._with_items())
            .where(QuoteModel.business_account_id == business_account_id)
            .order_by(QuoteModel.created_at.desc(), QuoteModel.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_quote(self, quote_id: str) -> QuoteModel | None:
        return self.db.execute(
            select(QuoteModel).options(self._with_items()).where(QuoteModel.id == quote_id)
        ).scalar_one_or_none()

    def add_quote(self, quote: QuoteModel) -> QuoteModel:
        self.db.add(quote)
        self.db.commit()
        return quote
