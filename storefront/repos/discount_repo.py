# storefront/repos/discount_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.discount_code import DiscountCodeModel


class DiscountRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_code(self, code: str) -> DiscountCodeModel | None:
        return self.db.execute(
            select(DiscountCodeModel).where(DiscountCodeModel.code == code)
        ).scalar_one_or_none()
