# storefront/services/quote_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.data.models.quote import QuoteModel
from storefront.data.models.quote_item import QuoteItemModel
from storefront.domain.schemas import QuoteItemIn
from storefront.repos.product_repo import ProductRepo
from storefront.repos.quote_repo import QuoteRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class QuoteService:
    """
    Zapytania ofertowe B2B.
    Status konta firmowego (zatwierdzenie) nadaje gateway, tu tylko id konta.
    """

    def __init__(self, db: Session):
        self.repo = QuoteRepo(db)
        self.products = ProductRepo(db)

    def list_quotes(self, business_account_id: str) -> List[QuoteModel]:
        return self.repo.list_by_account(business_account_id)

    def create_quote(
        self,
        business_account_id: str,
        user_id: str,
        items: List[QuoteItemIn],
        notes: Optional[str] = None,
    ) -> QuoteModel:
        #wszystkie pozycje musza istniec, zanim cokolwiek zapiszemy
        for item in items:
            variant = self.products.get_variant(item.variant_id)
            if not variant or variant.product_id != item.product_id:
                raise ValueError(f"Invalid product or variant: {item.product_id}")

        quote = QuoteModel(
            business_account_id=business_account_id,
            requested_by=user_id,
            status="pending",
            notes=notes,
            total_minor=0,
            items=[
                QuoteItemModel(
                    position=position,
                    product_id=item.product_id,
                    variant_id=item.variant_id,
                    quantity=item.quantity,
                    price_minor=0,
                    total_minor=0,
                )
                for position, item in enumerate(items)
            ],
        )
        self.repo.add_quote(quote)
        logger.info(
            f"Quote {quote.id} requested by user {user_id} "
            f"for business account {business_account_id} ({len(items)} items)"
        )

        return self.repo.get_quote(quote.id)
