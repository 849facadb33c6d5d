# storefront/repos/product_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload

from storefront.data.models.product import ProductModel, ProductVariantModel


class ProductRepo:
    """Odczyt katalogu + warunkowe zdjecie stanu przy checkoucie."""

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_variant(self, variant_id: str) -> ProductVariantModel | None:
        return self.db.execute(
            select(ProductVariantModel)
            .options(joinedload(ProductVariantModel.product))
            .where(ProductVariantModel.id == variant_id)
        ).scalar_one_or_none()

    def decrement_stock(self, variant_id: str, quantity: int) -> int:
        # optimistic check: update set stock = stock - q where id = x and stock >= q
        # rowcount 0 = ktos wykupil wczesniej
        result = self.db.execute(
            update(ProductVariantModel)
            .where(
                ProductVariantModel.id == variant_id,
                ProductVariantModel.stock_qty >= quantity,
            )
            .values(stock_qty=ProductVariantModel.stock_qty - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
