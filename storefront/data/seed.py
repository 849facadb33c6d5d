# storefront/data/seed.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models import (
    AddressModel,
    DiscountCodeModel,
    ProductModel,
    ProductVariantModel,
)

DEMO_USER_ID = "demo-user"


def seed():
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            return

        saffron = ProductModel(name="Kashmiri Saffron", slug="kashmiri-saffron", origin="Pampore, Kashmir")
        pepper = ProductModel(name="Tellicherry Black Pepper", slug="tellicherry-black-pepper", origin="Malabar, Kerala")
        db.add_all([saffron, pepper])
        db.flush()

        db.add_all([
            ProductVariantModel(
                product_id=saffron.id, sku="SAF-1G", name="1 g tin",
                price_minor=50000, list_price_minor=60000, weight_grams=1, stock_qty=100,
            ),
            ProductVariantModel(
                product_id=saffron.id, sku="SAF-5G", name="5 g tin",
                price_minor=220000, list_price_minor=250000, weight_grams=5, stock_qty=40,
            ),
            ProductVariantModel(
                product_id=pepper.id, sku="PEP-250G", name="250 g pouch",
                price_minor=30000, list_price_minor=35000, weight_grams=250, stock_qty=200,
            ),
        ])

        db.add(AddressModel(
            user_id=DEMO_USER_ID, full_name="Demo Customer", line1="12 MG Road",
            city="Bengaluru", state="Karnataka", postal_code="560001", country="IN",
        ))

        now = datetime.now(timezone.utc)
        db.add(DiscountCodeModel(
            code="SAVE10", kind="percentage", value=Decimal("10"), max_discount_minor=None,
            is_active=True, valid_from=now - timedelta(days=1), valid_until=now + timedelta(days=365),
        ))

        db.commit()
    finally:
        db.close()


if __name__ == "__main__":
    seed()
