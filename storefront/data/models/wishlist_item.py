# storefront/data/models/wishlist_item.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class WishlistItemModel(Base):
    __tablename__ = "wishlist_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)
    variant_id = Column(String(36), ForeignKey("product_variants.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    product = relationship("ProductModel")
    variant = relationship("ProductVariantModel")

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", "variant_id", name="u_wishlist_user_product_variant"),
    )
