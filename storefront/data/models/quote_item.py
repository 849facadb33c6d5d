# storefront/data/models/quote_item.py
import uuid

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class QuoteItemModel(Base):
    __tablename__ = "quote_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    quote_id = Column(String(36), ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)
    variant_id = Column(String(36), ForeignKey("product_variants.id"), nullable=False)
    quantity = Column(Integer, nullable=False)

    #0 dopoki admin nie wyceni
    price_minor = Column(Integer, nullable=False, default=0)
    total_minor = Column(Integer, nullable=False, default=0)

    quote = relationship("QuoteModel", back_populates="items")
    product = relationship("ProductModel")
    variant = relationship("ProductVariantModel")
