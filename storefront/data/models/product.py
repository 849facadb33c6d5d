# storefront/data/models/product.py
import uuid

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ProductModel(Base):
    """Katalog jest zarzadzany poza tym serwisem, tu tylko odczyt."""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    slug = Column(String(200), nullable=False, unique=True)
    origin = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    variants = relationship("ProductVariantModel", back_populates="product")


class ProductVariantModel(Base):
    __tablename__ = "product_variants"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)

    sku = Column(String(64), nullable=False, unique=True)
    name = Column(String(200), nullable=False)
    # ceny w groszach/paisach (minor units)
    price_minor = Column(Integer, nullable=False)
    list_price_minor = Column(Integer, nullable=False)
    weight_grams = Column(Integer, nullable=False, default=0)
    stock_qty = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    product = relationship("ProductModel", back_populates="variants")
