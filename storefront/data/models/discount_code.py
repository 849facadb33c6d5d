# storefront/data/models/discount_code.py
import uuid

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String

from storefront.data.database import Base


class DiscountCodeModel(Base):
    __tablename__ = "discount_codes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = Column(String(64), nullable=False, unique=True)

    kind = Column(String(20), nullable=False)  # percentage, fixed_amount
    # percentage -> procent, fixed_amount -> kwota w minor units
    value = Column(Numeric(12, 2), nullable=False)
    max_discount_minor = Column(Integer, nullable=True)  # NULL = bez limitu

    is_active = Column(Boolean, nullable=False, default=True)
    valid_from = Column(DateTime(timezone=True), nullable=False)
    valid_until = Column(DateTime(timezone=True), nullable=False)
