# storefront/data/models/quote.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from storefront.data.database import Base

QUOTE_STATUSES = ("pending", "quoted", "accepted", "rejected", "expired")


class QuoteModel(Base):
    """
    Zapytanie ofertowe B2B. Ceny uzupelnia admin,
    do tego czasu pozycje maja 0.
    """

    __tablename__ = "quotes"
    __table_args__ = (
        CheckConstraint(f"status IN {QUOTE_STATUSES}", name="ck_quotes_status"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    business_account_id = Column(String(64), nullable=False, index=True)
    requested_by = Column(String(64), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    notes = Column(Text, nullable=True)
    total_minor = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "QuoteItemModel",
        back_populates="quote",
        cascade="all, delete-orphan",
        order_by="QuoteItemModel.position",
    )
