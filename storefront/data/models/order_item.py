# storefront/data/models/order_item.py
import uuid

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class OrderItemModel(Base):
    """
    Zamrozona kopia pozycji koszyka z chwili zamowienia.
    product_id/variant_id bez FK - edycja albo usuniecie produktu nie moze ruszyc zamowienia.
    """

    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    product_id = Column(String(36), nullable=False)
    variant_id = Column(String(36), nullable=False)
    sku = Column(String(64), nullable=False)
    name = Column(String(200), nullable=False)
    weight_grams = Column(Integer, nullable=False)

    quantity = Column(Integer, nullable=False)
    unit_price_minor = Column(Integer, nullable=False)
    line_total_minor = Column(Integer, nullable=False)
    gift_note = Column(Text, nullable=True)

    order = relationship("OrderModel", back_populates="items")
