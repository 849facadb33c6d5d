# storefront/data/models/order.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base

ORDER_STATUSES = ("pending", "paid", "processing", "shipped", "delivered", "cancelled", "refunded")
PAYMENT_STATUSES = ("pending", "paid", "failed", "refunded")


class OrderModel(Base):
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint(f"status IN {ORDER_STATUSES}", name="ck_orders_status"),
        CheckConstraint(f"payment_status IN {PAYMENT_STATUSES}", name="ck_orders_payment_status"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_number = Column(String(40), nullable=False, unique=True)
    user_id = Column(String(64), nullable=False, index=True)

    status = Column(String(20), nullable=False, default="pending")
    payment_status = Column(String(20), nullable=False, default="pending")
    payment_method = Column(String(50), nullable=True)

    shipping_address_id = Column(String(36), ForeignKey("addresses.id"), nullable=False)
    billing_address_id = Column(String(36), ForeignKey("addresses.id"), nullable=False)

    subtotal_minor = Column(Integer, nullable=False)
    tax_minor = Column(Integer, nullable=False)
    shipping_minor = Column(Integer, nullable=False)
    discount_minor = Column(Integer, nullable=False, default=0)
    total_minor = Column(Integer, nullable=False)
    coupon_code = Column(String(64), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
    )
