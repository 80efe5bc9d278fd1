from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from shared.config.database import Base

ORDER_STATUSES = ("pending", "confirmed", "processing", "shipped", "delivered", "cancelled", "returned")
PAYMENT_STATUSES = ("pending", "paid", "failed", "refunded")
PAYMENT_METHODS = ("card", "upi", "netbanking", "cod")


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, index=True)  # UUID string
    user_id = Column(Integer, nullable=False, index=True)
    shipping_address = Column(JSON, nullable=False)
    payment_method = Column(String(20), default="card", nullable=False)
    payment_status = Column(String(20), default="pending", nullable=False)
    status = Column(String(20), default="pending", nullable=False, index=True)

    # pricing, calculated at creation
    subtotal = Column(Float, nullable=False)
    shipping = Column(Float, default=0, nullable=False)
    tax = Column(Float, default=0, nullable=False)
    discount = Column(Float, default=0, nullable=False)
    total = Column(Float, nullable=False)

    tracking_number = Column(String(64), nullable=True)
    estimated_delivery = Column(DateTime(timezone=True), nullable=True)
    delivered_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancel_reason = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    items = relationship("OrderItem", lazy="selectin", cascade="all, delete-orphan", order_by="OrderItem.id")

    @property
    def pricing(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "shipping": self.shipping,
            "tax": self.tax,
            "discount": self.discount,
            "total": self.total,
        }

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, nullable=False)
    title = Column(String(200), nullable=False)
    price = Column(Float, nullable=False)
    image = Column(String(500), nullable=True)
    quantity = Column(Integer, nullable=False)
