from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from shared.config.database import Base


class Cart(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, unique=True, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Both lists live in one table; saved_for_later splits them
    lines = relationship("CartItem", lazy="selectin", cascade="all, delete-orphan", order_by="CartItem.id")

    @property
    def items(self) -> list["CartItem"]:
        return [line for line in self.lines if not line.saved_for_later]

    @property
    def saved_for_later(self) -> list["CartItem"]:
        return [line for line in self.lines if line.saved_for_later]


class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, nullable=False)
    title = Column(String(200), nullable=False)
    price = Column(Float, nullable=False)
    image = Column(String(500), nullable=True)
    quantity = Column(Integer, default=1, nullable=False)
    saved_for_later = Column(Boolean, default=False, nullable=False)
