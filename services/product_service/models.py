from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, Text

from shared.config.database import Base

CATEGORIES = (
    "Electronics",
    "Fashion",
    "Home & Kitchen",
    "Toys & Games",
    "Sports & Outdoors",
    "Video Games",
    "Books",
    "Beauty",
)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    original_price = Column(Float, nullable=True)
    discount = Column(Integer, default=0, nullable=False)  # percent, 0-100
    rating = Column(Float, default=0, nullable=False)
    reviews = Column(Integer, default=0, nullable=False)
    image = Column(String(500), nullable=False)
    images = Column(JSON, default=list, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    subcategory = Column(String(100), nullable=True)
    brand = Column(String(100), nullable=False)
    features = Column(JSON, default=list, nullable=False)
    specifications = Column(JSON, default=dict, nullable=False)
    in_stock = Column(Boolean, default=True, nullable=False)
    stock_count = Column(Integer, default=100, nullable=False)
    prime = Column(Boolean, default=False, nullable=False)
    free_shipping = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    @property
    def calculated_discount(self) -> int:
        if self.original_price and self.original_price > self.price:
            return round((self.original_price - self.price) / self.original_price * 100)
        return 0
