from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

Category = Literal[
    "Electronics",
    "Fashion",
    "Home & Kitchen",
    "Toys & Games",
    "Sports & Outdoors",
    "Video Games",
    "Books",
    "Beauty",
]

SortOption = Literal["relevance", "price-asc", "price-desc", "rating", "discount", "bestseller"]


class ProductCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    price: float = Field(..., ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    discount: int = Field(0, ge=0, le=100)
    rating: float = Field(0, ge=0, le=5)
    reviews: int = Field(0, ge=0)
    image: str = Field(..., min_length=1)
    images: List[str] = []
    category: Category
    subcategory: Optional[str] = None
    brand: str = Field(..., min_length=1)
    features: List[str] = []
    specifications: Dict[str, Any] = {}
    in_stock: bool = True
    stock_count: int = Field(100, ge=0)
    prime: bool = False
    free_shipping: bool = False

    class Config:
        str_strip_whitespace = True


class ProductResponse(BaseModel):
    id: int
    title: str
    description: str
    price: float
    original_price: Optional[float]
    discount: int
    calculated_discount: int
    rating: float
    reviews: int
    image: str
    images: List[str]
    category: str
    subcategory: Optional[str]
    brand: str
    features: List[str]
    specifications: Dict[str, Any]
    in_stock: bool
    stock_count: int
    prime: bool
    free_shipping: bool

    class Config:
        from_attributes = True


class ProductFilters(BaseModel):
    search: Optional[str] = None
    category: Optional[str] = None  # a category name, or "deals"
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    min_rating: Optional[float] = Field(None, ge=0, le=5)
    prime: bool = False
    sort: SortOption = "relevance"
    limit: int = Field(20, ge=1, le=100)
    page: int = Field(1, ge=1)


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class ProductListResponse(BaseModel):
    products: List[ProductResponse]
    pagination: Pagination


class ProductDetailResponse(BaseModel):
    product: ProductResponse
    related: List[ProductResponse]


class CategoriesResponse(BaseModel):
    categories: List[str]
