import math
from datetime import datetime, timezone

import structlog
from fastapi import HTTPException, status

from .catalog import DEFAULT_CATALOG
from .models import Product
from .schemas import ProductCreate, ProductFilters

logger = structlog.get_logger(__name__)

RELATED_LIMIT = 4

_SORT_KEYS = {
    "price-asc": (lambda p: p.price, False),
    "price-desc": (lambda p: p.price, True),
    "rating": (lambda p: p.rating, True),
    "discount": (lambda p: p.discount, True),
    "bestseller": (lambda p: p.reviews, True),
}


def _matches(product: Product, filters: ProductFilters) -> bool:
    if filters.search:
        query = filters.search.lower()
        haystacks = (product.title, product.brand, product.category)
        if not any(query in value.lower() for value in haystacks):
            return False
    if filters.category == "deals":
        if product.discount <= 0:
            return False
    elif filters.category and product.category != filters.category:
        return False
    if filters.prime and not product.prime:
        return False
    if filters.min_price is not None and product.price < filters.min_price:
        return False
    if filters.max_price is not None and product.price > filters.max_price:
        return False
    if filters.min_rating is not None and product.rating < filters.min_rating:
        return False
    return True


class ProductService:

    @staticmethod
    def build_product(data: ProductCreate) -> Product:
        fields = data.model_dump()
        if fields["stock_count"] == 0:
            fields["in_stock"] = False
        return Product(**fields, created_at=datetime.now(timezone.utc))

    @staticmethod
    async def create_product(products, data: ProductCreate) -> Product:
        product = await products.create_product(ProductService.build_product(data))
        logger.info("product_created", product_id=product.id, category=product.category)
        return product

    @staticmethod
    async def ensure_catalog(products) -> int:
        """Loads the built-in catalog when the store holds no products."""
        if await products.count():
            return 0
        created = await products.create_many(
            [ProductService.build_product(ProductCreate(**item)) for item in DEFAULT_CATALOG]
        )
        logger.info("catalog_loaded", products=len(created))
        return len(created)

    @staticmethod
    async def list_products(products, filters: ProductFilters) -> dict:
        result = [p for p in await products.get_all_products() if _matches(p, filters)]

        if filters.sort in _SORT_KEYS:
            key, reverse = _SORT_KEYS[filters.sort]
            result.sort(key=key, reverse=reverse)

        start = (filters.page - 1) * filters.limit
        return {
            "products": result[start:start + filters.limit],
            "pagination": {
                "total": len(result),
                "page": filters.page,
                "limit": filters.limit,
                "pages": math.ceil(len(result) / filters.limit),
            },
        }

    @staticmethod
    async def get_product(products, product_id: int) -> Product:
        product = await products.get_by_id(product_id)
        if not product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
        return product

    @staticmethod
    async def get_product_detail(products, product_id: int) -> dict:
        product = await ProductService.get_product(products, product_id)
        related = [
            p for p in await products.get_all_products()
            if p.category == product.category and p.id != product.id
        ]
        return {"product": product, "related": related[:RELATED_LIMIT]}

    @staticmethod
    async def list_categories(products) -> list[str]:
        # dict preserves first-seen order
        return list(dict.fromkeys(p.category for p in await products.get_all_products()))

    @staticmethod
    async def reduce_stock(products, product: Product, quantity: int, commit: bool = True) -> Product:
        if not product.in_stock or product.stock_count < quantity:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Insufficient stock for {product.title}",
            )
        product.stock_count -= quantity
        if product.stock_count == 0:
            product.in_stock = False
        return await products.update_product(product, commit=commit)

    @staticmethod
    async def restore_stock(products, product_id: int, quantity: int, commit: bool = True):
        product = await products.get_by_id(product_id)
        if not product:
            # Product was removed from the catalog since the order; nothing to restore
            logger.warning("restore_stock_missing_product", product_id=product_id)
            return None
        product.stock_count += quantity
        product.in_stock = True
        return await products.update_product(product, commit=commit)
