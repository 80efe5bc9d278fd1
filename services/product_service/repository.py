from typing import Optional

from fastapi import Depends, Request
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.config.memory_store import MemoryStore

from .models import Product


class ProductRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_product(self, product: Product) -> Product:
        self.db.add(product)
        await self.db.commit()
        return product

    async def create_many(self, products: list[Product]) -> list[Product]:
        self.db.add_all(products)
        await self.db.commit()
        return products

    async def get_all_products(self) -> list[Product]:
        result = await self.db.execute(select(Product).order_by(Product.id))
        return list(result.scalars().all())

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        result = await self.db.execute(select(Product).where(Product.id == product_id))
        return result.scalars().first()

    async def update_product(self, product: Product, commit: bool = True) -> Product:
        self.db.add(product)
        if commit:
            await self.db.commit()
        return product

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Product))
        return result.scalar_one()


class InMemoryProductRepository:

    def __init__(self, store: MemoryStore):
        self.store = store

    async def create_product(self, product: Product) -> Product:
        product.id = self.store.next_id("products")
        self.store.products[product.id] = product
        return product

    async def create_many(self, products: list[Product]) -> list[Product]:
        return [await self.create_product(product) for product in products]

    async def get_all_products(self) -> list[Product]:
        return [self.store.products[pid] for pid in sorted(self.store.products)]

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        return self.store.products.get(product_id)

    async def update_product(self, product: Product, commit: bool = True) -> Product:
        self.store.products[product.id] = product
        return product

    async def count(self) -> int:
        return len(self.store.products)


def get_product_repository(request: Request, db: Optional[AsyncSession] = Depends(get_db)):
    if db is None:
        return InMemoryProductRepository(request.app.state.memory_store)
    return ProductRepository(db)
