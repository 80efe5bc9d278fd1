from typing import Optional

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.config.memory_store import MemoryStore

from .models import Order


class OrderRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_order(self, order: Order) -> Order:
        self.db.add(order)
        await self.db.commit()
        return order

    async def list_for_user(self, user_id: int) -> list[Order]:
        result = await self.db.execute(
            select(Order).where(Order.user_id == user_id).order_by(Order.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_for_user(self, order_id: str, user_id: int) -> Optional[Order]:
        result = await self.db.execute(
            select(Order).where(Order.id == order_id).where(Order.user_id == user_id)
        )
        return result.scalars().first()

    async def update_order(self, order: Order) -> Order:
        self.db.add(order)
        await self.db.commit()
        return order


class InMemoryOrderRepository:

    def __init__(self, store: MemoryStore):
        self.store = store

    async def create_order(self, order: Order) -> Order:
        for item in order.items:
            if item.id is None:
                item.id = self.store.next_id("order_items")
                item.order_id = order.id
        self.store.orders[order.id] = order
        return order

    async def list_for_user(self, user_id: int) -> list[Order]:
        orders = [o for o in self.store.orders.values() if o.user_id == user_id]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    async def get_for_user(self, order_id: str, user_id: int) -> Optional[Order]:
        order = self.store.orders.get(order_id)
        if order is None or order.user_id != user_id:
            return None
        return order

    async def update_order(self, order: Order) -> Order:
        self.store.orders[order.id] = order
        return order


def get_order_repository(request: Request, db: Optional[AsyncSession] = Depends(get_db)):
    if db is None:
        return InMemoryOrderRepository(request.app.state.memory_store)
    return OrderRepository(db)
