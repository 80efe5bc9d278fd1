from typing import Optional

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.config.memory_store import MemoryStore

from .models import Cart


class CartRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_user(self, user_id: int) -> Optional[Cart]:
        result = await self.db.execute(select(Cart).where(Cart.user_id == user_id))
        return result.scalars().first()

    async def save(self, cart: Cart, commit: bool = True) -> Cart:
        """With commit=False the change rides on the next commit of the shared session."""
        self.db.add(cart)
        if commit:
            await self.db.commit()
        return cart


class InMemoryCartRepository:

    def __init__(self, store: MemoryStore):
        self.store = store

    async def get_by_user(self, user_id: int) -> Optional[Cart]:
        return self.store.carts.get(user_id)

    async def save(self, cart: Cart, commit: bool = True) -> Cart:
        if cart.id is None:
            cart.id = self.store.next_id("carts")
        for line in cart.lines:
            if line.id is None:
                line.id = self.store.next_id("cart_items")
                line.cart_id = cart.id
        self.store.carts[cart.user_id] = cart
        return cart


def get_cart_repository(request: Request, db: Optional[AsyncSession] = Depends(get_db)):
    if db is None:
        return InMemoryCartRepository(request.app.state.memory_store)
    return CartRepository(db)
