from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.config.memory_store import MemoryStore

from .models import RevokedToken, User


class UserRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user: User) -> User:
        self.db.add(user)
        await self.db.commit()
        return user

    async def save(self, user: User) -> User:
        self.db.add(user)
        await self.db.commit()
        return user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalars().first()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def revoke_token(self, jti: str, expires_at: datetime):
        # Expired tokens fail signature checks anyway, so their entries can go
        await self.db.execute(
            delete(RevokedToken)
            .where(RevokedToken.expires_at <= datetime.now(timezone.utc))
            .execution_options(synchronize_session="fetch")
        )
        if await self.db.get(RevokedToken, jti) is None:
            self.db.add(RevokedToken(jti=jti, expires_at=expires_at))
        await self.db.commit()

    async def is_token_revoked(self, jti: str) -> bool:
        return await self.db.get(RevokedToken, jti) is not None


class InMemoryUserRepository:

    def __init__(self, store: MemoryStore):
        self.store = store

    def _assign_address_ids(self, user: User):
        for address in user.addresses:
            if address.id is None:
                address.id = self.store.next_id("addresses")
                address.user_id = user.id

    async def create(self, user: User) -> User:
        user.id = self.store.next_id("users")
        self._assign_address_ids(user)
        self.store.users[user.id] = user
        return user

    async def save(self, user: User) -> User:
        self._assign_address_ids(user)
        self.store.users[user.id] = user
        return user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return self.store.users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.store.users.values() if u.email == email), None)

    async def revoke_token(self, jti: str, expires_at: datetime):
        now = datetime.now(timezone.utc)
        for expired in [j for j, expiry in self.store.revoked_tokens.items() if expiry <= now]:
            del self.store.revoked_tokens[expired]
        self.store.revoked_tokens[jti] = expires_at

    async def is_token_revoked(self, jti: str) -> bool:
        return jti in self.store.revoked_tokens


def get_user_repository(request: Request, db: Optional[AsyncSession] = Depends(get_db)):
    if db is None:
        return InMemoryUserRepository(request.app.state.memory_store)
    return UserRepository(db)
