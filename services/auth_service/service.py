from datetime import datetime, timezone

import structlog
from fastapi import HTTPException, status
from passlib.context import CryptContext

from shared.config import settings
from shared.observability import ecomm_auth_events_total
from shared.security.jwt_handler import (
    TokenExpired,
    TokenInvalid,
    decode_refresh_token,
    generate_tokens,
)

from .models import Address, User
from .schemas import AddressCreate, PasswordChange, UserCreate, UserLogin

logger = structlog.get_logger(__name__)

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)


def _refresh_rejected(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class AuthService:

    @staticmethod
    def hash_password(password: str) -> str:
        return _pwd_context.hash(password)

    @staticmethod
    def verify_password(plain: str, hashed: str) -> bool:
        return _pwd_context.verify(plain, hashed)

    @staticmethod
    async def register(users, data: UserCreate) -> tuple[User, tuple[str, str]]:
        existing = await users.get_by_email(data.email)
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="An account with this email already exists",
            )
        user = User(
            name=data.name,
            email=data.email,
            hashed_password=AuthService.hash_password(data.password),
            role="admin" if data.email in settings.ADMIN_EMAILS else "user",
            is_active=True,
            token_version=0,
            wishlist=[],
            addresses=[],
            created_at=datetime.now(timezone.utc),
        )
        user = await users.create(user)
        logger.info("user_registered", user_id=user.id, role=user.role)
        return user, generate_tokens(user)

    @staticmethod
    async def login(users, data: UserLogin) -> tuple[User, tuple[str, str]]:
        user = await users.get_by_email(data.email)
        # Same message for unknown email and wrong password
        if not user or not AuthService.verify_password(data.password, user.hashed_password):
            ecomm_auth_events_total.labels(event="login", outcome="failure").inc()
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if not user.is_active:
            ecomm_auth_events_total.labels(event="login", outcome="failure").inc()
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is disabled",
            )
        user.last_login = datetime.now(timezone.utc)
        await users.save(user)
        ecomm_auth_events_total.labels(event="login", outcome="success").inc()
        logger.info("user_logged_in", user_id=user.id)
        return user, generate_tokens(user)

    @staticmethod
    async def refresh(users, refresh_token: str | None) -> tuple[User, tuple[str, str]]:
        if not refresh_token:
            raise _refresh_rejected("No refresh token")
        try:
            payload = decode_refresh_token(refresh_token)
        except (TokenExpired, TokenInvalid):
            ecomm_auth_events_total.labels(event="refresh", outcome="failure").inc()
            raise _refresh_rejected("Invalid refresh token")

        if await users.is_token_revoked(payload["jti"]):
            ecomm_auth_events_total.labels(event="refresh", outcome="failure").inc()
            raise _refresh_rejected("Token revoked")

        user = await users.get_by_id(int(payload["sub"]))
        if not user or not user.is_active or payload.get("ver") != user.token_version:
            ecomm_auth_events_total.labels(event="refresh", outcome="failure").inc()
            raise _refresh_rejected("Invalid refresh token")

        # Rotate: the presented refresh token can't be replayed
        await AuthService.revoke(users, refresh_token)
        ecomm_auth_events_total.labels(event="refresh", outcome="success").inc()
        return user, generate_tokens(user)

    @staticmethod
    async def revoke(users, refresh_token: str | None):
        if not refresh_token:
            return
        try:
            payload = decode_refresh_token(refresh_token)
        except (TokenExpired, TokenInvalid):
            return
        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        await users.revoke_token(payload["jti"], expires_at)

    @staticmethod
    async def get_user_by_id(users, user_id: int) -> User:
        user = await users.get_by_id(user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    @staticmethod
    async def change_password(users, user_id: int, data: PasswordChange, refresh_token: str | None):
        user = await AuthService.get_user_by_id(users, user_id)
        if not AuthService.verify_password(data.current_password, user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Current password is incorrect",
            )
        user.hashed_password = AuthService.hash_password(data.new_password)
        user.password_changed_at = datetime.now(timezone.utc)
        # Outstanding refresh tokens of every session carry the old version
        user.token_version = (user.token_version or 0) + 1
        await users.save(user)
        await AuthService.revoke(users, refresh_token)
        logger.info("password_changed", user_id=user.id)

    # --- Address book ---

    @staticmethod
    async def add_address(users, user_id: int, data: AddressCreate) -> User:
        user = await AuthService.get_user_by_id(users, user_id)
        make_default = data.is_default or not user.addresses
        if make_default:
            for address in user.addresses:
                address.is_default = False
        user.addresses.append(Address(**data.model_dump(exclude={"is_default"}), is_default=make_default))
        return await users.save(user)

    @staticmethod
    def _find_address(user: User, address_id: int) -> Address:
        address = next((a for a in user.addresses if a.id == address_id), None)
        if address is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Address not found")
        return address

    @staticmethod
    async def remove_address(users, user_id: int, address_id: int) -> User:
        user = await AuthService.get_user_by_id(users, user_id)
        address = AuthService._find_address(user, address_id)
        user.addresses.remove(address)
        if address.is_default and user.addresses:
            user.addresses[0].is_default = True
        return await users.save(user)

    @staticmethod
    async def set_default_address(users, user_id: int, address_id: int) -> User:
        user = await AuthService.get_user_by_id(users, user_id)
        target = AuthService._find_address(user, address_id)
        for address in user.addresses:
            address.is_default = address is target
        return await users.save(user)

    # --- Wishlist ---

    @staticmethod
    async def add_to_wishlist(users, products, user_id: int, product_id: int) -> User:
        user = await AuthService.get_user_by_id(users, user_id)
        if await products.get_by_id(product_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
        if product_id not in user.wishlist:
            user.wishlist = [*user.wishlist, product_id]
            await users.save(user)
        return user

    @staticmethod
    async def remove_from_wishlist(users, user_id: int, product_id: int) -> User:
        user = await AuthService.get_user_by_id(users, user_id)
        if product_id in user.wishlist:
            user.wishlist = [pid for pid in user.wishlist if pid != product_id]
            await users.save(user)
        return user
