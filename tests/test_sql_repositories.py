"""The same service flows against the SQLAlchemy repositories, on SQLite."""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from conftest import SHIPPING_ADDRESS
from shared.config.database import Base
from services.auth_service.repository import UserRepository
from services.auth_service.schemas import AddressCreate, PasswordChange, UserCreate, UserLogin
from services.auth_service.service import AuthService
from services.cart_service.repository import CartRepository
from services.cart_service.schemas import CartItemCreate, CartMerge
from services.cart_service.service import CartService
from services.order_service.repository import OrderRepository
from services.order_service.schemas import OrderCancel, OrderCreate
from services.order_service.service import OrderService
from services.product_service.repository import ProductRepository
from services.product_service.schemas import ProductFilters
from services.product_service.service import ProductService


@pytest.fixture
async def session():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with async_sessionmaker(engine, expire_on_commit=False)() as db:
        yield db
    await engine.dispose()


@pytest.fixture
async def products(session):
    repo = ProductRepository(session)
    await ProductService.ensure_catalog(repo)
    return repo


async def test_catalog_loads_once(products):
    assert await products.count() == 12
    assert await ProductService.ensure_catalog(products) == 0

    listing = await ProductService.list_products(products, ProductFilters(category="deals", sort="discount"))
    assert listing["pagination"]["total"] == 7
    assert listing["products"][0].id == 7


async def test_user_repository_round_trip(session, products):
    users = UserRepository(session)
    user, _ = await AuthService.register(
        users, UserCreate(name="Test User", email="user@example.com", password="Passw0rd!")
    )

    assert (await users.get_by_email("user@example.com")).id == user.id
    assert await users.get_by_email("missing@example.com") is None

    await AuthService.add_address(users, user.id, AddressCreate(**SHIPPING_ADDRESS))
    await AuthService.add_to_wishlist(users, products, user.id, 3)

    stored = await users.get_by_id(user.id)
    assert [a.is_default for a in stored.addresses] == [True]
    assert stored.addresses[0].id is not None
    assert stored.wishlist == [3]


async def test_revoked_tokens(session):
    users = UserRepository(session)
    expires = datetime.now(timezone.utc) + timedelta(days=7)

    await users.revoke_token("abc", expires)
    await users.revoke_token("abc", expires)

    assert await users.is_token_revoked("abc")
    assert not await users.is_token_revoked("def")


async def test_expired_revocations_are_pruned(session):
    users = UserRepository(session)
    now = datetime.now(timezone.utc)

    await users.revoke_token("stale", now - timedelta(minutes=1))
    await users.revoke_token("live", now + timedelta(days=7))

    assert not await users.is_token_revoked("stale")
    assert await users.is_token_revoked("live")


async def test_password_change_rejects_other_sessions_refresh(session):
    users = UserRepository(session)
    user, (_, first_refresh) = await AuthService.register(
        users, UserCreate(name="Test User", email="user@example.com", password="Passw0rd!")
    )
    _, (_, second_refresh) = await AuthService.login(users, UserLogin(email="user@example.com", password="Passw0rd!"))

    await AuthService.change_password(
        users, user.id, PasswordChange(current_password="Passw0rd!", new_password="N3w-Passw0rd!"), second_refresh
    )

    assert (await users.get_by_id(user.id)).token_version == 1
    with pytest.raises(HTTPException) as excinfo:
        await AuthService.refresh(users, first_refresh)
    assert excinfo.value.status_code == 401


async def test_cart_lines_persist_and_orphans_are_deleted(session, products):
    carts = CartRepository(session)

    await CartService.add_item(carts, products, 1, CartItemCreate(product_id=1))
    await CartService.add_item(carts, products, 1, CartItemCreate(product_id=2, quantity=2))
    await CartService.save_for_later(carts, 1, 2)
    await CartService.merge(carts, products, 1, CartMerge(items=[CartItemCreate(product_id=1, quantity=2)]))

    cart = await carts.get_by_user(1)
    assert [(line.product_id, line.quantity) for line in cart.items] == [(1, 3)]
    assert [line.product_id for line in cart.saved_for_later] == [2]

    response = await CartService.clear(carts, 1)
    assert response["items"] == []
    assert len((await carts.get_by_user(1)).lines) == 1


async def test_order_flow(session, products):
    carts = CartRepository(session)
    orders = OrderRepository(session)
    await CartService.add_item(carts, products, 1, CartItemCreate(product_id=11, quantity=2))

    order = await OrderService.create_order(
        orders, carts, products, 1, OrderCreate(shipping_address=SHIPPING_ADDRESS)
    )
    assert order.pricing["subtotal"] == 149.98
    assert order.item_count == 2
    assert (await carts.get_by_user(1)).items == []
    assert (await products.get_by_id(11)).stock_count == 198

    assert [o.id for o in await orders.list_for_user(1)] == [order.id]
    assert await orders.get_for_user(order.id, 2) is None

    cancelled = await OrderService.cancel_order(orders, products, 1, order.id, OrderCancel(reason="Duplicate"))
    assert cancelled.status == "cancelled"
    assert (await products.get_by_id(11)).stock_count == 200


async def test_failed_order_insert_leaves_stock_and_cart(session, products):
    carts = CartRepository(session)
    orders = OrderRepository(session)
    await CartService.add_item(carts, products, 1, CartItemCreate(product_id=11, quantity=2))

    async def broken_insert(order):
        raise RuntimeError("insert failed")

    orders.create_order = broken_insert
    with pytest.raises(RuntimeError):
        await OrderService.create_order(orders, carts, products, 1, OrderCreate(shipping_address=SHIPPING_ADDRESS))
    await session.rollback()
    session.expunge_all()

    assert (await products.get_by_id(11)).stock_count == 200
    assert [(line.product_id, line.quantity) for line in (await carts.get_by_user(1)).items] == [(11, 2)]
