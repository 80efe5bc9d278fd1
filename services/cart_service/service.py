from datetime import datetime, timezone

import structlog
from fastapi import HTTPException, status

from shared.config import settings
from shared.observability import ecomm_cart_operations_total
from shared.pricing import calculate_totals
from services.product_service.service import ProductService

from .models import Cart, CartItem
from .schemas import CartItemCreate, CartMerge

logger = structlog.get_logger(__name__)


def _find_line(lines, product_id: int):
    return next((line for line in lines if line.product_id == product_id), None)


def _not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class CartService:

    @staticmethod
    def to_response(cart: Cart | None) -> dict:
        if cart is None:
            return {
                "items": [],
                "saved_for_later": [],
                "totals": calculate_totals([], rules=settings.PRICING),
                "updated_at": None,
            }
        return {
            "items": cart.items,
            "saved_for_later": cart.saved_for_later,
            "totals": calculate_totals(cart.items, rules=settings.PRICING),
            "updated_at": cart.updated_at,
        }

    @staticmethod
    async def _get_or_create(carts, user_id: int) -> Cart:
        cart = await carts.get_by_user(user_id)
        if cart is None:
            cart = Cart(user_id=user_id, lines=[], updated_at=None)
        return cart

    @staticmethod
    async def _require_cart(carts, user_id: int) -> Cart:
        cart = await carts.get_by_user(user_id)
        if cart is None:
            raise _not_found("Cart not found")
        return cart

    @staticmethod
    async def _touch_and_save(carts, cart: Cart, operation: str) -> Cart:
        cart.updated_at = datetime.now(timezone.utc)
        cart = await carts.save(cart)
        ecomm_cart_operations_total.labels(operation=operation).inc()
        return cart

    @staticmethod
    def _add_line(cart: Cart, product, quantity: int):
        """An existing line for the product grows; otherwise a new line is snapshotted."""
        existing = _find_line(cart.items, product.id)
        if existing:
            existing.quantity += quantity
            return
        cart.lines.append(
            CartItem(
                product_id=product.id,
                title=product.title,
                price=product.price,
                image=product.image,
                quantity=quantity,
                saved_for_later=False,
            )
        )

    @staticmethod
    async def get_cart(carts, user_id: int) -> dict:
        return CartService.to_response(await carts.get_by_user(user_id))

    @staticmethod
    async def add_item(carts, products, user_id: int, data: CartItemCreate) -> dict:
        product = await ProductService.get_product(products, data.product_id)
        if not product.in_stock:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Product is out of stock")

        cart = await CartService._get_or_create(carts, user_id)
        CartService._add_line(cart, product, data.quantity)
        cart = await CartService._touch_and_save(carts, cart, "add")
        logger.info("cart_item_added", user_id=user_id, product_id=product.id, quantity=data.quantity)
        return CartService.to_response(cart)

    @staticmethod
    async def update_item(carts, user_id: int, product_id: int, quantity: int) -> dict:
        cart = await CartService._require_cart(carts, user_id)
        line = _find_line(cart.items, product_id)
        if line is None:
            raise _not_found("Item not found in cart")
        line.quantity = quantity
        cart = await CartService._touch_and_save(carts, cart, "update")
        return CartService.to_response(cart)

    @staticmethod
    async def remove_item(carts, user_id: int, product_id: int) -> dict:
        cart = await CartService._require_cart(carts, user_id)
        for line in cart.items:
            if line.product_id == product_id:
                cart.lines.remove(line)
        cart = await CartService._touch_and_save(carts, cart, "remove")
        return CartService.to_response(cart)

    @staticmethod
    async def clear(carts, user_id: int) -> dict:
        cart = await carts.get_by_user(user_id)
        if cart is None:
            return CartService.to_response(None)
        for line in cart.items:
            cart.lines.remove(line)
        cart = await CartService._touch_and_save(carts, cart, "clear")
        return CartService.to_response(cart)

    @staticmethod
    async def merge(carts, products, user_id: int, data: CartMerge) -> dict:
        """Folds a guest cart into the user's cart, skipping unavailable products."""
        cart = await CartService._get_or_create(carts, user_id)
        merged = 0
        for entry in data.items:
            product = await products.get_by_id(entry.product_id)
            if product is None or not product.in_stock:
                logger.info("cart_merge_skipped", user_id=user_id, product_id=entry.product_id)
                continue
            CartService._add_line(cart, product, entry.quantity)
            merged += 1
        if merged:
            cart = await CartService._touch_and_save(carts, cart, "merge")
        logger.info("cart_merged", user_id=user_id, merged=merged, skipped=len(data.items) - merged)
        return CartService.to_response(cart)

    @staticmethod
    async def _move(carts, user_id: int, product_id: int, to_saved: bool, operation: str) -> dict:
        cart = await CartService._require_cart(carts, user_id)
        source, target = (cart.items, cart.saved_for_later) if to_saved else (cart.saved_for_later, cart.items)
        line = _find_line(source, product_id)
        if line is None:
            raise _not_found("Item not found in cart")
        existing = _find_line(target, product_id)
        if existing:
            existing.quantity += line.quantity
            cart.lines.remove(line)
        else:
            line.saved_for_later = to_saved
        cart = await CartService._touch_and_save(carts, cart, operation)
        return CartService.to_response(cart)

    @staticmethod
    async def save_for_later(carts, user_id: int, product_id: int) -> dict:
        return await CartService._move(carts, user_id, product_id, True, "save_for_later")

    @staticmethod
    async def move_to_cart(carts, user_id: int, product_id: int) -> dict:
        return await CartService._move(carts, user_id, product_id, False, "move_to_cart")

    @staticmethod
    async def empty_items(carts, user_id: int, commit: bool = True):
        """Drops the purchasable lines after checkout; saved-for-later lines stay."""
        cart = await carts.get_by_user(user_id)
        if cart is not None and cart.items:
            for line in cart.items:
                cart.lines.remove(line)
            cart.updated_at = datetime.now(timezone.utc)
            await carts.save(cart, commit=commit)
