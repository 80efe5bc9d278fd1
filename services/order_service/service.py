import uuid
from datetime import datetime, timedelta, timezone

import structlog
from fastapi import HTTPException, status

from shared.config import settings
from shared.observability import ecomm_order_value, ecomm_orders_total
from shared.pricing import calculate_totals
from services.cart_service.service import CartService
from services.product_service.service import ProductService

from .models import Order, OrderItem
from .schemas import OrderCancel, OrderCreate

logger = structlog.get_logger(__name__)

CANCELLABLE_STATUSES = ("pending",)


class OrderService:

    @staticmethod
    async def _requested_lines(carts, user_id: int, data: OrderCreate) -> dict[int, int]:
        """product_id -> quantity, from the request body or else from the cart."""
        if data.items is not None:
            entries = [(item.product_id, item.quantity) for item in data.items]
        else:
            cart = await carts.get_by_user(user_id)
            entries = [(line.product_id, line.quantity) for line in (cart.items if cart else [])]

        lines: dict[int, int] = {}
        for product_id, quantity in entries:
            lines[product_id] = lines.get(product_id, 0) + quantity
        return lines

    @staticmethod
    async def create_order(orders, carts, products, user_id: int, data: OrderCreate) -> Order:
        lines = await OrderService._requested_lines(carts, user_id, data)
        if not lines:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Order must contain items")

        # Validate everything before touching stock so a bad line leaves no partial reservation
        resolved = []
        for product_id, quantity in lines.items():
            product = await ProductService.get_product(products, product_id)
            if not product.in_stock or product.stock_count < quantity:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Insufficient stock for {product.title}",
                )
            resolved.append((product, quantity))

        # Stock, cart and order share one session; the order insert commits them together
        for product, quantity in resolved:
            await ProductService.reduce_stock(products, product, quantity, commit=False)
        if data.items is None:
            await CartService.empty_items(carts, user_id, commit=False)

        now = datetime.now(timezone.utc)
        items = [
            OrderItem(
                product_id=product.id,
                title=product.title,
                price=product.price,
                image=product.image,
                quantity=quantity,
            )
            for product, quantity in resolved
        ]
        pricing = calculate_totals(items, discount=data.discount, rules=settings.PRICING)
        order = Order(
            id=str(uuid.uuid4()),
            user_id=user_id,
            items=items,
            shipping_address=data.shipping_address.model_dump(),
            payment_method=data.payment_method,
            payment_status="pending",
            status="pending",
            subtotal=pricing["subtotal"],
            shipping=pricing["shipping"],
            tax=pricing["tax"],
            discount=pricing["discount"],
            total=pricing["total"],
            estimated_delivery=now + timedelta(days=settings.DELIVERY_DAYS),
            notes=data.notes,
            created_at=now,
            updated_at=now,
        )
        order = await orders.create_order(order)

        ecomm_orders_total.labels(status="placed").inc()
        ecomm_order_value.observe(order.total)
        logger.info("order_placed", order_id=order.id, user_id=user_id, total=order.total, lines=len(items))
        return order

    @staticmethod
    async def list_orders(orders, user_id: int) -> list[Order]:
        return await orders.list_for_user(user_id)

    @staticmethod
    async def get_order(orders, user_id: int, order_id: str) -> Order:
        order = await orders.get_for_user(order_id, user_id)
        if not order:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
        return order

    @staticmethod
    async def cancel_order(orders, products, user_id: int, order_id: str, data: OrderCancel) -> Order:
        order = await OrderService.get_order(orders, user_id, order_id)
        if order.status not in CANCELLABLE_STATUSES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Only pending orders can be cancelled",
            )

        now = datetime.now(timezone.utc)
        order.status = "cancelled"
        order.cancelled_at = now
        order.cancel_reason = data.reason
        order.updated_at = now
        if order.payment_status == "paid":
            order.payment_status = "refunded"

        for item in order.items:
            await ProductService.restore_stock(products, item.product_id, item.quantity, commit=False)
        order = await orders.update_order(order)

        ecomm_orders_total.labels(status="cancelled").inc()
        logger.info("order_cancelled", order_id=order.id, user_id=user_id)
        return order
