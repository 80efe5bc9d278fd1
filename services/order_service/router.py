from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from shared.security import get_current_user
from services.cart_service.repository import get_cart_repository
from services.product_service.repository import get_product_repository

from .repository import get_order_repository
from .schemas import OrderCancel, OrderCreate, OrderResponse, OrderSummary
from .service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderCreate,
    user_id: str = Depends(get_current_user),
    orders=Depends(get_order_repository),
    carts=Depends(get_cart_repository),
    products=Depends(get_product_repository),
):
    return await OrderService.create_order(orders, carts, products, int(user_id), payload)


@router.get("", response_model=list[OrderSummary])
async def list_orders(user_id: str = Depends(get_current_user), orders=Depends(get_order_repository)):
    return await OrderService.list_orders(orders, int(user_id))


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user_id: str = Depends(get_current_user), orders=Depends(get_order_repository)):
    return await OrderService.get_order(orders, int(user_id), order_id)


@router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: str,
    payload: Optional[OrderCancel] = Body(None),
    user_id: str = Depends(get_current_user),
    orders=Depends(get_order_repository),
    products=Depends(get_product_repository),
):
    return await OrderService.cancel_order(orders, products, int(user_id), order_id, payload or OrderCancel())
