from fastapi import APIRouter, Depends

from shared.security import get_current_user
from services.product_service.repository import get_product_repository

from .repository import get_cart_repository
from .schemas import CartItemCreate, CartItemUpdate, CartMerge, CartResponse
from .service import CartService

# Every cart route needs a logged-in user
router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get("", response_model=CartResponse)
async def get_cart(user_id: str = Depends(get_current_user), carts=Depends(get_cart_repository)):
    return await CartService.get_cart(carts, int(user_id))


@router.post("/add", response_model=CartResponse)
async def add_item(
    item: CartItemCreate,
    user_id: str = Depends(get_current_user),
    carts=Depends(get_cart_repository),
    products=Depends(get_product_repository),
):
    return await CartService.add_item(carts, products, int(user_id), item)


@router.put("/update/{product_id}", response_model=CartResponse)
async def update_item(
    product_id: int,
    payload: CartItemUpdate,
    user_id: str = Depends(get_current_user),
    carts=Depends(get_cart_repository),
):
    return await CartService.update_item(carts, int(user_id), product_id, payload.quantity)


@router.delete("/remove/{product_id}", response_model=CartResponse)
async def remove_item(
    product_id: int,
    user_id: str = Depends(get_current_user),
    carts=Depends(get_cart_repository),
):
    return await CartService.remove_item(carts, int(user_id), product_id)


@router.delete("/clear", response_model=CartResponse)
async def clear_cart(user_id: str = Depends(get_current_user), carts=Depends(get_cart_repository)):
    """Deletes all purchasable items in the cart."""
    return await CartService.clear(carts, int(user_id))


@router.post("/merge", response_model=CartResponse)
async def merge_cart(
    payload: CartMerge,
    user_id: str = Depends(get_current_user),
    carts=Depends(get_cart_repository),
    products=Depends(get_product_repository),
):
    return await CartService.merge(carts, products, int(user_id), payload)


@router.post("/save-for-later/{product_id}", response_model=CartResponse)
async def save_for_later(
    product_id: int,
    user_id: str = Depends(get_current_user),
    carts=Depends(get_cart_repository),
):
    return await CartService.save_for_later(carts, int(user_id), product_id)


@router.post("/move-to-cart/{product_id}", response_model=CartResponse)
async def move_to_cart(
    product_id: int,
    user_id: str = Depends(get_current_user),
    carts=Depends(get_cart_repository),
):
    return await CartService.move_to_cart(carts, int(user_id), product_id)
