from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from shared.security import require_admin

from .repository import get_product_repository
from .schemas import (
    CategoriesResponse,
    ProductCreate,
    ProductDetailResponse,
    ProductFilters,
    ProductListResponse,
    ProductResponse,
)
from .service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    filters: Annotated[ProductFilters, Query()],
    products=Depends(get_product_repository),
):
    return await ProductService.list_products(products, filters)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductCreate,
    _admin: str = Depends(require_admin),
    products=Depends(get_product_repository),
):
    return await ProductService.create_product(products, payload)


# Declared before /{product_id} so "meta" is never parsed as an id
@router.get("/meta/categories", response_model=CategoriesResponse)
async def list_categories(products=Depends(get_product_repository)):
    return {"categories": await ProductService.list_categories(products)}


@router.get("/{product_id}", response_model=ProductDetailResponse)
async def get_product(product_id: int, products=Depends(get_product_repository)):
    return await ProductService.get_product_detail(products, product_id)
