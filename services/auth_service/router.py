from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from shared.config import settings
from shared.security import clear_auth_cookies, get_current_user, limiter, read_signed_cookie, set_auth_cookies
from shared.security.cookies import REFRESH_COOKIE
from services.product_service.repository import get_product_repository

from .repository import get_user_repository
from .schemas import AddressCreate, AuthResponse, MessageResponse, PasswordChange, UserCreate, UserLogin, UserResponse
from .service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
@limiter.limit(settings.RATE_LIMIT_AUTH)
async def register(request: Request, response: Response, payload: UserCreate, users=Depends(get_user_repository)):
    user, (access_token, refresh_token) = await AuthService.register(users, payload)
    set_auth_cookies(response, access_token, refresh_token)
    return AuthResponse(user=UserResponse.model_validate(user), access_token=access_token)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Authenticate and receive auth cookies",
)
@limiter.limit(settings.RATE_LIMIT_AUTH)
async def login(request: Request, response: Response, payload: UserLogin, users=Depends(get_user_repository)):
    user, (access_token, refresh_token) = await AuthService.login(users, payload)
    set_auth_cookies(response, access_token, refresh_token)
    return AuthResponse(user=UserResponse.model_validate(user), access_token=access_token)


@router.post("/refresh", response_model=MessageResponse, summary="Exchange the refresh cookie for new tokens")
async def refresh(request: Request, response: Response, users=Depends(get_user_repository)):
    try:
        _, (access_token, refresh_token) = await AuthService.refresh(
            users, read_signed_cookie(request, REFRESH_COOKIE)
        )
    except HTTPException as exc:
        # A raised exception would drop the cookie-clearing headers
        rejected = JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
        clear_auth_cookies(rejected)
        return rejected
    set_auth_cookies(response, access_token, refresh_token)
    return MessageResponse(message="Token refreshed successfully")


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response, users=Depends(get_user_repository)):
    await AuthService.revoke(users, read_signed_cookie(request, REFRESH_COOKIE))
    clear_auth_cookies(response)
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get the current authenticated user's profile",
)
async def get_me(user_id: str = Depends(get_current_user), users=Depends(get_user_repository)):
    return await AuthService.get_user_by_id(users, int(user_id))


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    request: Request,
    response: Response,
    payload: PasswordChange,
    user_id: str = Depends(get_current_user),
    users=Depends(get_user_repository),
):
    await AuthService.change_password(users, int(user_id), payload, read_signed_cookie(request, REFRESH_COOKIE))
    clear_auth_cookies(response)
    return MessageResponse(message="Password changed successfully. Please log in again.")


# --- Address book ---

@router.get("/me/addresses", response_model=UserResponse)
async def list_addresses(user_id: str = Depends(get_current_user), users=Depends(get_user_repository)):
    return await AuthService.get_user_by_id(users, int(user_id))


@router.post("/me/addresses", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def add_address(
    payload: AddressCreate,
    user_id: str = Depends(get_current_user),
    users=Depends(get_user_repository),
):
    return await AuthService.add_address(users, int(user_id), payload)


@router.put("/me/addresses/{address_id}/default", response_model=UserResponse)
async def set_default_address(
    address_id: int,
    user_id: str = Depends(get_current_user),
    users=Depends(get_user_repository),
):
    return await AuthService.set_default_address(users, int(user_id), address_id)


@router.delete("/me/addresses/{address_id}", response_model=UserResponse)
async def remove_address(
    address_id: int,
    user_id: str = Depends(get_current_user),
    users=Depends(get_user_repository),
):
    return await AuthService.remove_address(users, int(user_id), address_id)


# --- Wishlist ---

@router.get("/me/wishlist", response_model=list[int])
async def get_wishlist(user_id: str = Depends(get_current_user), users=Depends(get_user_repository)):
    user = await AuthService.get_user_by_id(users, int(user_id))
    return user.wishlist


@router.post("/me/wishlist/{product_id}", response_model=list[int])
async def add_to_wishlist(
    product_id: int,
    user_id: str = Depends(get_current_user),
    users=Depends(get_user_repository),
    products=Depends(get_product_repository),
):
    user = await AuthService.add_to_wishlist(users, products, int(user_id), product_id)
    return user.wishlist


@router.delete("/me/wishlist/{product_id}", response_model=list[int])
async def remove_from_wishlist(
    product_id: int,
    user_id: str = Depends(get_current_user),
    users=Depends(get_user_repository),
):
    user = await AuthService.remove_from_wishlist(users, int(user_id), product_id)
    return user.wishlist
