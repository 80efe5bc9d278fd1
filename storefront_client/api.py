"""
Async client for the storefront REST API.

Authentication rides on the HTTP-only cookies the server sets, so the
client only has to keep its cookie jar. When a request other than login,
register or refresh comes back 401 the client asks `/auth/refresh` for a
new token pair once and replays the original request; if the refresh
itself is rejected the session is over and `SessionExpired` is raised.
"""
from typing import Any, Optional

import httpx
import structlog

from .guest_cart import GuestCart

logger = structlog.get_logger(__name__)

REFRESH_PATH = "/auth/refresh"
# A 401 from these means bad credentials, not a stale session
NO_REFRESH_PATHS = {REFRESH_PATH, "/auth/login", "/auth/register"}


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, errors: Optional[list] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


class SessionExpired(ApiError):
    pass


def _error_from(response: httpx.Response) -> ApiError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    message = body.get("detail") if isinstance(body, dict) else None
    errors = body.get("errors") if isinstance(body, dict) else None
    return ApiError(response.status_code, str(message or response.reason_phrase or "Request failed"), errors)


class StorefrontClient:

    def __init__(
        self,
        base_url: str = "http://localhost:5000/api",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    async def _refresh(self) -> bool:
        response = await self._client.post(REFRESH_PATH)
        if response.is_success:
            return True
        logger.info("session_refresh_rejected", status=response.status_code)
        return False

    async def request(self, method: str, path: str, json: Any = None, params: Optional[dict] = None) -> Any:
        """
        Sends a JSON request and returns the decoded body.

        A 401 from any endpoint outside NO_REFRESH_PATHS triggers one
        refresh and one retry. Any other non-2xx status raises `ApiError`.
        """
        response = await self._client.request(method, path, json=json, params=params)

        if response.status_code == 401 and path not in NO_REFRESH_PATHS:
            if not await self._refresh():
                raise SessionExpired(401, "Session expired. Please log in again.")
            response = await self._client.request(method, path, json=json, params=params)

        if not response.is_success:
            raise _error_from(response)
        if not response.content:
            return None
        return response.json()

    # --- auth ---

    async def register(self, name: str, email: str, password: str) -> dict:
        return await self.request("POST", "/auth/register", json={"name": name, "email": email, "password": password})

    async def login(self, email: str, password: str) -> dict:
        return await self.request("POST", "/auth/login", json={"email": email, "password": password})

    async def logout(self) -> dict:
        return await self.request("POST", "/auth/logout")

    async def me(self) -> dict:
        return await self.request("GET", "/auth/me")

    async def change_password(self, current_password: str, new_password: str) -> dict:
        return await self.request(
            "POST",
            "/auth/change-password",
            json={"current_password": current_password, "new_password": new_password},
        )

    async def add_address(self, address: dict) -> dict:
        return await self.request("POST", "/auth/me/addresses", json=address)

    async def wishlist(self) -> list[int]:
        return await self.request("GET", "/auth/me/wishlist")

    async def add_to_wishlist(self, product_id: int) -> list[int]:
        return await self.request("POST", f"/auth/me/wishlist/{product_id}")

    async def remove_from_wishlist(self, product_id: int) -> list[int]:
        return await self.request("DELETE", f"/auth/me/wishlist/{product_id}")

    # --- products ---

    async def list_products(self, **filters) -> dict:
        params = {key: value for key, value in filters.items() if value is not None}
        return await self.request("GET", "/products", params=params)

    async def get_product(self, product_id: int) -> dict:
        return await self.request("GET", f"/products/{product_id}")

    async def categories(self) -> list[str]:
        body = await self.request("GET", "/products/meta/categories")
        return body["categories"]

    # --- cart ---

    async def get_cart(self) -> dict:
        return await self.request("GET", "/cart")

    async def add_to_cart(self, product_id: int, quantity: int = 1) -> dict:
        return await self.request("POST", "/cart/add", json={"product_id": product_id, "quantity": quantity})

    async def update_cart_item(self, product_id: int, quantity: int) -> dict:
        return await self.request("PUT", f"/cart/update/{product_id}", json={"quantity": quantity})

    async def remove_from_cart(self, product_id: int) -> dict:
        return await self.request("DELETE", f"/cart/remove/{product_id}")

    async def clear_cart(self) -> dict:
        return await self.request("DELETE", "/cart/clear")

    async def save_for_later(self, product_id: int) -> dict:
        return await self.request("POST", f"/cart/save-for-later/{product_id}")

    async def move_to_cart(self, product_id: int) -> dict:
        return await self.request("POST", f"/cart/move-to-cart/{product_id}")

    async def merge_guest_cart(self, guest_cart: GuestCart) -> dict:
        """Pushes the guest cart into the logged-in user's cart, then empties it."""
        if not guest_cart.lines:
            return await self.get_cart()
        cart = await self.request("POST", "/cart/merge", json=guest_cart.merge_payload())
        guest_cart.clear()
        return cart

    # --- orders ---

    async def place_order(
        self,
        shipping_address: dict,
        items: Optional[list[dict]] = None,
        payment_method: str = "card",
        discount: float = 0,
        notes: Optional[str] = None,
    ) -> dict:
        payload = {
            "shipping_address": shipping_address,
            "payment_method": payment_method,
            "discount": discount,
            "notes": notes,
        }
        if items is not None:
            payload["items"] = items
        return await self.request("POST", "/orders", json=payload)

    async def list_orders(self) -> list[dict]:
        return await self.request("GET", "/orders")

    async def get_order(self, order_id: str) -> dict:
        return await self.request("GET", f"/orders/{order_id}")

    async def cancel_order(self, order_id: str, reason: Optional[str] = None) -> dict:
        return await self.request("POST", f"/orders/{order_id}/cancel", json={"reason": reason})
