from .api import ApiError, SessionExpired, StorefrontClient
from .guest_cart import GuestCart

__all__ = ["ApiError", "GuestCart", "SessionExpired", "StorefrontClient"]
