from .jwt_handler import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    generate_tokens,
    verify_access_token,
)
from .cookies import clear_auth_cookies, read_signed_cookie, set_auth_cookies
from .dependencies import get_current_user, require_admin
from .rate_limiter import limiter, user_id_or_ip

__all__ = [
    "create_access_token",
    "create_refresh_token",
    "decode_refresh_token",
    "generate_tokens",
    "verify_access_token",
    "clear_auth_cookies",
    "read_signed_cookie",
    "set_auth_cookies",
    "get_current_user",
    "require_admin",
    "limiter",
    "user_id_or_ip"
]
