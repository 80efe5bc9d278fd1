from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from shared.config import settings
from .dependencies import extract_token
from .jwt_handler import verify_access_token


def user_id_or_ip(request: Request) -> str:
    """
    Key function for SlowAPI.
    Extracts the user ID from the access cookie or the Authorization header.
    Falls back to the client's IP address if unauthenticated.
    """
    bearer = None
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        bearer = auth_header.split(" ", 1)[1]

    token = extract_token(request, bearer)
    if token:
        payload = verify_access_token(token)
        if payload:
            return f"user:{payload['sub']}"

    return f"ip:{get_remote_address(request)}"


# Every route gets the default budget; register/login carry a stricter one
limiter = Limiter(key_func=user_id_or_ip, default_limits=[settings.RATE_LIMIT_DEFAULT])
