from fastapi import Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordBearer

from .cookies import ACCESS_COOKIE, read_signed_cookie
from .jwt_handler import TokenExpired, TokenInvalid, decode_access_token

# Bearer header is the fallback for API clients that don't keep cookies
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def extract_token(request: Request, bearer: str | None = None) -> str | None:
    """The signed HTTP-only cookie wins over the Authorization header."""
    return read_signed_cookie(request, ACCESS_COOKIE) or bearer


async def get_current_user(request: Request, token: str = Depends(oauth2_scheme)) -> str:
    """Dependency to validate the access token and return the user ID (sub)."""
    token = extract_token(request, token)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(token)
    except TokenExpired:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except TokenInvalid:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")

    # Store in request state for downstream use (like rate limiting and role checks)
    request.state.user_id = payload["sub"]
    request.state.role = payload.get("role", "user")
    return payload["sub"]


async def require_admin(request: Request, user_id: str = Depends(get_current_user)) -> str:
    if request.state.role != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin privileges required")
    return user_id
