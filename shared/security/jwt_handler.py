import uuid
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from shared.config import settings

ALGORITHM = "HS256"


class TokenExpired(Exception):
    pass


class TokenInvalid(Exception):
    pass


def _encode(claims: dict, secret: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = claims.copy()
    to_encode.update({"iat": int(now.timestamp()), "exp": now + expires_delta})
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    """Creates a short-lived JWT access token with a UTC expiration."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode({**data, "type": "access"}, settings.JWT_SECRET_KEY, expires_delta)


def create_refresh_token(data: dict, expires_delta: timedelta = None) -> str:
    """Creates a long-lived refresh token carrying a unique id (jti) for revocation."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    claims = {**data, "type": "refresh", "jti": uuid.uuid4().hex}
    return _encode(claims, settings.JWT_REFRESH_SECRET_KEY, expires_delta)


def generate_tokens(user) -> tuple[str, str]:
    claims = {"sub": str(user.id), "email": user.email, "role": user.role, "ver": user.token_version}
    return create_access_token(claims), create_refresh_token(claims)


def _decode(token: str, secret: str, expected_type: str) -> dict:
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except ExpiredSignatureError as exc:
        raise TokenExpired() from exc
    except JWTError as exc:
        raise TokenInvalid() from exc
    if payload.get("type") != expected_type or "sub" not in payload:
        raise TokenInvalid()
    return payload


def decode_access_token(token: str) -> dict:
    """Returns the payload, raising TokenExpired or TokenInvalid."""
    return _decode(token, settings.JWT_SECRET_KEY, "access")


def decode_refresh_token(token: str) -> dict:
    return _decode(token, settings.JWT_REFRESH_SECRET_KEY, "refresh")


def verify_access_token(token: str) -> dict | None:
    """Decodes and verifies the JWT. Returns payload if valid, None if invalid/expired."""
    try:
        return decode_access_token(token)
    except (TokenExpired, TokenInvalid):
        return None

