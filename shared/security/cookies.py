from fastapi import Request, Response
from itsdangerous import BadSignature, Signer

from shared.config import settings

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"

_signer = Signer(settings.COOKIE_SECRET, salt="auth-cookie")


def sign_cookie(value: str) -> str:
    return _signer.sign(value).decode()


def unsign_cookie(value: str | None) -> str | None:
    """Returns the original value, or None when the cookie is absent or tampered with."""
    if not value:
        return None
    try:
        return _signer.unsign(value).decode()
    except BadSignature:
        return None


def read_signed_cookie(request: Request, name: str) -> str | None:
    return unsign_cookie(request.cookies.get(name))


def _set_cookie(response: Response, name: str, value: str, max_age: int):
    response.set_cookie(
        name,
        sign_cookie(value),
        max_age=max_age,
        httponly=True,
        secure=settings.IS_PRODUCTION,
        samesite="strict",
    )


def set_auth_cookies(response: Response, access_token: str, refresh_token: str):
    _set_cookie(response, ACCESS_COOKIE, access_token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60)
    _set_cookie(response, REFRESH_COOKIE, refresh_token, settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60)


def clear_auth_cookies(response: Response):
    response.delete_cookie(ACCESS_COOKIE, httponly=True, secure=settings.IS_PRODUCTION, samesite="strict")
    response.delete_cookie(REFRESH_COOKIE, httponly=True, secure=settings.IS_PRODUCTION, samesite="strict")
