import re
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, Request, Response
from passlib.context import CryptContext
from jose import ExpiredSignatureError, JWTError, jwt

from sitecms.models.user import User
from sitecms.utils.base.errors import Forbidden, TokenExpired, TokenInvalid, Unauthorized
from sitecms.utils.config import settings


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)

DEFAULT_TTL_MS = 7 * 24 * 60 * 60 * 1000
_TTL_UNITS_MS = {
    "d": 24 * 60 * 60 * 1000,
    "h": 60 * 60 * 1000,
    "m": 60 * 1000,
}


def verify_password(plain: str, hashed: str) -> bool:
    """Verify plaintext password against a bcrypt hash."""
    return pwd_context.verify(plain, hashed)


def hash_password(plain: str) -> str:
    """Hash a plaintext password using bcrypt."""
    return pwd_context.hash(plain)


def ttl_to_milliseconds(ttl: str) -> int:
    """Convert a lifetime such as "7d", "12h" or "30m" to milliseconds.

    Only the trailing unit character is inspected; any other unit, or a
    missing count, falls back to 7 days.
    """
    match = re.match(r"^\s*(\d+)", ttl or "")
    unit = (ttl or "").strip()[-1:]
    if not match or unit not in _TTL_UNITS_MS:
        return DEFAULT_TTL_MS
    return int(match.group(1)) * _TTL_UNITS_MS[unit]


def issue_token(claims: dict[str, Any], ttl: str | None = None) -> str:
    """Create a signed session token carrying `claims` plus issue and expiry times."""
    now = datetime.now(timezone.utc)
    lifetime = timedelta(milliseconds=ttl_to_milliseconds(ttl or settings.jwt_expire))
    payload = {
        **claims,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def set_token_cookie(response: Response, token: str, ttl: str | None = None) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=ttl_to_milliseconds(ttl or settings.jwt_expire) // 1000,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


def clear_token_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.session_cookie_name, httponly=True)


def verify_token(token: str) -> dict[str, Any]:
    """Decode a session token; expiry and any other defect are reported separately."""
    try:
        claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise TokenExpired()
    except JWTError:
        raise TokenInvalid()
    if not claims.get("user_id"):
        raise TokenInvalid()
    return claims


def extract_token(request: Request) -> str | None:
    """Read the token from the session cookie, falling back to a Bearer header."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token

    authorization = request.headers.get("Authorization") or ""
    if authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip() or None
    return None


def get_current_user(request: Request) -> User:
    """Auth dependency: resolve the session token to an active user.

    The resolved user is also left on `request.state.user` for later stages.
    """
    token = extract_token(request)
    if not token:
        raise Unauthorized("Not authorized to access this route. Please login")

    claims = verify_token(token)
    user: User | None = User.objects(user_id=claims["user_id"]).first()
    if not user:
        raise Unauthorized("User not found. Token invalid")
    if not user.is_active:
        raise Forbidden("Account is deactivated. Please contact support")

    request.state.user = user
    return user


def require_admin(request: Request, _: User = Depends(get_current_user)) -> User:
    """Role gate layered on top of `get_current_user`."""
    user: User | None = getattr(request.state, "user", None)
    if user is None:
        raise Unauthorized("Not authorized. Please login first")
    if not user.is_admin:
        raise Forbidden("Access denied. Admin privileges required")
    return user


def resolve_session(request: Request) -> User | None:
    """Same resolution as `get_current_user` for status probes: never raises."""
    token = extract_token(request)
    if not token:
        return None
    try:
        claims = verify_token(token)
    except Unauthorized:
        return None
    user: User | None = User.objects(user_id=claims["user_id"]).first()
    if not user or not user.is_active:
        return None
    return user
