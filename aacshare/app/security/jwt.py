# aacshare/app/security/jwt.py
"""
Access and refresh token primitives.

Access tokens are stateless HS256 JWTs carrying the user id in ``sub``.
Refresh tokens are opaque random strings; their lifecycle lives in
repositories/auth.py (RefreshTokenRepository).
"""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from pydantic import ValidationError

from aacshare.app.core.config import settings
from aacshare.app.core.errors import InvalidToken
from aacshare.app.schemas.user import TokenPayload


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> int:
    """
    Verify signature and expiry and return the user id.

    Raises InvalidToken for a bad signature, an expired token, or claims
    that do not carry an integer user id.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require_exp": True, "require_sub": True},
        )
        token_data = TokenPayload(**payload)
    except (JWTError, ValidationError):
        raise InvalidToken()

    return token_data.sub


def generate_refresh_token() -> str:
    return secrets.token_urlsafe(32)
