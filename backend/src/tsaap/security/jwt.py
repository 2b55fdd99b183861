"""Access tokens: signed JWTs whose subject is the user id."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from jose import JWTError, jwt

from ..config import get_settings

TOKEN_TYPE = "access"


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign ``data`` with an expiry, default lifetime from settings."""
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**data, "exp": datetime.now(timezone.utc) + lifetime, "type": TOKEN_TYPE}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Claims of a valid, unexpired access token; None otherwise."""
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    return claims if claims.get("type") == TOKEN_TYPE else None


def get_user_id_from_token(token: str) -> Optional[UUID]:
    claims = decode_access_token(token)
    subject = claims.get("sub") if claims else None
    if not subject:
        return None
    try:
        return UUID(subject)
    except ValueError:
        return None
