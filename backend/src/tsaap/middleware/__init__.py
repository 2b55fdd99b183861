"""Authentication dependencies for the API routers."""

from .auth import JWTBearer, get_current_user, get_current_user_id

__all__ = ["get_current_user", "get_current_user_id", "JWTBearer"]
