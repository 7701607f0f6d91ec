from .auth import (
    AuthenticatedUser,
    FirebaseTokenVerifier,
    get_current_user,
    require_admin,
    require_auth,
)
from .correlation import CorrelationIdMiddleware

__all__ = [
    "AuthenticatedUser",
    "CorrelationIdMiddleware",
    "FirebaseTokenVerifier",
    "get_current_user",
    "require_admin",
    "require_auth",
]
