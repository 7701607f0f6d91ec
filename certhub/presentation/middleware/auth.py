"""
Caller identity for the certificate API.

Callers present a Firebase ID token, either as a bearer token or in the
``access_token`` cookie set by the web client. Tokens are checked against
Google's published signing keys; whether a caller is an administrator is
decided by the role stored in the ``users`` table, not by token claims.
"""

import time
from dataclasses import dataclass
from typing import Annotated, Any

import httpx
import structlog
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwk, jwt

from ...config import settings
from ...infrastructure.adapters import PostgresUserRoleReader
from ..api.dependencies import get_user_role_reader

logger = structlog.get_logger()

bearer = HTTPBearer(auto_error=False)

GOOGLE_KEYS_URL = "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com"
TOKEN_ISSUER_PREFIX = "https://securetoken.google.com/"
TOKEN_COOKIE = "access_token"  # noqa: S105
SIGNING_ALGORITHM = "RS256"
MANDATORY_CLAIMS = ("sub", "iss", "aud", "iat", "exp")


@dataclass
class AuthenticatedUser:
    sub: str  # Firebase uid, the same value as users.user_id
    email: str | None = None
    name: str | None = None
    role: str | None = None

    @property
    def user_id(self) -> str:
        return self.sub


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


class _KeySet:
    """Google's signing keys, refetched after ``max_age`` seconds."""

    def __init__(self, url: str, max_age: int) -> None:
        self.url = url
        self.max_age = max_age
        self._keys: dict[str, dict[str, Any]] = {}
        self._fetched_at = 0.0

    async def find(self, kid: str) -> dict[str, Any] | None:
        if time.monotonic() - self._fetched_at >= self.max_age:
            await self._refresh()
        if kid not in self._keys:
            # Google rotates keys every few hours; a new kid means our copy is stale
            logger.info("Unknown signing key, refetching key set", kid=kid)
            await self._refresh()
        return self._keys.get(kid)

    async def _refresh(self) -> None:
        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as e:
            if not self._keys:
                logger.error("Signing keys unavailable", url=self.url, error=str(e))
                raise JWTError("Signing keys unavailable") from e
            logger.warning("Signing key refresh failed, keeping previous keys", error=str(e))
            return

        self._keys = {key["kid"]: key for key in body.get("keys", []) if "kid" in key}
        self._fetched_at = time.monotonic()
        logger.debug("Signing keys refreshed", count=len(self._keys))


class FirebaseTokenVerifier:
    """
    Checks Firebase ID tokens for one project.

    A token is accepted only when it is RS256-signed by a current Google key,
    its audience is the project id, its issuer is the project's securetoken
    issuer, and it is within its validity window.
    """

    def __init__(self, project_id: str, keys_url: str = GOOGLE_KEYS_URL, cache_ttl: int = 3600):
        if not project_id:
            raise ValueError("Firebase project id is required for token validation")
        self.audience = project_id
        self.issuer = TOKEN_ISSUER_PREFIX + project_id
        self._keys = _KeySet(keys_url, cache_ttl)

    async def verify_token(self, token: str) -> dict[str, Any]:
        """Return the token's claims, or raise a 401 ``HTTPException``."""
        try:
            claims = await self._decode(token)
        except JWTError as e:
            logger.warning("Rejected ID token", error=str(e))
            raise _unauthorized("Invalid or expired token") from e
        logger.debug("ID token accepted", sub=claims["sub"])
        return claims

    async def _decode(self, token: str) -> dict[str, Any]:
        header = jwt.get_unverified_header(token)
        if header.get("alg") != SIGNING_ALGORITHM:
            raise JWTError(f"Unexpected signing algorithm {header.get('alg')!r}")
        kid = header.get("kid")
        if not kid:
            raise JWTError("Token header has no kid")

        key = await self._keys.find(kid)
        if key is None:
            raise JWTError(f"No signing key with kid {kid!r}")

        claims = jwt.decode(
            token,
            jwk.construct(key),
            algorithms=[SIGNING_ALGORITHM],
            audience=self.audience,
            issuer=self.issuer,
            options={"require_exp": True, "require_iat": True},
        )
        absent = [name for name in MANDATORY_CLAIMS if not claims.get(name)]
        if absent:
            raise JWTError(f"Token lacks claims {absent}")
        return claims


_verifier: FirebaseTokenVerifier | None = None


def get_token_verifier() -> FirebaseTokenVerifier:
    global _verifier
    if _verifier is None:
        if not settings.firebase_project_id:
            raise RuntimeError("Firebase project id not configured")
        _verifier = FirebaseTokenVerifier(settings.firebase_project_id)
    return _verifier


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
) -> AuthenticatedUser | None:
    """The caller, or None when the request carries no token.

    With ``AUTH_ENABLED=false`` every request acts as a local administrator.
    """
    if not settings.auth_enabled:
        return AuthenticatedUser(
            sub="dev-admin",
            email="dev@example.com",
            name="Development Admin",
            role=settings.admin_roles[0] if settings.admin_roles else None,
        )

    token = credentials.credentials if credentials else request.cookies.get(TOKEN_COOKIE)
    if not token:
        return None

    claims = await get_token_verifier().verify_token(token)
    return AuthenticatedUser(sub=claims["sub"], email=claims.get("email"), name=claims.get("name"))


async def require_auth(
    user: Annotated[AuthenticatedUser | None, Depends(get_current_user)],
) -> AuthenticatedUser:
    if user is None:
        raise _unauthorized("Authentication required")
    return user


async def require_admin(
    user: Annotated[AuthenticatedUser, Depends(require_auth)],
    roles: Annotated[PostgresUserRoleReader, Depends(get_user_role_reader)],
) -> AuthenticatedUser:
    """Lets the request through only for callers whose stored role is an admin role."""
    if user.role is None:
        user.role = await roles.get_role(user.user_id)

    if user.role not in settings.admin_roles:
        logger.warning("Admin endpoint refused", user_id=user.user_id, role=user.role)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin role required")
    return user
