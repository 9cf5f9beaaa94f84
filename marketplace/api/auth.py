"""
Bearer token authentication.

Tokens are issued by the auth service; this service only verifies them and
turns the claims into a Principal.
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from marketplace.config.logging import bind_request_context, get_logger
from marketplace.config.settings import settings
from marketplace.domain.exceptions.access_error import ForbiddenError
from marketplace.domain.value_objects.principal import Principal, UserType

logger = get_logger(__name__)

# Optional so anonymous callers reach endpoints that allow them
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_token(token: str) -> Principal:
    """Decode and validate a JWT, returning the caller's principal."""
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        raise _unauthorized("Invalid or expired token")

    try:
        return Principal(
            id=UUID(str(payload["sub"])),
            user_type=UserType(payload["user_type"]),
        )
    except (KeyError, ValueError):
        logger.warning("Token carried malformed claims")
        raise _unauthorized("Invalid token claims")


async def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Principal]:
    """Principal when a bearer token is present, None for anonymous callers."""
    if credentials is None:
        return None
    principal = decode_token(credentials.credentials)
    bind_request_context(user_id=str(principal.id), user_type=principal.user_type.value)
    return principal


async def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    """Require an authenticated caller."""
    if principal is None:
        raise _unauthorized("Not authenticated")
    return principal


def require_role(*user_types: UserType):
    """Dependency factory restricting an endpoint to some user types."""

    async def _check(
        principal: Principal = Depends(get_current_principal),
    ) -> Principal:
        if principal.user_type not in user_types:
            allowed = ", ".join(t.value for t in user_types)
            raise ForbiddenError(f"This action requires one of: {allowed}")
        return principal

    return _check


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
OptionalPrincipal = Annotated[Optional[Principal], Depends(get_optional_principal)]
ClientPrincipal = Annotated[Principal, Depends(require_role(UserType.CLIENT))]
ArtistPrincipal = Annotated[Principal, Depends(require_role(UserType.ARTIST))]
AdminPrincipal = Annotated[Principal, Depends(require_role(UserType.ADMIN))]
