"""Authentication dependencies for FastAPI.

A request is authenticated by a bearer token in the ``Authorization``
header or, failing that, by the session cookie set on signup/login. Both
carry the same JWT.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from domain.services.auth_service import AuthService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Security schemes for OpenAPI docs
bearer_scheme = HTTPBearer(auto_error=False)
session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


@lru_cache
def get_auth_provider() -> JWTAuthProvider:
    """Get the process-wide auth provider."""
    return JWTAuthProvider()


@lru_cache
def get_account_service() -> AuthService:
    """Account lookups for checking that a token's user still exists."""
    return AuthService(lambda: SQLAlchemyUnitOfWork(async_session_factory))


def _extract_token(
    credentials: HTTPAuthorizationCredentials | None, cookie_token: str | None
) -> str | None:
    if credentials and credentials.credentials:
        return credentials.credentials
    return cookie_token or None


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    cookie_token: Annotated[str | None, Depends(session_cookie)],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
    auth_service: AuthService = Depends(get_account_service),
) -> TokenUser:
    """
    Dependency to get the current authenticated user.

    The token must belong to an account that still exists.

    Raises:
        AuthenticationError: If no token provided, the token is invalid or
            its account no longer exists
    """
    token = _extract_token(credentials, cookie_token)
    if not token:
        raise AuthenticationError(
            message="Authentication required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = await auth_provider.validate_token(token)
    if not user:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    if not await auth_service.account_exists(user.id):
        raise AuthenticationError(
            message="Account no longer exists",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    cookie_token: Annotated[str | None, Depends(session_cookie)],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser | None:
    """
    Dependency to get the current user if authenticated.

    Returns:
        TokenUser if authenticated, None otherwise. A bad token on a public
        endpoint is treated as anonymous rather than rejected.
    """
    token = _extract_token(credentials, cookie_token)
    if not token:
        return None

    return await auth_provider.validate_token(token)


# Type alias for convenience in route handlers
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
OptionalUser = Annotated[TokenUser | None, Depends(get_optional_user)]
