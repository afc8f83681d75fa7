"""Account API routes: signup, login and logout."""

from fastapi import APIRouter, Depends, Request, Response, status

from api.dependencies.auth import get_auth_provider
from api.v1.dependencies import get_auth_service, get_profile_service
from api.v1.schemas.auth import AuthResponse, LoginRequest, SignupRequest
from api.v1.schemas.user import MeResponse
from core.config import settings
from core.rate_limit import AUTH_LIMIT, limiter
from domain.entities.profile import Profile
from domain.entities.user import User
from domain.services.auth_service import AuthService
from domain.services.profile_service import ProfileService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_session(
    response: Response,
    user: User,
    profile: Profile | None,
    provider: JWTAuthProvider,
) -> AuthResponse:
    """Sign a token for ``user`` and mirror it into the session cookie."""
    token = provider.create_token(TokenUser.from_user(user))
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=provider.expire_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return AuthResponse(
        access_token=token,
        expires_in=provider.expire_seconds,
        user=MeResponse.build(user, profile),
    )


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={
        201: {"description": "Account created, session started"},
        400: {"description": "Invalid username, email or password"},
        409: {"description": "Email or username already taken"},
    },
)
@limiter.limit(AUTH_LIMIT)  # type: ignore[untyped-decorator]
async def signup(
    request: Request,
    response: Response,
    body: SignupRequest,
    service: AuthService = Depends(get_auth_service),
    provider: JWTAuthProvider = Depends(get_auth_provider),
) -> AuthResponse:
    """Register a new account and log it in."""
    user = await service.signup(
        username=body.username,
        email=str(body.email),
        password=body.password,
    )
    return _issue_session(response, user, None, provider)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
    responses={
        200: {"description": "Session started"},
        401: {"description": "Invalid credentials"},
    },
)
@limiter.limit(AUTH_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    profiles: ProfileService = Depends(get_profile_service),
    provider: JWTAuthProvider = Depends(get_auth_provider),
) -> AuthResponse:
    """Log in with an email address or a username."""
    user = await service.login(body.identifier, body.password)
    profile = await profiles.get_profile(user.id)
    return _issue_session(response, user, profile, provider)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Log out",
)
async def logout(response: Response) -> None:
    """Clear the session cookie. Bearer tokens simply expire."""
    response.delete_cookie(settings.session_cookie_name)
