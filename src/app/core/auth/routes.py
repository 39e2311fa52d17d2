"""Authentication API routes."""

from fastapi import APIRouter, Request, status

from app.core.auth.dependencies import CurrentUser
from app.core.auth.service import AuthSvc
from app.core.logging.middleware import get_client_ip
from app.modules.users.schemas import (
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserResponse,
)


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new tenant",
    description="Creates a tenant and its first user. The user becomes the tenant's administrator.",
)
async def register(data: RegisterRequest, service: AuthSvc) -> RegisterResponse:
    user, tokens = await service.register(
        email=data.email,
        password=data.password,
        full_name=data.full_name,
        tenant_name=data.tenant_name,
        tenant_rut=data.tenant_rut,
    )

    return RegisterResponse(
        user=UserResponse.model_validate(user),
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=tokens.expires_in,
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
)
async def login(
    data: LoginRequest,
    service: AuthSvc,
    request: Request,
) -> TokenResponse:
    _user, tokens = await service.login(
        email=data.email,
        password=data.password,
        user_agent=request.headers.get("User-Agent"),
        ip_address=get_client_ip(request),
    )
    return TokenResponse(**tokens.model_dump())


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh access token",
    description="Exchange a refresh token for a new token pair. The old refresh token is revoked.",
)
async def refresh_token(
    data: RefreshTokenRequest,
    service: AuthSvc,
    request: Request,
) -> TokenResponse:
    tokens = await service.refresh_tokens(
        refresh_token=data.refresh_token,
        user_agent=request.headers.get("User-Agent"),
        ip_address=get_client_ip(request),
    )
    return TokenResponse(**tokens.model_dump())


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout",
)
async def logout(data: RefreshTokenRequest, service: AuthSvc) -> None:
    await service.logout(data.refresh_token)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
)
async def get_me(current_user: CurrentUser) -> UserResponse:
    return UserResponse.model_validate(current_user)
