"""Login and token verification."""

from fastapi import APIRouter, Depends

from portal.application.schemas import ApiResponse, LoginRequest, LoginResponse, VerifyResponse
from portal.application.services import AuthService
from portal.infrastructure.dependencies import get_auth_service
from portal.presentation.api.envelope import ok
from portal.presentation.api.security import bearer_token

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse:
    """Exchange configured credentials for a bearer token."""
    return ok(service.login(data))


@router.api_route("/verify", methods=["GET", "POST"], response_model=ApiResponse[VerifyResponse])
async def verify(
    token: str | None = Depends(bearer_token),
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse:
    """Echo the identity carried by a valid bearer token."""
    return ok(service.verify(token))
