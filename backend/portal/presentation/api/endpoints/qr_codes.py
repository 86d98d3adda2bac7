"""QR code issuance and redemption."""

from fastapi import APIRouter, Depends, status

from portal.application.schemas import ApiResponse, QRCodeResponse
from portal.application.services import ClientService, QRCodeService
from portal.infrastructure.dependencies import get_client_service, get_qr_code_service
from portal.presentation.api.envelope import ok

router = APIRouter(tags=["QR Codes"])


@router.post(
    "/clients/{client_id}/qr-codes",
    response_model=ApiResponse[QRCodeResponse],
    status_code=status.HTTP_201_CREATED,
)
async def issue_client_qr_code(
    client_id: str,
    clients: ClientService = Depends(get_client_service),
    qr_codes: QRCodeService = Depends(get_qr_code_service),
) -> ApiResponse:
    """Issue a 30-day onboarding code for an existing client."""
    client = await clients.get(client_id)
    return ok(await qr_codes.issue(client))


@router.post("/qr-codes/{code}/redeem", response_model=ApiResponse[QRCodeResponse])
async def redeem_qr_code(
    code: str,
    qr_codes: QRCodeService = Depends(get_qr_code_service),
) -> ApiResponse:
    return ok(await qr_codes.redeem(code))
