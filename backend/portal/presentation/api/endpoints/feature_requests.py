"""Feature-request voting."""

from fastapi import APIRouter, Depends

from portal.application.schemas import ApiResponse, FeatureRequestResponse, UpvoteRequest
from portal.application.services import FeatureRequestService
from portal.infrastructure.dependencies import get_feature_request_service
from portal.presentation.api.envelope import ok

router = APIRouter(prefix="/feature-requests", tags=["Feature Requests"])


@router.post("/{request_id}/upvote", response_model=ApiResponse[FeatureRequestResponse])
async def upvote_feature_request(
    request_id: str,
    data: UpvoteRequest,
    service: FeatureRequestService = Depends(get_feature_request_service),
) -> ApiResponse:
    """Add one vote per client; repeated votes are ignored."""
    return ok(await service.upvote(request_id, data.client_id))
