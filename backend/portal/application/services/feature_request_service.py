"""Application service for feature requests and their votes."""

import logging

from portal.application.schemas import (
    FeatureRequestCreate,
    FeatureRequestResponse,
    FeatureRequestUpdate,
)
from portal.domain.entities import EntityName
from portal.domain.exceptions import ValidationError

from .entity_service import EntityService

logger = logging.getLogger(__name__)


class FeatureRequestService(
    EntityService[FeatureRequestCreate, FeatureRequestUpdate, FeatureRequestResponse]
):
    entity = EntityName.FEATURE_REQUESTS
    label = "FeatureRequest"
    create_schema = FeatureRequestCreate
    update_schema = FeatureRequestUpdate
    response_schema = FeatureRequestResponse

    def _prepare_create(self, record: dict) -> dict:
        voters = list(dict.fromkeys(record.get("upvotedBy", [])))
        record["upvotedBy"] = voters
        record["votes"] = max(record.get("votes", 0), len(voters))
        return record

    async def upvote(self, request_id: str, client_id: str) -> FeatureRequestResponse:
        """Record one vote per client; repeat votes leave the record untouched."""
        if not client_id:
            raise ValidationError.single("clientId", "Client id is required")

        def add_vote(record: dict) -> tuple[dict, dict] | None:
            voters = list(record.get("upvotedBy") or [])
            if client_id in voters:
                return None
            voters.append(client_id)
            # votes changes on every upvote, so it guards upvotedBy as well
            return {"upvotedBy": voters, "votes": len(voters)}, {"votes": record.get("votes")}

        updated = await self._read_modify_write(request_id, add_vote)
        logger.info("Feature request %s has %d votes after %s", request_id, updated.votes, client_id)
        return updated
