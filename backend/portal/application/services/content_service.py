"""Application services for home-page content: recent updates and popular topics."""

from portal.application.schemas import (
    PopularTopicCreate,
    PopularTopicResponse,
    PopularTopicUpdate,
    RecentUpdateCreate,
    RecentUpdateResponse,
    RecentUpdateUpdate,
)
from portal.domain.entities import EntityName

from .entity_service import EntityService


class RecentUpdateService(
    EntityService[RecentUpdateCreate, RecentUpdateUpdate, RecentUpdateResponse]
):
    entity = EntityName.RECENT_UPDATES
    label = "RecentUpdate"
    create_schema = RecentUpdateCreate
    update_schema = RecentUpdateUpdate
    response_schema = RecentUpdateResponse


class PopularTopicService(
    EntityService[PopularTopicCreate, PopularTopicUpdate, PopularTopicResponse]
):
    entity = EntityName.POPULAR_TOPICS
    label = "PopularTopic"
    create_schema = PopularTopicCreate
    update_schema = PopularTopicUpdate
    response_schema = PopularTopicResponse

    async def list_ordered(self, *, limit: int = 50) -> list[PopularTopicResponse]:
        """Active topics sorted by display order."""
        page = await self.list(limit=limit, filters={"isActive": True})
        return sorted(page.items, key=lambda topic: topic.order)
