"""Application service for client companies."""

from portal.application.schemas import ClientCreate, ClientResponse, ClientUpdate
from portal.domain.entities import EntityName

from .entity_service import EntityService


class ClientService(EntityService[ClientCreate, ClientUpdate, ClientResponse]):
    entity = EntityName.CLIENTS
    label = "Client"
    create_schema = ClientCreate
    update_schema = ClientUpdate
    response_schema = ClientResponse

    async def find_by_email(self, email: str) -> ClientResponse | None:
        page = await self.query_by("EmailIndex", email.strip(), limit=1)
        return page.items[0] if page.items else None
