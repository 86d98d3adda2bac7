"""Bundle of every entity façade, built over one ``DataAccessService``."""

from dataclasses import dataclass

from portal.domain.entities import EntityName

from .app_service import AppService
from .client_service import ClientService
from .content_service import PopularTopicService, RecentUpdateService
from .data_access_service import DataAccessService
from .entity_service import EntityService
from .feature_request_service import FeatureRequestService
from .invoice_service import InvoiceService
from .knowledge_base_service import KnowledgeBaseService
from .qr_code_service import QRCodeService
from .ticket_service import TicketService
from .user_service import AdminUserService, UserService


@dataclass
class EntityServices:
    data_access: DataAccessService
    clients: ClientService
    tickets: TicketService
    apps: AppService
    feature_requests: FeatureRequestService
    knowledge_base: KnowledgeBaseService
    users: UserService
    admin_users: AdminUserService
    recent_updates: RecentUpdateService
    popular_topics: PopularTopicService
    invoices: InvoiceService
    qr_codes: QRCodeService

    @classmethod
    def build(
        cls, data_access: DataAccessService, *, ticket_number_prefix: str = "HCTC"
    ) -> "EntityServices":
        return cls(
            data_access=data_access,
            clients=ClientService(data_access),
            tickets=TicketService(data_access, ticket_number_prefix=ticket_number_prefix),
            apps=AppService(data_access),
            feature_requests=FeatureRequestService(data_access),
            knowledge_base=KnowledgeBaseService(data_access),
            users=UserService(data_access),
            admin_users=AdminUserService(data_access),
            recent_updates=RecentUpdateService(data_access),
            popular_topics=PopularTopicService(data_access),
            invoices=InvoiceService(data_access),
            qr_codes=QRCodeService(data_access),
        )

    def for_entity(self, entity: EntityName | str) -> EntityService:
        """The façade owning ``entity`` (an EntityName, slug or physical table name)."""
        definition = self.data_access.registry.resolve(entity)
        return getattr(self, definition.entity.name.lower())
