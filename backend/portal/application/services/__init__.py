from .table_registry import TableRegistry
from .data_access_service import DataAccessService, decode_cursor, encode_cursor
from .entity_service import EntityService
from .client_service import ClientService
from .ticket_service import TicketService
from .app_service import AppService
from .user_service import AdminUserService, UserService
from .feature_request_service import FeatureRequestService
from .knowledge_base_service import KnowledgeBaseService
from .content_service import PopularTopicService, RecentUpdateService
from .invoice_service import InvoiceService
from .qr_code_service import QRCodeService
from .entity_services import EntityServices
from .auth_service import AuthService
from .transport_selector import TransportSelector

__all__ = [
    "TableRegistry",
    "DataAccessService",
    "decode_cursor",
    "encode_cursor",
    "EntityService",
    "ClientService",
    "TicketService",
    "AppService",
    "AdminUserService",
    "UserService",
    "FeatureRequestService",
    "KnowledgeBaseService",
    "PopularTopicService",
    "RecentUpdateService",
    "InvoiceService",
    "QRCodeService",
    "EntityServices",
    "AuthService",
    "TransportSelector",
]
