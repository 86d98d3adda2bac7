from .common import (
    ApiResponse,
    CamelModel,
    CreateSchema,
    DeleteResult,
    EntityResponse,
    ErrorResponse,
    FieldErrorSchema,
    PageResponse,
    RecordResponse,
    UpdateSchema,
)
from .client import Address, ClientCreate, ClientResponse, ClientUpdate
from .ticket import (
    InternalNote,
    TicketCreate,
    TicketReply,
    TicketReplyCreate,
    TicketResponse,
    TicketStatsResponse,
    TicketUpdate,
)
from .app import AppCreate, AppResponse, AppUpdate
from .user import UserCreate, UserResponse, UserUpdate
from .feature_request import (
    FeatureRequestCreate,
    FeatureRequestResponse,
    FeatureRequestUpdate,
    UpvoteRequest,
)
from .knowledge_base import ArticleCreate, ArticleResponse, ArticleUpdate
from .content import (
    PopularTopicCreate,
    PopularTopicResponse,
    PopularTopicUpdate,
    RecentUpdateCreate,
    RecentUpdateResponse,
    RecentUpdateUpdate,
)
from .invoice import (
    InvoiceCreate,
    InvoiceLineItem,
    InvoiceResponse,
    InvoiceUpdate,
    PricedLineItem,
)
from .qr_code import QRCodeCreate, QRCodeResponse, QRCodeUpdate
from .auth import AuthUser, LoginRequest, LoginResponse, VerifyResponse

__all__ = [
    "ApiResponse",
    "CamelModel",
    "CreateSchema",
    "DeleteResult",
    "EntityResponse",
    "ErrorResponse",
    "FieldErrorSchema",
    "PageResponse",
    "RecordResponse",
    "UpdateSchema",
    "Address",
    "ClientCreate",
    "ClientResponse",
    "ClientUpdate",
    "InternalNote",
    "TicketCreate",
    "TicketReply",
    "TicketReplyCreate",
    "TicketResponse",
    "TicketStatsResponse",
    "TicketUpdate",
    "AppCreate",
    "AppResponse",
    "AppUpdate",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
    "FeatureRequestCreate",
    "FeatureRequestResponse",
    "FeatureRequestUpdate",
    "UpvoteRequest",
    "ArticleCreate",
    "ArticleResponse",
    "ArticleUpdate",
    "PopularTopicCreate",
    "PopularTopicResponse",
    "PopularTopicUpdate",
    "RecentUpdateCreate",
    "RecentUpdateResponse",
    "RecentUpdateUpdate",
    "InvoiceCreate",
    "InvoiceLineItem",
    "InvoiceResponse",
    "InvoiceUpdate",
    "PricedLineItem",
    "QRCodeCreate",
    "QRCodeResponse",
    "QRCodeUpdate",
    "AuthUser",
    "LoginRequest",
    "LoginResponse",
    "VerifyResponse",
]
