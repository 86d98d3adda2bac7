from .item_store import ItemStore, StorePage
from .portal_gateway import PortalGateway
from .token_issuer import TokenIssuer

__all__ = [
    "ItemStore",
    "StorePage",
    "PortalGateway",
    "TokenIssuer",
]
