from .base import Base
from .models import ItemModel
from .item_store import SQLAlchemyItemStore
from .session import create_session_factory, get_async_url

__all__ = [
    "Base",
    "ItemModel",
    "SQLAlchemyItemStore",
    "create_session_factory",
    "get_async_url",
]
