"""SQLAlchemy ORM model: one row per stored record, any table."""

from typing import Any

from sqlalchemy import JSON, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ItemModel(Base):
    """A portal record stored as a JSON document.

    ``(table_name, item_key)`` is the primary key, which is what gives
    creates their uniqueness guard. ``version`` gives updates theirs.
    """

    __tablename__ = "portal_items"

    table_name: Mapped[str] = mapped_column(String(255), primary_key=True)
    item_key: Mapped[str] = mapped_column(String(255), primary_key=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False, default="")
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __table_args__ = (
        Index("ix_portal_items_table_created", "table_name", "created_at"),
    )
    # Every ORM update is guarded by the version it read; a concurrent write
    # makes the later commit fail with StaleDataError
    __mapper_args__ = {"version_id_col": version}
