"""SQLAlchemy ORM models backing the document store."""
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Index, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from fitness_planner.database import Base


def _new_document_id() -> str:
    return uuid.uuid4().hex


class Document(Base):
    """A schema-less JSON document filed under a named collection."""

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_document_id)
    collection: Mapped[str] = mapped_column(String(100), nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    # Server-assigned on insert, stored as naive UTC
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        Index("ix_documents_collection_created_at", "collection", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, collection={self.collection}, created_at={self.created_at})>"
