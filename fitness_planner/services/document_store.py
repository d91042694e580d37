"""Minimal document store on top of the ``documents`` table."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fitness_planner.exceptions import DocumentStoreError
from fitness_planner.models.database_models import Document


logger = logging.getLogger(__name__)

CREATED_AT_FIELD = "createdAt"

_ORDER_COLUMNS = {
    CREATED_AT_FIELD: Document.created_at,
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StoredDocument:
    """A document read back from the store, with its server-assigned metadata."""

    id: str
    created_at: datetime
    data: dict[str, Any] = field(default_factory=dict)


class DocumentStore:
    """Insert-and-list access to JSON documents grouped by collection."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow) -> None:
        self.db = db
        self.clock = clock

    def insert(self, collection: str, record: dict[str, Any]) -> str:
        """Store ``record`` under ``collection`` and return its new identifier.

        The creation timestamp is assigned here, not taken from ``record``.
        """

        created_at = self.clock().astimezone(timezone.utc).replace(tzinfo=None)
        document = Document(collection=collection, data=dict(record), created_at=created_at)
        try:
            self.db.add(document)
            self.db.flush()
            document_id = document.id
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to insert document into %s", collection)
            raise DocumentStoreError(str(exc)) from exc

        logger.info("Inserted document %s into %s", document_id, collection)
        return document_id

    def query_recent(
        self,
        collection: str,
        order_field: str = CREATED_AT_FIELD,
        limit: int = 20,
    ) -> list[StoredDocument]:
        """Return up to ``limit`` documents, newest first by ``order_field``."""

        order_column = _ORDER_COLUMNS.get(order_field)
        if order_column is None:
            raise ValueError(f"Unsupported order field: {order_field}")
        if limit < 1:
            return []

        stmt = (
            select(Document)
            .where(Document.collection == collection)
            .order_by(order_column.desc())
            .limit(limit)
        )
        try:
            documents = self.db.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to query %s", collection)
            raise DocumentStoreError(str(exc)) from exc

        return [
            StoredDocument(
                id=document.id,
                created_at=_as_utc(document.created_at),
                data=dict(document.data or {}),
            )
            for document in documents
        ]


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo; stored values are UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
