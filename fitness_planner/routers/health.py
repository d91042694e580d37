"""Router exposing basic system endpoints."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from fitness_planner.dependencies import get_document_store
from fitness_planner.exceptions import DocumentStoreError
from fitness_planner.services.document_store import DocumentStore
from fitness_planner.services.plan_service import PLANS_COLLECTION


logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/status")
async def get_status() -> dict[str, str]:
    """Return a minimal status payload."""
    return {"status": "online"}


@router.get("/store")
async def get_store_status(
    store: Annotated[DocumentStore, Depends(get_document_store)],
) -> dict:
    """
    Check that the document store answers queries.

    Returns:
        dict: {
            "status": "ok",
            "last_plan_at": ISO timestamp of the newest stored plan or None
        }
    """
    try:
        latest = store.query_recent(PLANS_COLLECTION, limit=1)
    except DocumentStoreError:
        logger.exception("Document store health check failed")
        raise HTTPException(status_code=500, detail="Document store unavailable")

    return {
        "status": "ok",
        "last_plan_at": latest[0].created_at.isoformat() if latest else None,
    }
