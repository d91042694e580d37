"""FastAPI dependency providers for the service layer."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from fitness_planner.database import get_db
from fitness_planner.services.document_store import DocumentStore
from fitness_planner.services.plan_generator import PlanGenerator
from fitness_planner.services.plan_service import PlanService
from fitness_planner.services.prompt_builder import generation_options, load_prompt_config


def get_document_store(db: Annotated[Session, Depends(get_db)]) -> DocumentStore:
    return DocumentStore(db)


def get_plan_service(
    store: Annotated[DocumentStore, Depends(get_document_store)],
) -> PlanService:
    """Build a request-scoped plan service wired to Claude and the database."""

    prompt_config = load_prompt_config()
    generator = PlanGenerator(max_tokens=generation_options(prompt_config)["max_tokens"])
    return PlanService(generator=generator, store=store, prompt_config=prompt_config)
