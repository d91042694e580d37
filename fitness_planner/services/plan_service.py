"""Orchestrates plan generation, persistence and history listing."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Protocol

from pydantic import ValidationError

from fitness_planner.models.schemas import (
    PLAN_REQUEST_MESSAGES,
    ErrorKind,
    HistoryOutcome,
    PlanError,
    PlanHistoryEntry,
    PlanOutcome,
    PlanRequest,
    PlanResponse,
    issues_from_validation_error,
)
from fitness_planner.services.document_store import CREATED_AT_FIELD, StoredDocument
from fitness_planner.services.plan_generator import GenerationResult
from fitness_planner.services.prompt_builder import (
    build_plan_prompt,
    generation_options,
    load_prompt_config,
)
from fitness_planner.services.response_recovery import recover_plan_response


logger = logging.getLogger(__name__)

PLANS_COLLECTION = "fitness_plans"
HISTORY_LIMIT = 20

INVALID_INPUT_MESSAGE = "Invalid form data. Please check your inputs."


class TextGenerator(Protocol):
    def generate(self, prompt: str, temperature: float) -> GenerationResult: ...


class PlanStore(Protocol):
    def insert(self, collection: str, record: dict[str, Any]) -> str: ...

    def query_recent(
        self, collection: str, order_field: str = ..., limit: int = ...
    ) -> list[StoredDocument]: ...


class PlanService:
    """Request-scoped orchestration of one plan generation or history lookup."""

    def __init__(
        self,
        generator: TextGenerator,
        store: PlanStore,
        prompt_config: dict[str, Any] | None = None,
    ) -> None:
        self.generator = generator
        self.store = store
        self.prompt_config = prompt_config if prompt_config is not None else load_prompt_config()

    async def create_plan(self, form_data: Mapping[str, Any]) -> PlanOutcome:
        """Validate input, generate a plan, persist it and report the outcome.

        Never raises. A storage failure after a successful generation still
        returns the plan, with ``error.kind == PersistenceFailed``.
        """

        try:
            request = PlanRequest.model_validate(dict(form_data))
        except ValidationError as exc:
            issues = issues_from_validation_error(exc, PLAN_REQUEST_MESSAGES)
            logger.info("Rejected plan request with %d invalid field(s)", len(issues))
            return PlanOutcome(
                success=False,
                error=PlanError(
                    kind=ErrorKind.INVALID_INPUT,
                    message=INVALID_INPUT_MESSAGE,
                    issues=issues,
                ),
            )

        logger.info("Generating fitness plan | name=%s", request.name)
        try:
            prompt = build_plan_prompt(request, self.prompt_config)
            options = generation_options(self.prompt_config)
            result = self.generator.generate(prompt, temperature=options["temperature"])
        except Exception as exc:
            logger.exception("Error generating plan with AI")
            return PlanOutcome(
                success=False,
                error=PlanError(
                    kind=ErrorKind.GENERATION_FAILED,
                    message=f"AI Error: {exc}",
                ),
            )

        recovery = recover_plan_response(result.text)
        if not recovery.ok:
            failure = recovery.error
            return PlanOutcome(
                success=False,
                error=PlanError(
                    kind=ErrorKind.GENERATION_FAILED,
                    message=f"AI Error: {failure.message}",
                    cause=failure.kind,
                    issues=failure.issues,
                    raw_response=failure.raw_response,
                ),
            )

        plan = recovery.plan
        try:
            record_id = self.store.insert(PLANS_COLLECTION, self._build_record(request, plan))
        except Exception as exc:
            logger.exception("Error saving plan to the document store")
            return PlanOutcome(
                success=False,
                plan=plan,
                error=PlanError(
                    kind=ErrorKind.PERSISTENCE_FAILED,
                    message=f"Plan generated, but failed to save: {exc}",
                ),
            )

        logger.info("Saved fitness plan %s", record_id)
        return PlanOutcome(success=True, plan=plan, record_id=record_id)

    async def get_history(self, limit: int = HISTORY_LIMIT) -> HistoryOutcome:
        """List the most recent plans, newest first, without plan bodies."""
        return await get_plan_history(self.store, limit=limit)

    @staticmethod
    def _build_record(request: PlanRequest, plan: PlanResponse) -> dict[str, Any]:
        record = request.model_dump(mode="json", by_alias=True, exclude_none=True)
        record["fitnessPlan"] = plan.fitness_plan
        record["youtubeLinks"] = [
            link.model_dump(mode="json", by_alias=True) for link in plan.youtube_links or []
        ]
        return record


async def get_plan_history(store: PlanStore, limit: int = HISTORY_LIMIT) -> HistoryOutcome:
    """Return up to ``limit`` stored plans, newest first, as summary entries.

    Query failures come back as ``QueryFailed`` with an empty list.
    """

    limit = min(limit, HISTORY_LIMIT)
    try:
        documents = store.query_recent(PLANS_COLLECTION, CREATED_AT_FIELD, limit)
        plans = [_history_entry(document) for document in documents]
    except Exception as exc:
        logger.exception("Error fetching fitness plan history")
        return HistoryOutcome(
            success=False,
            error=PlanError(kind=ErrorKind.QUERY_FAILED, message=str(exc)),
        )

    return HistoryOutcome(success=True, plans=plans)


def _history_entry(document: StoredDocument) -> PlanHistoryEntry:
    data = document.data
    return PlanHistoryEntry(
        id=document.id,
        name=data.get("name"),
        created_at=document.created_at or datetime.now(timezone.utc),
        fitness_goals=data.get("fitnessGoals"),
    )
