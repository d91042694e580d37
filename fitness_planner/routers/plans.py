"""JSON API endpoints for fitness plan generation and history."""
from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from fitness_planner.dependencies import get_plan_service
from fitness_planner.models.schemas import ErrorKind, HistoryOutcome, PlanOutcome
from fitness_planner.services.plan_service import HISTORY_LIMIT, PlanService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plans", tags=["plans"])

# A failed save still returns the generated plan, hence 200.
_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 422,
    ErrorKind.GENERATION_FAILED: 502,
    ErrorKind.PERSISTENCE_FAILED: 200,
    ErrorKind.QUERY_FAILED: 503,
}


def _respond(outcome: PlanOutcome | HistoryOutcome, success_status: int) -> JSONResponse:
    status_code = success_status
    if outcome.error is not None:
        status_code = _STATUS_BY_KIND.get(outcome.error.kind, 500)
    return JSONResponse(
        status_code=status_code,
        content=outcome.model_dump(mode="json", by_alias=True),
    )


@router.post("")
async def create_plan(
    service: Annotated[PlanService, Depends(get_plan_service)],
    payload: Annotated[dict[str, Any], Body()],
) -> JSONResponse:
    """
    Generate, validate and store a personalised fitness plan.

    Body fields: name, age, weight (kg), height (cm), fitnessGoals and an
    optional exercisePreference.

    Returns:
        PlanOutcome: 201 on success; 422 for invalid input; 502 when the AI
        call failed or returned unusable content; 200 with ``success=false``
        and the plan when the plan could not be saved.
    """

    outcome = await service.create_plan(payload)
    if outcome.error is not None:
        logger.info("Plan request finished with %s", outcome.error.kind.value)
    return _respond(outcome, success_status=201)


@router.get("/history")
async def get_plan_history(
    service: Annotated[PlanService, Depends(get_plan_service)],
    limit: Annotated[int, Query(ge=1, le=HISTORY_LIMIT)] = HISTORY_LIMIT,
) -> JSONResponse:
    """Return the most recent plans (id, name, createdAt, fitnessGoals), newest first."""

    outcome = await service.get_history(limit=limit)
    return _respond(outcome, success_status=200)
