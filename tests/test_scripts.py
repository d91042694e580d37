"""Tests for the command line helpers."""
from __future__ import annotations

from datetime import datetime, timezone

from fitness_planner.models.schemas import (
    ErrorKind,
    HistoryOutcome,
    PlanError,
    PlanHistoryEntry,
    PlanOutcome,
    PlanResponse,
)
from scripts.generate_plan import EXIT_FAILED, EXIT_NOT_SAVED, EXIT_OK, exit_code_for, parse_args
from scripts.plan_history import format_history


def _plan() -> PlanResponse:
    return PlanResponse(fitnessPlan="# Plan")


def test_exit_codes():
    assert exit_code_for(PlanOutcome(success=True, plan=_plan(), record_id="abc")) == EXIT_OK
    assert (
        exit_code_for(
            PlanOutcome(
                success=False,
                plan=_plan(),
                error=PlanError(kind=ErrorKind.PERSISTENCE_FAILED, message="not saved"),
            )
        )
        == EXIT_NOT_SAVED
    )
    assert (
        exit_code_for(
            PlanOutcome(success=False, error=PlanError(kind=ErrorKind.GENERATION_FAILED, message="AI Error"))
        )
        == EXIT_FAILED
    )


def test_parse_args_optional_preference():
    args = parse_args(
        ["--name", "Jane Doe", "--age", "30", "--weight", "65", "--height", "168", "--goals", "lose 5kg in 2 months"]
    )

    assert args.name == "Jane Doe"
    assert args.preference is None


def test_format_history_empty():
    assert format_history(HistoryOutcome(success=True)) == "No plans generated yet."


def test_format_history_lines():
    outcome = HistoryOutcome(
        success=True,
        plans=[
            PlanHistoryEntry(
                id="p1",
                name="Jane Doe",
                created_at=datetime(2026, 5, 1, 9, 30, tzinfo=timezone.utc),
                fitness_goals="lose 5kg in 2 months",
            ),
            PlanHistoryEntry(
                id="p0",
                name=None,
                created_at=datetime(2026, 4, 30, 8, 0, tzinfo=timezone.utc),
                fitness_goals=None,
            ),
        ],
    )

    lines = format_history(outcome).splitlines()

    assert lines[0] == "2026-05-01 09:30  p1  Jane Doe  lose 5kg in 2 months"
    assert lines[1].startswith("2026-04-30 08:00  p0  -")
