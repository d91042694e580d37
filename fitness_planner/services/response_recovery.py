"""Turn raw language-model text into a validated ``PlanResponse``.

This is the only place where free-form model output becomes typed data, so
nothing here raises: every failure is returned as a ``RecoveryResult`` whose
``error.kind`` is ``MalformedJSON`` or ``SchemaViolation``.
"""
from __future__ import annotations

import json
import logging
import re

from pydantic import ValidationError

from fitness_planner.models.schemas import (
    ErrorKind,
    FieldIssue,
    PlanError,
    PlanResponse,
    RecoveryResult,
    issues_from_validation_error,
)


logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?[ \t]*\r?\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\r?\n?[ \t]*```\s*$")

MALFORMED_JSON_MESSAGE = "AI failed to generate a valid plan. The response was not valid JSON."
SCHEMA_VIOLATION_MESSAGE = "AI returned data in an unexpected format."


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence and outer whitespace.

    Only the opening marker (optionally tagged ``json``) and the closing marker
    are removed; fences inside the payload, e.g. in the markdown plan, are kept.
    """

    cleaned = _LEADING_FENCE.sub("", text, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def recover_plan_response(raw_text: str) -> RecoveryResult:
    """Parse and validate the backend's raw text.

    Args:
        raw_text: Text exactly as returned by the generation backend.

    Returns:
        RecoveryResult holding either the validated plan or a typed error. The
        error keeps ``raw_text`` for diagnostics.
    """

    cleaned = strip_code_fences(raw_text or "")

    try:
        parsed = json.loads(cleaned)
    except (ValueError, RecursionError) as exc:
        logger.warning("AI response is not valid JSON: %s", exc)
        logger.debug("Raw AI response: %s", raw_text)
        return RecoveryResult(
            error=PlanError(
                kind=ErrorKind.MALFORMED_JSON,
                message=MALFORMED_JSON_MESSAGE,
                issues=[FieldIssue(field="(root)", message=str(exc))],
                raw_response=raw_text,
            )
        )

    try:
        plan = PlanResponse.model_validate(parsed)
    except ValidationError as exc:
        issues = issues_from_validation_error(exc)
        logger.warning(
            "AI response failed schema validation | issues=%s",
            "; ".join(f"{issue.field}: {issue.message}" for issue in issues),
        )
        logger.debug("Raw AI response: %s", raw_text)
        return RecoveryResult(
            error=PlanError(
                kind=ErrorKind.SCHEMA_VIOLATION,
                message=SCHEMA_VIOLATION_MESSAGE,
                issues=issues,
                raw_response=raw_text,
            )
        )

    return RecoveryResult(plan=plan)
