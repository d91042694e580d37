"""Pydantic models describing plan requests, AI responses and service outcomes."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel


_URL_ADAPTER = TypeAdapter(AnyUrl)


class CamelModel(BaseModel):
    """Base model exposing camelCase wire names while accepting snake_case too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StrictCamelModel(BaseModel):
    """Base model for untrusted payloads: camelCase wire names only."""

    model_config = ConfigDict(alias_generator=to_camel, frozen=True)


# Plan request / response

class PlanRequest(CamelModel):
    """User-supplied attributes driving plan generation."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=2)
    age: float = Field(gt=0, allow_inf_nan=False, description="Age in years")
    weight: float = Field(gt=0, allow_inf_nan=False, description="Weight in kilograms")
    height: float = Field(gt=0, allow_inf_nan=False, description="Height in centimeters")
    fitness_goals: str = Field(min_length=10)
    exercise_preference: str | None = None


# Messages shown to the user instead of pydantic's defaults, keyed by wire name.
PLAN_REQUEST_MESSAGES: dict[str, str] = {
    "name": "Name must be at least 2 characters.",
    "age": "Please enter a valid age.",
    "weight": "Please enter a valid weight in kg.",
    "height": "Please enter a valid height in cm.",
    "fitnessGoals": "Please describe your fitness goals in at least 10 characters.",
    "exercisePreference": "Exercise preference must be text.",
}


class VideoReference(StrictCamelModel):
    """A video suggested alongside the plan."""

    title: str = Field(min_length=1)
    url: str

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        """Reject strings that are not well-formed URLs, keeping the original text."""

        try:
            _URL_ADAPTER.validate_python(value)
        except ValidationError:
            raise ValueError("must be a valid URL") from None
        return value


class PlanResponse(StrictCamelModel):
    """Structured fitness plan returned by the generation backend."""

    fitness_plan: str = Field(min_length=1, description="Plan formatted as Markdown")
    youtube_links: list[VideoReference] | None = None

    @field_validator("youtube_links", mode="before")
    @classmethod
    def reject_null_links(cls, value: Any) -> Any:
        # The field may be omitted, but an explicit null is not a list.
        if value is None:
            raise ValueError("must be a list of videos when present")
        return value


class PlanHistoryEntry(CamelModel):
    """Summary row for the history listing."""

    id: str
    name: str | None = None
    created_at: datetime
    fitness_goals: str | None = None


# Outcomes

class ErrorKind(str, Enum):
    """Failure categories surfaced to callers."""

    INVALID_INPUT = "InvalidInput"
    MALFORMED_JSON = "MalformedJSON"
    SCHEMA_VIOLATION = "SchemaViolation"
    GENERATION_FAILED = "GenerationFailed"
    PERSISTENCE_FAILED = "PersistenceFailed"
    QUERY_FAILED = "QueryFailed"


class FieldIssue(CamelModel):
    """A single field-level validation problem."""

    field: str
    message: str


class PlanError(CamelModel):
    """Typed failure carried by every outcome model."""

    kind: ErrorKind
    message: str
    cause: ErrorKind | None = None
    issues: list[FieldIssue] = Field(default_factory=list)
    raw_response: str | None = Field(default=None, exclude=True)


class RecoveryResult(CamelModel):
    """Either a validated plan or the reason the raw text could not become one."""

    plan: PlanResponse | None = None
    error: PlanError | None = None

    @property
    def ok(self) -> bool:
        return self.plan is not None and self.error is None


class PlanOutcome(CamelModel):
    """Result of a plan generation request.

    ``plan`` is also populated when ``error.kind`` is ``PersistenceFailed``:
    the plan was generated but could not be saved.
    """

    success: bool
    plan: PlanResponse | None = None
    record_id: str | None = None
    error: PlanError | None = None


class HistoryOutcome(CamelModel):
    """Result of a history query; ``plans`` is empty on failure."""

    success: bool
    plans: list[PlanHistoryEntry] = Field(default_factory=list)
    error: PlanError | None = None


def issues_from_validation_error(
    exc: ValidationError,
    messages: dict[str, str] | None = None,
) -> list[FieldIssue]:
    """Flatten a pydantic ValidationError into wire-named field issues.

    When ``messages`` maps a top-level field to a friendly message, that message
    replaces pydantic's text. Each field is reported once per distinct message.
    """

    issues: list[FieldIssue] = []
    seen: set[tuple[str, str]] = set()
    for error in exc.errors():
        loc = error.get("loc", ())
        field = ".".join(str(part) for part in loc) or "(root)"
        message = error.get("msg", "Invalid value")
        if messages and loc and str(loc[0]) in messages:
            message = messages[str(loc[0])]
        key = (field, message)
        if key in seen:
            continue
        seen.add(key)
        issues.append(FieldIssue(field=field, message=message))
    return issues
