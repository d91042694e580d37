"""Build the fitness-plan prompt sent to the language model."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from fitness_planner.config import get_settings
from fitness_planner.models.schemas import PlanRequest


# Must appear verbatim in the rendered template; response recovery relies on it.
JSON_OBJECT_INSTRUCTION = "you MUST return exactly one JSON object"

DEFAULT_TEMPERATURE = 0.2
DEFAULT_MAX_TOKENS = 4096


def load_prompt_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load prompt settings from YAML, resolving ``prompt_path`` next to the file."""

    config_path = Path(path) if path is not None else get_settings().prompt_config_path
    with config_path.open("r", encoding="utf-8") as fh:
        config = yaml.safe_load(fh) or {}

    prompt_path = Path(config.get("prompt_path", "fitness_plan.txt"))
    if not prompt_path.is_absolute():
        prompt_path = config_path.parent / prompt_path
    config["prompt_path"] = prompt_path
    return config


def load_template(path: str | Path) -> str:
    with Path(path).open("r", encoding="utf-8") as fh:
        return fh.read()


def generation_options(prompt_config: dict[str, Any]) -> dict[str, Any]:
    """Return the decoding options for the generation backend."""

    generation = prompt_config.get("generation") or {}
    return {
        "temperature": float(generation.get("temperature", DEFAULT_TEMPERATURE)),
        "max_tokens": int(generation.get("max_tokens", DEFAULT_MAX_TOKENS)),
    }


def format_number(value: float) -> str:
    """Render a validated number in normalised form.

    The parsed float is restated, not the submitted text, so ``"65.50"``
    becomes ``65.5`` and ``0.0000001`` becomes ``1e-07``. Whole numbers drop
    the ``.0``.
    """

    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def build_plan_prompt(
    request: PlanRequest,
    prompt_config: dict[str, Any] | None = None,
    template: str | None = None,
) -> str:
    """Render the plan prompt for an already validated request.

    Args:
        request: Validated user attributes.
        prompt_config: Parsed ``prompts.yaml``; loaded from settings when omitted.
        template: Template text overriding ``prompt_config["prompt_path"]``.

    Returns:
        The prompt text. Every supplied attribute is restated as given.
    """

    if prompt_config is None:
        prompt_config = load_prompt_config()
    if template is None:
        template = load_template(prompt_config["prompt_path"])

    videos = prompt_config.get("videos") or {}

    exercise_preference_line = ""
    if request.exercise_preference:
        exercise_preference_line = f"Exercise Preference: {request.exercise_preference}\n"

    return template.format(
        name=request.name,
        age=format_number(request.age),
        weight=format_number(request.weight),
        height=format_number(request.height),
        fitness_goals=request.fitness_goals,
        exercise_preference_line=exercise_preference_line,
        min_videos=videos.get("min_count", 3),
        max_videos=videos.get("max_count", 5),
    )
