"""Claude-backed text generation for fitness plans."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from anthropic import Anthropic, APIError

from fitness_planner.config import get_settings
from fitness_planner.exceptions import GenerationBackendError
from fitness_planner.services.prompt_builder import DEFAULT_MAX_TOKENS


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Raw text produced by the language model."""

    text: str


class PlanGenerator:
    """Thin adapter over the Anthropic Messages API."""

    def __init__(self, max_tokens: int = DEFAULT_MAX_TOKENS) -> None:
        settings = get_settings()
        self.client = Anthropic(api_key=settings.anthropic_api_key)
        self.model = settings.anthropic_model
        self.max_tokens = max_tokens

    def generate(self, prompt: str, temperature: float) -> GenerationResult:
        """Send a single-turn prompt and return the concatenated text blocks.

        Raises:
            GenerationBackendError: the API call failed (network, quota, timeout,
                rejected request).
        """

        request_payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

        try:
            response = self.client.messages.create(**request_payload)
        except APIError as exc:
            logger.exception("Claude plan generation failed | model=%s", self.model)
            raise GenerationBackendError(str(exc)) from exc

        text = "".join(
            block.text
            for block in response.content
            if getattr(block, "type", "text") == "text"
        )
        logger.info(
            "Claude plan generation finished | model=%s chars=%d",
            self.model,
            len(text),
        )
        return GenerationResult(text=text)
