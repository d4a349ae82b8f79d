"""Recipe generation service.

Runs the pipeline for one request:

    collaborator -> raw text -> extract_json -> parse -> normalize_recipe

and, when any step up to the parse fails, repeats it exactly once with the
repair directive appended to the system message.

State machine per call::

    IDLE -> GENERATING -> SUCCESS
                       -> REPAIRING -> SUCCESS
                                    -> FAILED
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from pantry_chef.llm.exceptions import LLMError, LLMResponseError
from pantry_chef.llm.prompts.recipe import RecipeGenerationPrompt
from pantry_chef.observability.logging import get_logger
from pantry_chef.observability.metrics import record_generation_outcome
from pantry_chef.parsing.exceptions import RecipeParsingError
from pantry_chef.parsing.extraction import parse_json_object
from pantry_chef.parsing.normalization import normalize_recipe
from pantry_chef.services.generation.constants import (
    OUTCOME_FAILED,
    OUTCOME_REPAIRED,
    OUTCOME_SUCCESS,
)
from pantry_chef.services.generation.diagnostics import LoggingDiagnostics
from pantry_chef.services.generation.exceptions import RecipeGenerationError


if TYPE_CHECKING:
    from collections.abc import Sequence

    from pantry_chef.llm.client.protocol import ChatClientProtocol
    from pantry_chef.llm.models import ChatMessage
    from pantry_chef.schemas.generation import RecipeRequest
    from pantry_chef.schemas.recipe import RecipeRecord
    from pantry_chef.services.generation.diagnostics import GenerationDiagnostics


logger = get_logger(__name__)

# Failures that earn a repair attempt: transport errors from the
# collaborator and anything raised while extracting/parsing its text.
RECOVERABLE_ERRORS: tuple[type[Exception], ...] = (LLMError, RecipeParsingError)


class GenerationState(StrEnum):
    """Lifecycle of a single generation call."""

    IDLE = "idle"
    GENERATING = "generating"
    REPAIRING = "repairing"
    SUCCESS = "success"
    FAILED = "failed"


_TRANSITIONS: dict[GenerationState, frozenset[GenerationState]] = {
    GenerationState.IDLE: frozenset({GenerationState.GENERATING}),
    GenerationState.GENERATING: frozenset(
        {GenerationState.SUCCESS, GenerationState.REPAIRING}
    ),
    GenerationState.REPAIRING: frozenset(
        {GenerationState.SUCCESS, GenerationState.FAILED}
    ),
    GenerationState.SUCCESS: frozenset(),
    GenerationState.FAILED: frozenset(),
}


@dataclass
class GenerationRun:
    """Trace of one generation call.

    Created fresh per call, so concurrent calls never share state.
    """

    state: GenerationState = GenerationState.IDLE
    history: list[GenerationState] = field(
        default_factory=lambda: [GenerationState.IDLE]
    )
    attempts: int = 0
    recipe: RecipeRecord | None = None
    primary_error: Exception | None = None
    repair_error: Exception | None = None

    def transition(self, state: GenerationState) -> None:
        """Move to ``state``.

        Raises:
            ValueError: If the transition is not allowed.
        """
        if state not in _TRANSITIONS[self.state]:
            msg = f"Invalid generation transition {self.state} -> {state}"
            raise ValueError(msg)
        self.state = state
        self.history.append(state)

    @property
    def repaired(self) -> bool:
        """Whether the recipe came from the repair attempt."""
        return self.state is GenerationState.SUCCESS and self.primary_error is not None


def _raw_text_of(error: Exception) -> str | None:
    """Raw model or upstream text carried by ``error``, if any."""
    if isinstance(error, RecipeParsingError):
        return error.raw
    if isinstance(error, LLMResponseError):
        return error.detail
    return None


class RecipeGenerationService:
    """Generates one normalized recipe per request, with one repair attempt.

    Attributes:
        model: Model override passed to the collaborator (None = its default).
        temperature: Sampling temperature (None = prompt default).
        max_tokens: Output length (None = prompt default).
    """

    def __init__(
        self,
        llm_client: ChatClientProtocol,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        prompt: RecipeGenerationPrompt | None = None,
        diagnostics: GenerationDiagnostics | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            llm_client: Chat collaborator that returns raw model text.
            model: Model name to request.
            temperature: Sampling temperature to request.
            max_tokens: Maximum output tokens to request.
            prompt: Prompt builder (defaults to RecipeGenerationPrompt).
            diagnostics: Sink for failure details (defaults to logging).
        """
        self._llm_client = llm_client
        self._prompt = prompt or RecipeGenerationPrompt()
        self._diagnostics = diagnostics or LoggingDiagnostics()

        options = self._prompt.get_options()
        self.model = model
        self.temperature = (
            temperature if temperature is not None else options.get("temperature")
        )
        self.max_tokens = (
            max_tokens if max_tokens is not None else options.get("max_tokens")
        )

    async def generate(self, request: RecipeRequest) -> RecipeRecord:
        """Generate a recipe for ``request``.

        Returns:
            The normalized recipe.

        Raises:
            RecipeGenerationError: If the primary and the repair attempt
                both failed.
        """
        run = await self.generate_with_trace(request)
        assert run.recipe is not None
        return run.recipe

    async def generate_with_trace(self, request: RecipeRequest) -> GenerationRun:
        """Generate a recipe and return the full trace of the call.

        Raises:
            RecipeGenerationError: If the primary and the repair attempt
                both failed.
        """
        run = GenerationRun()
        messages = self._prompt.build_messages(request=request)

        run.transition(GenerationState.GENERATING)
        try:
            run.recipe = await self._attempt(run, messages, request)
        except RECOVERABLE_ERRORS as e:
            run.primary_error = e
            self._diagnostics.attempt_failed(
                attempt=run.attempts, error=e, raw_response=_raw_text_of(e)
            )
        else:
            run.transition(GenerationState.SUCCESS)
            record_generation_outcome(OUTCOME_SUCCESS)
            return run

        run.transition(GenerationState.REPAIRING)
        logger.info("Retrying recipe generation with repair directive")
        try:
            run.recipe = await self._attempt(
                run, self._prompt.with_repair(messages), request
            )
        except RECOVERABLE_ERRORS as e:
            run.repair_error = e
            run.transition(GenerationState.FAILED)
            self._diagnostics.attempt_failed(
                attempt=run.attempts, error=e, raw_response=_raw_text_of(e)
            )
            error = RecipeGenerationError(
                str(run.primary_error) or str(e) or "Recipe generation failed",
                primary_error=run.primary_error,
                repair_error=e,
            )
            self._diagnostics.generation_failed(error)
            record_generation_outcome(OUTCOME_FAILED)
            raise error from e

        run.transition(GenerationState.SUCCESS)
        record_generation_outcome(OUTCOME_REPAIRED)
        return run

    async def _attempt(
        self,
        run: GenerationRun,
        messages: Sequence[ChatMessage],
        request: RecipeRequest,
    ) -> RecipeRecord:
        """One collaborator round-trip followed by extract, parse, normalize."""
        run.attempts += 1
        result = await self._llm_client.complete(
            messages,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        data = parse_json_object(result.raw_response)
        recipe = normalize_recipe(data, cuisine=request.cuisine)
        logger.debug(
            "Recipe generated",
            attempt=run.attempts,
            title=recipe.title,
            steps=len(recipe.steps),
            completion_tokens=result.completion_tokens,
        )
        return recipe
