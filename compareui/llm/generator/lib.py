"""ArtifactGenerator orchestrator for the generate, validate, repair loop.

One loop serves every artifact kind. A request resolves to a route (prompt
template plus validator) before the first attempt, then each attempt runs:

    BUILDING -> CALLING -> EXTRACTING -> VALIDATING -> ACCEPTED
                                                    -> RETRYING -> BUILDING
                                                    -> EXHAUSTED

Backend failures, unparseable output, schema violations and compilation
errors all become the feedback text of the next attempt.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from compareui.compiler import SyntaxValidator
from compareui.config import EnvVar, get_environment
from compareui.prompt import PlaygroundCode, PromptBuilder
from compareui.schema import ArtifactKind, schema_for
from compareui.validation import (
    CompilationError,
    SchemaViolationError,
    ValidationOutcome,
    get_validator,
)

from ..backend import BackendError, GenerationConfig, LLMBackend, create_llm_backend
from .extract import MalformedResponseError, extract_json
from .request import ConfigRequest, PlaygroundRequest

logger = logging.getLogger(__name__)

BACKEND_ERROR_PREFIX = "Generation backend error"


class GenerationState(str, Enum):
    """States of one generation attempt."""

    BUILDING = "building"
    CALLING = "calling"
    EXTRACTING = "extracting"
    VALIDATING = "validating"
    ACCEPTED = "accepted"
    RETRYING = "retrying"
    EXHAUSTED = "exhausted"


class RetriesExhaustedError(RuntimeError):
    """Raised by GenerationExhausted.unwrap() for callers preferring exceptions.

    Attributes:
        last_error: Feedback text of the final attempt.
        attempts_used: Number of attempts made.
    """

    def __init__(self, message: str, last_error: str, attempts_used: int):
        super().__init__(f"{message}. Last error: {last_error}")
        self.last_error = last_error
        self.attempts_used = attempts_used


@dataclass
class GeneratorConfig:
    """Configuration for ArtifactGenerator.

    Attributes:
        max_attempts: Attempts per request before giving up. Applied to every
            kind, including playground.
        temperature: Backend sampling temperature.
        max_tokens: Maximum tokens per backend response.
        json_mode: Ask the backend for JSON-only output where supported.
    """

    max_attempts: int = field(default_factory=lambda: get_environment(EnvVar.MAX_ATTEMPTS))
    temperature: float = field(default_factory=lambda: get_environment(EnvVar.TEMPERATURE))
    max_tokens: int = 8192
    json_mode: bool = True

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")


@dataclass
class GenerationAttempt:
    """Record of one pass through the loop.

    Attributes:
        index: 1-based attempt number.
        prompt: Prompt sent to the backend.
        raw_response: Backend text, None if the call failed.
        candidate: Extracted JSON object, None if extraction failed.
        state: Terminal state of this attempt (ACCEPTED, RETRYING or EXHAUSTED).
        error: Feedback text when the attempt failed.
    """

    index: int
    prompt: str
    raw_response: str | None = None
    candidate: dict[str, Any] | None = None
    state: GenerationState = GenerationState.BUILDING
    error: str | None = None


@dataclass
class GenerationSuccess:
    """Accepted result. `value` re-validates under the same route."""

    kind: ArtifactKind
    value: Any
    attempts_used: int
    attempts: list[GenerationAttempt] = field(default_factory=list, repr=False)

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return self.value

    def to_dict(self) -> dict[str, Any]:
        """Response payload for tool and CLI callers."""
        return {"success": True, "config": self.value, "attempts": self.attempts_used}


@dataclass
class GenerationExhausted:
    """Budget spent without an accepted candidate."""

    kind: ArtifactKind
    last_error: str
    attempts_used: int
    attempts: list[GenerationAttempt] = field(default_factory=list, repr=False)

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        noun = "code" if self.kind == ArtifactKind.PLAYGROUND else "configuration"
        return f"Failed to generate valid {noun} after {self.attempts_used} attempts"

    def unwrap(self) -> Any:
        raise RetriesExhaustedError(self.message, self.last_error, self.attempts_used)

    def to_dict(self) -> dict[str, Any]:
        """Response payload for tool and CLI callers."""
        return {
            "success": False,
            "error": self.message,
            "lastError": self.last_error,
            "attempts": self.attempts_used,
        }


GenerationResult = GenerationSuccess | GenerationExhausted


@dataclass
class _Route:
    """Everything the loop needs for one request.

    Attributes:
        kind: Artifact kind being generated.
        initial_state: State embedded in the first prompt.
        build_prompt: Builds a prompt from (state, feedback).
        validate: Validates an extracted candidate.
        carry_candidate: Use a rejected candidate as the next prompt's state.
    """

    kind: ArtifactKind
    initial_state: Any
    build_prompt: Callable[[Any, str | None], str]
    validate: Callable[[dict[str, Any]], ValidationOutcome]
    carry_candidate: bool = False


class ArtifactGenerator:
    """Orchestrates prompt building, backend calls and validation.

    Example:
        >>> generator = ArtifactGenerator()
        >>> result = generator.generate_config(
        ...     "progress", "make the bar green", {"value": 10, "max": 100}
        ... )
        >>> result.value["styles"]["indicatorColor"]
        '#00FF00'

        >>> # Deterministic tests inject a scripted backend
        >>> generator = ArtifactGenerator(backend=MockLLMBackend([...]))
    """

    def __init__(
        self,
        backend: LLMBackend | None = None,
        config: GeneratorConfig | None = None,
        prompt_builder: PromptBuilder | None = None,
        syntax_validator: SyntaxValidator | None = None,
    ):
        """Initialize ArtifactGenerator.

        Args:
            backend: Generation backend. Creates the configured default if None.
            config: Generator configuration.
            prompt_builder: Prompt builder. Creates a default if None.
            syntax_validator: Validator for playground code. Created on first
                playground request if None.

        Raises:
            AuthenticationError: If no backend is given and none is configured.
        """
        self._backend = backend or create_llm_backend()
        self._config = config or GeneratorConfig()
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._syntax_validator = syntax_validator

    @property
    def backend(self) -> LLMBackend:
        return self._backend

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    # =========================================================================
    # Public API
    # =========================================================================

    def generate(self, request: ConfigRequest | PlaygroundRequest) -> GenerationResult:
        """Run the loop for a typed request.

        Returns:
            GenerationSuccess or GenerationExhausted.

        Raises:
            UnsupportedArtifactKindError: If the kind has no route.
            CompilerUnavailableError: If playground code cannot be compiled
                because Node or Babel is missing.
        """
        if isinstance(request, PlaygroundRequest):
            route = self._playground_route(request)
        else:
            route = self._config_route(request)
        return self._run(route)

    def generate_config(
        self,
        kind: ArtifactKind | str,
        intent: str,
        current_state: Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        """Generate a modified configuration for a config kind.

        Raises:
            UnsupportedArtifactKindError: For unknown kinds and PLAYGROUND.
        """
        kind = schema_for(kind).kind
        request = ConfigRequest(
            kind=kind, intent=intent, current_state=dict(current_state or {})
        )
        return self.generate(request)

    def generate_code(
        self,
        intent: str,
        current_state: PlaygroundCode = None,
        providers: Sequence[str] = ("mui",),
    ) -> GenerationResult:
        """Generate component source for each provider in `providers`.

        Raises:
            pydantic.ValidationError: If a provider id is unknown or the
                list is empty.
        """
        if current_state is not None and not isinstance(current_state, str):
            current_state = dict(current_state)
        request = PlaygroundRequest(
            intent=intent, current_state=current_state, providers=list(providers)
        )
        return self.generate(request)

    # =========================================================================
    # Routing
    # =========================================================================

    def _config_route(self, request: ConfigRequest) -> _Route:
        schema = schema_for(request.kind)
        intent = request.intent

        def build_prompt(state: Any, feedback: str | None) -> str:
            return self._prompt_builder.build(schema.kind, state, intent, feedback)

        return _Route(
            kind=schema.kind,
            initial_state=request.current_state,
            build_prompt=build_prompt,
            validate=get_validator(schema.kind),
        )

    def _playground_route(self, request: PlaygroundRequest) -> _Route:
        validator = self._get_syntax_validator()
        intent = request.intent
        providers = list(request.providers)

        def build_prompt(state: Any, feedback: str | None) -> str:
            return self._prompt_builder.build_playground(intent, state, providers, feedback)

        def validate(candidate: dict[str, Any]) -> ValidationOutcome:
            return validator.check_providers(candidate, providers)

        return _Route(
            kind=ArtifactKind.PLAYGROUND,
            initial_state=request.current_state,
            build_prompt=build_prompt,
            validate=validate,
            carry_candidate=True,
        )

    def _get_syntax_validator(self) -> SyntaxValidator:
        if self._syntax_validator is None:
            self._syntax_validator = SyntaxValidator()
        return self._syntax_validator

    # =========================================================================
    # Loop
    # =========================================================================

    def _transition(self, attempt: GenerationAttempt, state: GenerationState) -> None:
        logger.debug(f"Attempt {attempt.index}: {attempt.state.value} -> {state.value}")
        attempt.state = state

    def _run(self, route: _Route) -> GenerationResult:
        ceiling = self._config.max_attempts
        gen_config = GenerationConfig(
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
            json_mode=self._config.json_mode,
        )

        attempts: list[GenerationAttempt] = []
        state = route.initial_state
        feedback: str | None = None

        for index in range(1, ceiling + 1):
            attempt = GenerationAttempt(index=index, prompt="")
            attempts.append(attempt)
            logger.info(
                f"Generating {route.kind.value} (attempt {index}/{ceiling}) "
                f"with {self._backend.name}"
            )

            try:
                attempt.prompt = route.build_prompt(state, feedback)

                self._transition(attempt, GenerationState.CALLING)
                response = self._backend.generate(attempt.prompt, config=gen_config)
                attempt.raw_response = response.content

                self._transition(attempt, GenerationState.EXTRACTING)
                attempt.candidate = extract_json(response.content)

                self._transition(attempt, GenerationState.VALIDATING)
                value = route.validate(attempt.candidate).unwrap()
            except BackendError as e:
                error = f"{BACKEND_ERROR_PREFIX}: {e}"
            except MalformedResponseError as e:
                error = str(e)
            except (SchemaViolationError, CompilationError) as e:
                error = e.feedback
            else:
                self._transition(attempt, GenerationState.ACCEPTED)
                logger.info(f"Generated {route.kind.value} in {index} attempt(s)")
                return GenerationSuccess(
                    kind=route.kind, value=value, attempts_used=index, attempts=attempts
                )

            attempt.error = error
            feedback = error
            if route.carry_candidate and attempt.candidate is not None:
                state = attempt.candidate

            final = index == ceiling
            self._transition(
                attempt, GenerationState.EXHAUSTED if final else GenerationState.RETRYING
            )
            logger.warning(f"Attempt {index}/{ceiling} for {route.kind.value} failed: {error}")

        logger.warning(f"Giving up on {route.kind.value} after {ceiling} attempts")
        return GenerationExhausted(
            kind=route.kind,
            last_error=feedback or "",
            attempts_used=ceiling,
            attempts=attempts,
        )

__all__ = [
    "GenerationState",
    "GeneratorConfig",
    "GenerationAttempt",
    "GenerationSuccess",
    "GenerationExhausted",
    "GenerationResult",
    "RetriesExhaustedError",
    "ArtifactGenerator",
]
