"""Generation tools for the MCP server.

Both tools run the generate, validate, repair loop and return the payload
tool clients expect: `success`, `config` and `attempts` when a candidate is
accepted, `success`, `error`, `lastError` and `attempts` when the attempt
budget is spent. Accepted results are queued for the history log.
"""

import logging
from collections.abc import Sequence
from typing import Any

from compareui.history import get_audit_recorder
from compareui.llm import (
    ArtifactGenerator,
    ConfigRequest,
    GenerationResult,
    GeneratorConfig,
    LLMModel,
    PlaygroundRequest,
    create_llm_backend,
)
from compareui.schema import schema_for

logger = logging.getLogger(__name__)


def _create_generator(model: str | None, temperature: float | None) -> ArtifactGenerator:
    """Build a generator for one tool call.

    Raises:
        ValueError: If the model name is unknown.
        AuthenticationError: If the model's provider has no API key.
    """
    if model:
        llm_model = LLMModel.by_name(model)
        if llm_model is None:
            available = [m.spec.name for m in LLMModel]
            raise ValueError(f"Unknown model: {model}. Available: {', '.join(available)}")
        backend = create_llm_backend(llm_model)
    else:
        backend = create_llm_backend()

    config = GeneratorConfig() if temperature is None else GeneratorConfig(temperature=temperature)
    return ArtifactGenerator(backend=backend, config=config)


def _persist(
    result: GenerationResult,
    intent: str,
    current_state: Any,
    model: str,
) -> None:
    """Queue an accepted result for the history log. Never raises."""
    if not result.ok:
        return
    try:
        get_audit_recorder().record(
            intent=intent,
            kind=result.kind.value,
            response_config=result.value,
            current_config=current_state,
            attempts=result.attempts_used,
            model=model,
        )
    except Exception as e:
        logger.warning(f"Failed to queue history record: {e}")


def generate_config(
    kind: str,
    intent: str,
    current_state: dict[str, Any] | None = None,
    model: str | None = None,
    temperature: float | None = None,
    persist: bool = True,
) -> dict[str, Any]:
    """Modify a component configuration from a natural language request.

    Args:
        kind: Config kind, e.g. "progress", "select", "icon-button".
        intent: What to change, e.g. "make the bar green".
        current_state: Configuration the change applies to.
        model: LLM model name (optional, uses the configured default).
        temperature: Sampling temperature override (optional).
        persist: Whether to queue accepted results for the history log.

    Returns:
        Response payload, see module docstring.

    Raises:
        UnsupportedArtifactKindError: If the kind has no schema.
        pydantic.ValidationError: If the intent is empty.
        ValueError: If the model name is unknown.
        AuthenticationError: If no backend is configured.
    """
    schema = schema_for(kind)
    request = ConfigRequest(kind=schema.kind, intent=intent, current_state=current_state or {})
    generator = _create_generator(model, temperature)

    logger.info(f"Generating {schema.kind.value} config for: {intent}")
    result = generator.generate(request)

    if persist:
        _persist(result, request.intent, request.current_state, generator.backend.name)
    return result.to_dict()


def generate_code(
    intent: str,
    current_state: str | dict[str, str] | None = None,
    providers: Sequence[str] = ("mui",),
    model: str | None = None,
    temperature: float | None = None,
    persist: bool = True,
) -> dict[str, Any]:
    """Generate React component source for several UI libraries.

    Args:
        intent: What to build, e.g. "a card with a title and a button".
        current_state: Existing source, one string or a mapping of
            provider id to source.
        providers: Provider ids to generate for ("mui", "chakra", "antd",
            "shadcn").
        model: LLM model name (optional, uses the configured default).
        temperature: Sampling temperature override (optional).
        persist: Whether to queue accepted results for the history log.

    Returns:
        Response payload; `config` maps each provider id to its source.

    Raises:
        pydantic.ValidationError: If a provider is unknown, the provider
            list is empty or the intent is empty.
        ValueError: If the model name is unknown.
        CompilerUnavailableError: If Node or Babel is not installed.
    """
    request = PlaygroundRequest(
        intent=intent, current_state=current_state, providers=list(providers)
    )
    generator = _create_generator(model, temperature)

    logger.info(f"Generating code for {', '.join(request.providers)}: {intent}")
    result = generator.generate(request)

    if persist:
        _persist(result, request.intent, request.current_state, generator.backend.name)
    return result.to_dict()


__all__ = ["generate_config", "generate_code"]
