"""Generation orchestrator.

Provides ArtifactGenerator, which runs the generate, validate, repair loop
for every artifact kind, plus the typed requests and results it exchanges.
"""

from .extract import MalformedResponseError, extract_json
from .lib import (
    ArtifactGenerator,
    GenerationAttempt,
    GenerationExhausted,
    GenerationResult,
    GenerationState,
    GenerationSuccess,
    GeneratorConfig,
    RetriesExhaustedError,
)
from .request import ConfigRequest, GenerationRequest, PlaygroundRequest, parse_request

__all__ = [
    "ArtifactGenerator",
    "GeneratorConfig",
    "GenerationState",
    "GenerationAttempt",
    "GenerationSuccess",
    "GenerationExhausted",
    "GenerationResult",
    "RetriesExhaustedError",
    "ConfigRequest",
    "PlaygroundRequest",
    "GenerationRequest",
    "parse_request",
    "MalformedResponseError",
    "extract_json",
]
