"""Typed generation requests.

A request is either a config request for one of the structured component
kinds or a playground request for multi-provider source code. The two are
distinguished by `mode`; a providers list on a config request is rejected
at construction time.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from compareui.providers import resolve_providers
from compareui.schema import ArtifactKind, UnsupportedArtifactKindError, resolve_kind


class ConfigRequest(BaseModel):
    """Request to modify one component configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: Literal["config"] = "config"
    kind: ArtifactKind = Field(..., description="Config kind to generate")
    intent: str = Field(..., min_length=1, description="Natural language change request")
    current_state: dict[str, Any] = Field(
        default_factory=dict,
        description="Configuration the change is applied to",
    )

    @field_validator("kind", mode="before")
    @classmethod
    def _resolve_kind(cls, value: Any) -> ArtifactKind:
        kind = resolve_kind(value)
        if not kind.is_config:
            raise UnsupportedArtifactKindError(kind.value)
        return kind


class PlaygroundRequest(BaseModel):
    """Request to generate component source for several UI libraries."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: Literal["playground"] = "playground"
    intent: str = Field(..., min_length=1, description="Natural language request")
    current_state: str | dict[str, str] | None = Field(
        default=None,
        description="Existing source, shared or keyed by provider id",
    )
    providers: list[str] = Field(
        ..., min_length=1, description="Provider ids to generate code for"
    )

    @field_validator("providers")
    @classmethod
    def _resolve_providers(cls, value: list[str]) -> list[str]:
        try:
            return [p.id for p in resolve_providers(value)]
        except KeyError as e:
            raise ValueError(e.args[0]) from None


GenerationRequest = Annotated[
    Union[ConfigRequest, PlaygroundRequest], Field(discriminator="mode")
]

_request_adapter: TypeAdapter[GenerationRequest] = TypeAdapter(GenerationRequest)


def parse_request(payload: dict[str, Any]) -> ConfigRequest | PlaygroundRequest:
    """Build a typed request from a plain payload keyed by `mode`.

    Raises:
        pydantic.ValidationError: If the payload does not describe a valid
            request.
    """
    return _request_adapter.validate_python(payload)


__all__ = [
    "ConfigRequest",
    "PlaygroundRequest",
    "GenerationRequest",
    "parse_request",
]
