"""PromptBuilder for configuration and playground generation prompts.

Constructs prompts from the schema description, the caller's current
state, the literal intent and, on retries, the previous attempt's errors.
Output is deterministic: identical inputs give byte-identical prompts.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from compareui.providers import UIProvider, resolve_providers
from compareui.schema import ArtifactKind, describe, schema_for

FEEDBACK_HEADER = "PREVIOUS ATTEMPT FAILED WITH ERRORS:"

CONFIG_INSTRUCTIONS = (
    "Analyze the user's request carefully.",
    "Modify ONLY the properties mentioned in the request.",
    "Keep all other properties unchanged from the current config.",
    "Return ONLY valid JSON matching the schema above.",
    "Do NOT include any explanations, markdown formatting, or code blocks.",
    "Return raw JSON only.",
    'Ensure all colors are 6-character HEX codes (e.g. #FF0000). Names like "red" are NOT allowed.',
)

PlaygroundCode = str | Mapping[str, str] | None


@dataclass
class PromptConfig:
    """Configuration for prompt building.

    Attributes:
        include_hint: Whether to include the kind's worked example.
        indent: JSON indentation for serialized state.
    """

    include_hint: bool = True
    indent: int = 2


@dataclass
class PromptContext:
    """Context for a generated prompt.

    Tracks what was included in the prompt for debugging/analysis.

    Attributes:
        kind: Artifact kind the prompt targets.
        providers: Provider ids for playground prompts.
        feedback_included: Whether a previous-attempt error block was appended.
        total_tokens_estimate: Rough token count estimate.
    """

    kind: ArtifactKind
    providers: list[str] | None = None
    feedback_included: bool = False
    total_tokens_estimate: int = 0


def _normalize_errors(prior_errors: str | Sequence[str] | None) -> str:
    if prior_errors is None:
        return ""
    if isinstance(prior_errors, str):
        return prior_errors.strip()
    return "\n".join(str(e) for e in prior_errors if str(e).strip())


def _numbered(lines: Iterable[str]) -> str:
    return "\n".join(f"{index}. {line}" for index, line in enumerate(lines, start=1))


class PromptBuilder:
    """Builds generation prompts for every artifact kind.

    Example:
        >>> builder = PromptBuilder()
        >>> prompt = builder.build("progress", {"value": 10}, "make the bar green")
        >>> retry = builder.build(
        ...     "progress", {"value": 10}, "make the bar green",
        ...     prior_errors="styles.indicatorColor: String should match pattern ...",
        ... )
    """

    def __init__(self, config: PromptConfig | None = None):
        """Initialize PromptBuilder.

        Args:
            config: Prompt building configuration.
        """
        self._config = config or PromptConfig()

    # =========================================================================
    # Config kinds
    # =========================================================================

    def build(
        self,
        kind: ArtifactKind | str,
        current_state: Mapping[str, Any] | None,
        intent: str,
        prior_errors: str | Sequence[str] | None = None,
    ) -> str:
        """Build the prompt for one configuration attempt.

        Args:
            kind: Config kind to generate.
            current_state: Configuration the caller starts from.
            intent: User's natural language request, embedded verbatim.
            prior_errors: Previous attempt's feedback; the error block is
                appended only when this is non-empty.

        Returns:
            Prompt text.

        Raises:
            UnsupportedArtifactKindError: For unknown kinds and PLAYGROUND.
        """
        prompt, _ = self.build_with_context(kind, current_state, intent, prior_errors)
        return prompt

    def build_with_context(
        self,
        kind: ArtifactKind | str,
        current_state: Mapping[str, Any] | None,
        intent: str,
        prior_errors: str | Sequence[str] | None = None,
    ) -> tuple[str, PromptContext]:
        """Build a configuration prompt and return context metadata."""
        schema = schema_for(kind)
        context = PromptContext(kind=schema.kind)

        parts = [
            f"You are a UI configuration generator. Your task is to modify the current "
            f"{schema.kind.value} configuration based on the user's request.",
            describe(schema.kind),
            "CURRENT CONFIGURATION:\n" + self._serialize(current_state or {}),
            self._format_intent(intent),
            "INSTRUCTIONS:\n" + _numbered(CONFIG_INSTRUCTIONS),
        ]
        if self._config.include_hint and schema.hint:
            parts.append(f"Example: {schema.hint}")
        parts.append("Generate the modified configuration JSON now:")

        feedback = _normalize_errors(prior_errors)
        if feedback:
            parts.append(
                self._format_feedback(
                    feedback,
                    "Please fix these errors and try again. "
                    "Return ONLY the corrected JSON.",
                )
            )
            context.feedback_included = True

        prompt = "\n\n".join(parts)
        context.total_tokens_estimate = len(prompt) // 4  # Rough estimate
        return prompt, context

    # =========================================================================
    # Playground
    # =========================================================================

    def build_playground(
        self,
        intent: str,
        current_code: PlaygroundCode,
        providers: Sequence[str | UIProvider],
        prior_errors: str | Sequence[str] | None = None,
    ) -> str:
        """Build the prompt for one multi-provider code attempt.

        Args:
            intent: User's natural language request.
            current_code: Existing source, either one string or a mapping of
                provider id to source. None when starting from scratch.
            providers: Provider ids (or providers) to generate for.
            prior_errors: Previous attempt's feedback.

        Returns:
            Prompt text.

        Raises:
            KeyError: If a provider id is unknown.
        """
        prompt, _ = self.build_playground_with_context(
            intent, current_code, providers, prior_errors
        )
        return prompt

    def build_playground_with_context(
        self,
        intent: str,
        current_code: PlaygroundCode,
        providers: Sequence[str | UIProvider],
        prior_errors: str | Sequence[str] | None = None,
    ) -> tuple[str, PromptContext]:
        """Build a playground prompt and return context metadata."""
        resolved = resolve_providers(p.id if isinstance(p, UIProvider) else p for p in providers)
        ids = [p.id for p in resolved]
        context = PromptContext(kind=ArtifactKind.PLAYGROUND, providers=ids)

        parts = [
            "You are an expert React developer. Your task is to generate React "
            "component code for MULTIPLE UI libraries based on the user's request.",
            self._format_intent(intent),
            "PROVIDERS TO GENERATE FOR:\n" + ", ".join(ids),
            "CURRENT CODE STATE:\n" + self._format_code(current_code),
            "CORE INSTRUCTIONS:\n" + _numbered(self._playground_instructions(resolved)),
            "ALLOWED COMPONENTS PER PROVIDER:\n"
            + "\n".join(
                f"- {p.id.upper()}: {', '.join(p.allowed_components)}" for p in resolved
            ),
            "OUTPUT FORMAT:\n"
            "Return a SINGLE JSON object where keys are the provider IDs (matching "
            "those above) and values are the code strings. No markdown, no triple "
            "backticks, no explanations.",
            "Example Output Format:\n"
            + json.dumps(
                {
                    p.id: "export default () => ( <Box><Button>Hello</Button></Box> )"
                    for p in resolved
                },
                indent=self._config.indent,
            ),
            "Generate the JSON now:",
        ]

        feedback = _normalize_errors(prior_errors)
        if feedback:
            parts.append(
                self._format_feedback(
                    feedback,
                    "Please fix these errors and regenerate the code for ALL providers "
                    "listed above. Return ONLY the corrected JSON.",
                )
            )
            context.feedback_included = True

        prompt = "\n\n".join(parts)
        context.total_tokens_estimate = len(prompt) // 4
        return prompt, context

    def _playground_instructions(self, providers: list[UIProvider]) -> list[str]:
        import_paths = '", "'.join(p.import_path for p in providers)
        lines = [
            "Analyze the requirements for the requested component and plan how it "
            "should look across the different UI libraries so the results are "
            "visually consistent.",
        ]
        for provider in providers:
            if provider.notes:
                lines.append(f"{provider.display_name.upper()}: " + " ".join(provider.notes))
        lines.extend(
            [
                "IMPORTS: You MUST include all necessary import statements in your code. "
                f'Import from "{import_paths}" as appropriate. '
                "Always include: import React from 'react'; "
                "For icons, import from 'lucide-react'.",
                'COMPONENT RESTRICTION: For EACH provider, you can ONLY use the components '
                'listed in the "ALLOWED COMPONENTS" section below. Using any other '
                "component from these libraries will cause a build failure.",
                "CODE STRUCTURE: Each output must be a standalone default export "
                "functional component: export default () => { ... }.",
                "VALIDATION: Ensure the generated code is valid React/JSX and follows "
                "the syntax and patterns of the respective UI library.",
                "COMMENTS: Never use any comments in the generated code.",
            ]
        )
        return lines

    # =========================================================================
    # Formatting helpers
    # =========================================================================

    def _serialize(self, value: Any) -> str:
        return json.dumps(value, indent=self._config.indent, sort_keys=True, ensure_ascii=False)

    def _format_code(self, current_code: PlaygroundCode) -> str:
        if current_code is None or current_code == "":
            return "(none, generate from scratch)"
        if isinstance(current_code, str):
            return current_code
        return self._serialize(dict(current_code))

    def _format_intent(self, intent: str) -> str:
        return f'USER REQUEST: "{intent}"'

    def _format_feedback(self, feedback: str, instruction: str) -> str:
        return f"{FEEDBACK_HEADER}\n{feedback}\n\n{instruction}"


__all__ = [
    "FEEDBACK_HEADER",
    "CONFIG_INSTRUCTIONS",
    "PlaygroundCode",
    "PromptBuilder",
    "PromptConfig",
    "PromptContext",
]
