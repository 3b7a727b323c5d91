"""JSON extraction from raw backend output.

Backends sometimes wrap the requested JSON in prose or markdown fences
despite instructions. Extraction only recovers a JSON object; the
validators decide whether it is correct.
"""

import json
import re
from typing import Any

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class MalformedResponseError(ValueError):
    """Raised when no JSON object can be recovered from backend output."""


def _parse_object(text: str) -> dict[str, Any]:
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Failed to parse JSON response: {e}") from e
    if not isinstance(value, dict):
        raise MalformedResponseError(
            f"Failed to parse JSON response: expected an object, "
            f"received {type(value).__name__}"
        )
    return value


def extract_json(raw_text: str) -> dict[str, Any]:
    """Recover a JSON object from raw backend output.

    The substring between the first `{` and the last `}` is parsed. When no
    such pair exists, markdown fence markers are stripped and the remaining
    text is parsed instead.

    Args:
        raw_text: Text returned by the backend.

    Returns:
        Parsed JSON object.

    Raises:
        MalformedResponseError: If no JSON object can be parsed.

    Example:
        >>> extract_json('Here you go:\\n```json\\n{"label": "Save"}\\n```')
        {'label': 'Save'}
    """
    text = raw_text or ""
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return _parse_object(text[start : end + 1])

    stripped = _FENCE_RE.sub("", text).strip()
    if not stripped:
        raise MalformedResponseError("Failed to parse JSON response: empty response")
    return _parse_object(stripped)


__all__ = ["MalformedResponseError", "extract_json"]
