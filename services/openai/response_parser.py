"""Helpers to parse Responses API outputs into structured answers."""

import json
import logging
from typing import Any, Dict, List, Optional

from models.chat_models import ChatAnswer

LOGGER = logging.getLogger(__name__)

DEFAULT_TITLE = "Answer"
DEFAULT_INTRODUCTION = "I'm not sure how to respond to that."


def placeholder_answer() -> ChatAnswer:
    """Answer returned when the model output cannot be read at all."""
    return ChatAnswer(
        title="Error",
        introduction="Sorry, I had trouble processing that request. Please try again.",
    )


def _get(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def extract_text(response: Any) -> str:
    """Extract the first output_text entry from the response."""
    for item in _get(response, "output", None) or []:
        if _get(item, "type") != "message":
            continue
        for content in _get(item, "content", None) or []:
            if _get(content, "type") == "output_text":
                return _get(content, "text", "") or ""
    return _get(response, "output_text", "") or ""


def extract_usage(response: Any) -> Dict[str, Optional[int]]:
    """Return token usage if present."""
    usage = _get(response, "usage", None)
    return {
        "input_tokens": _get(usage, "input_tokens", None) if usage else None,
        "output_tokens": _get(usage, "output_tokens", None) if usage else None,
    }


def load_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse `text` as a JSON object, falling back to its outermost `{...}` block.

    JSON that parses to something other than an object or null yields an empty
    object, so every field is defaulted. Returns None when nothing parses or
    the text is `null`.
    """
    candidates = [text]
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start : end + 1])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except (TypeError, ValueError):
            continue
        if isinstance(parsed, dict):
            return parsed
        if parsed is not None:
            return {}
    return None


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item.strip()]


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def normalize_answer(data: Dict[str, Any]) -> ChatAnswer:
    """Default every field of a parsed answer individually."""
    return ChatAnswer(
        title=_text(data.get("title"), DEFAULT_TITLE),
        introduction=_text(data.get("introduction"), DEFAULT_INTRODUCTION),
        key_points=_string_list(data.get("keyPoints")),
        activities=_string_list(data.get("activities")),
        resources=_string_list(data.get("resources")),
    )


def parse_answer(text: str) -> Optional[ChatAnswer]:
    """Return the normalized answer, or None if `text` cannot be read as JSON."""
    data = load_json_object(text or "")
    if data is None:
        LOGGER.error("Error parsing JSON response: %r", text)
        return None
    return normalize_answer(data)
