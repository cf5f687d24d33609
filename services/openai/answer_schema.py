"""Schema definition for the structured neurology answer."""

from typing import Any, Dict

SCHEMA_NAME = "neurology_answer"

_STRING_LIST: Dict[str, Any] = {"type": "array", "items": {"type": "string"}}

ANSWER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "Short heading for the answer."},
        "introduction": {"type": "string", "description": "Direct answer to the user's question."},
        "keyPoints": {**_STRING_LIST, "description": "Two or three key points."},
        "activities": {**_STRING_LIST, "description": "Two or three actionable tips or mental exercises."},
        "resources": {**_STRING_LIST, "description": "Two or three links to reputable organizations."},
    },
    "required": ["title", "introduction", "keyPoints", "activities", "resources"],
    "additionalProperties": False,
}

TEXT_FORMAT: Dict[str, Any] = {
    "format": {
        "type": "json_schema",
        "name": SCHEMA_NAME,
        "schema": ANSWER_SCHEMA,
        "strict": True,
    }
}
