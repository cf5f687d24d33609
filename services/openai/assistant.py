"""Neurology question answering using the OpenAI Responses API.

The assistant sends a fixed persona and the user's question, asks the API to
constrain its output to the answer schema, and normalizes whatever comes back
into a `ChatAnswer`. Output that cannot be parsed at all is replaced by a
placeholder answer instead of raising; the reply is flagged so callers can
tell the two apart.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
from openai import AsyncOpenAI, OpenAIError

from models.chat_models import ChatAnswer
from services.openai.answer_schema import TEXT_FORMAT
from services.openai.prompts import build_system_prompt, build_user_prompt
from services.openai.response_parser import extract_text, extract_usage, parse_answer, placeholder_answer

LOGGER = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API Key is not configured. Please add OPENAI_API_KEY to your environment."


class AssistantError(Exception):
    """Raised when the LLM endpoint cannot be reached or refuses the request."""


class AssistantConfigurationError(AssistantError):
    """Raised when the assistant has no usable client."""


def build_openai_client(api_key: str, *, timeout: Optional[float] = None, http_client: Optional[httpx.AsyncClient] = None) -> AsyncOpenAI:
    """Create the shared client with SDK retries disabled.

    `timeout` of None means no timeout, matching the classifier calls.
    """
    kwargs: Dict[str, Any] = {"api_key": api_key, "max_retries": 0, "timeout": timeout}
    if http_client is not None:
        kwargs["http_client"] = http_client
    return AsyncOpenAI(**kwargs)


@dataclass
class AssistantReply:
    """Normalized answer plus whether it is the parse-failure placeholder."""

    answer: ChatAnswer
    fallback: bool = False
    usage: Dict[str, Optional[int]] = field(default_factory=dict)


class NeurologyAssistant:
    """Answer neurology questions as the empathetic Neuro-Sage specialist."""

    TEMPERATURE = 0.7
    TOP_P = 0.95
    MAX_OUTPUT_TOKENS = 8192

    def __init__(self, client: Optional[AsyncOpenAI], model: str) -> None:
        self.client = client
        self.model = model
        self.system_prompt = build_system_prompt()

    def _build_input(self, topic: str) -> List[Dict[str, Any]]:
        return [
            {
                "type": "message",
                "role": "system",
                "content": [{"type": "input_text", "text": self.system_prompt}],
            },
            {
                "type": "message",
                "role": "user",
                "content": [{"type": "input_text", "text": build_user_prompt(topic)}],
            },
        ]

    async def ask(self, topic: str) -> AssistantReply:
        """Ask one question and return the normalized structured answer.

        Raises:
            ValueError: If `topic` is empty.
            AssistantConfigurationError: If no API key/client is configured.
            AssistantError: If the Responses API call fails.
        """
        if not topic or not topic.strip():
            raise ValueError("A question is required.")
        if self.client is None:
            LOGGER.error("Missing OPENAI_API_KEY; the assistant is disabled.")
            raise AssistantConfigurationError(MISSING_KEY_MESSAGE)

        start = time.time()
        try:
            response = await self.client.responses.create(
                model=self.model,
                input=self._build_input(topic),
                text=TEXT_FORMAT,
                temperature=self.TEMPERATURE,
                top_p=self.TOP_P,
                max_output_tokens=self.MAX_OUTPUT_TOKENS,
            )
        except OpenAIError as exc:
            LOGGER.error("OpenAI Responses API error: %s", exc)
            raise AssistantError(str(exc)) from exc

        usage = extract_usage(response)
        LOGGER.info("Assistant latency: %.3fs, usage: %s", time.time() - start, usage)

        answer = parse_answer(extract_text(response))
        if answer is None:
            return AssistantReply(answer=placeholder_answer(), fallback=True, usage=usage)
        return AssistantReply(answer=answer, usage=usage)
