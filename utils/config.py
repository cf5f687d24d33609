"""Environment-driven configuration for the upstream services."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_TABULAR_CLASSIFIER_URL = "https://yash07745-alzheimer-prediction-api.hf.space/predict"
DEFAULT_OPENAI_MODEL = "gpt-4.1"
DEFAULT_TABULAR_DISPATCH_DELAY = 0.5


def _optional_str(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _optional_float(env: Mapping[str, str], name: str) -> Optional[float]:
    raw = _optional_str(env, name)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number of seconds, got {raw!r}") from exc


@dataclass(frozen=True)
class AppConfig:
    """Settings passed explicitly to the components that call remote services.

    Attributes:
        openai_api_key: Key for the LLM endpoint; None disables the assistant.
        openai_model: Model name used for the Responses API.
        image_classifier_url: URL of the hosted image classifier.
        tabular_classifier_url: URL of the hosted tabular classifier.
        tabular_dispatch_delay: Cosmetic pause (seconds) before the tabular call.
        classifier_timeout: Timeout for classifier calls; None means no timeout.
        log_level: Root logging level name.
    """

    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    image_classifier_url: Optional[str] = None
    tabular_classifier_url: str = DEFAULT_TABULAR_CLASSIFIER_URL
    tabular_dispatch_delay: float = DEFAULT_TABULAR_DISPATCH_DELAY
    classifier_timeout: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build the configuration from `env` (defaults to `os.environ` after loading `.env`)."""
        if env is None:
            load_dotenv()  # Load environment variables from .env file if present
            env = os.environ

        delay = _optional_float(env, "TABULAR_DISPATCH_DELAY")
        if delay is not None and delay < 0:
            raise RuntimeError("TABULAR_DISPATCH_DELAY must not be negative")

        return cls(
            openai_api_key=_optional_str(env, "OPENAI_API_KEY"),
            openai_model=_optional_str(env, "OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
            image_classifier_url=_optional_str(env, "IMAGE_CLASSIFIER_URL"),
            tabular_classifier_url=_optional_str(env, "TABULAR_CLASSIFIER_URL") or DEFAULT_TABULAR_CLASSIFIER_URL,
            tabular_dispatch_delay=DEFAULT_TABULAR_DISPATCH_DELAY if delay is None else delay,
            classifier_timeout=_optional_float(env, "CLASSIFIER_TIMEOUT"),
            log_level=(_optional_str(env, "LOG_LEVEL") or "INFO").upper(),
        )
