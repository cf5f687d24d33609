"""Demographic/genetic classification through the hosted tabular classifier."""

import asyncio
import logging
from typing import Optional

import httpx

from models.tabular_input import TabularInput
from services.classifiers.errors import INVALID_FORMAT_MESSAGE, InvalidPredictionError, UpstreamReportedError
from services.classifiers.outcomes import PredictionOutcome, outcome_for_code
from services.classifiers.transport import post_upstream

LOGGER = logging.getLogger(__name__)


class TabularClassifier:
    """Post a `TabularInput` as JSON and map the returned code to its display block."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        dispatch_delay: float = 0.5,
        timeout: Optional[float] = None,
    ) -> None:
        if client is None:
            raise ValueError("HTTP client must be provided.")
        self.client = client
        self.url = url
        self.dispatch_delay = dispatch_delay
        self.timeout = timeout

    async def classify(self, record: TabularInput) -> PredictionOutcome:
        """Return the outcome block for the classifier's prediction code.

        Raises:
            UpstreamReportedError: On a non-2xx status or an `error` field in the body.
            InvalidPredictionError: If the body is not JSON or carries no prediction code.
        """
        # Cosmetic pause; not a backoff.
        if self.dispatch_delay > 0:
            await asyncio.sleep(self.dispatch_delay)

        response = await post_upstream(self.client, self.url, timeout=self.timeout, json=record.model_dump())

        try:
            result = response.json()
        except ValueError as exc:
            LOGGER.error("Tabular classifier body is not JSON (status %s): %r", response.status_code, response.text)
            raise InvalidPredictionError(INVALID_FORMAT_MESSAGE) from exc

        error = result.get("error") if isinstance(result, dict) else None
        if not response.is_success or error:
            LOGGER.error("Tabular classifier failed with status %s: %r", response.status_code, result)
            raise UpstreamReportedError(str(error) if error else f"HTTP error! Status: {response.status_code}")

        code = result.get("prediction") if isinstance(result, dict) else None
        if not isinstance(code, str) or not code:
            LOGGER.error("Tabular classifier returned no prediction code: %r", result)
            raise InvalidPredictionError(INVALID_FORMAT_MESSAGE)

        outcome = outcome_for_code(code)
        if not outcome.recognized:
            LOGGER.warning("Unrecognized tabular prediction code %r", code)
        return outcome
