"""Brain-scan classification through the hosted image classifier."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from services.classifiers.errors import (
    INVALID_FORMAT_MESSAGE,
    INVALID_PREDICTION_MESSAGE,
    InvalidPredictionError,
    UpstreamStatusError,
)
from services.classifiers.outcomes import label_for_index
from services.classifiers.transport import post_upstream

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImagePrediction:
    """A validated classifier answer."""

    label_index: int
    label: str
    probability: float


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_image_prediction(payload: Any) -> ImagePrediction:
    """Validate a `{label, probability}` body and map the label index to its category.

    Raises:
        InvalidPredictionError: If the body is malformed, the index is outside
            the category table, or the probability is outside [0, 1].
    """
    if not isinstance(payload, dict) or not _is_number(payload.get("label")):
        raise InvalidPredictionError(INVALID_FORMAT_MESSAGE)

    raw_label = payload["label"]
    if isinstance(raw_label, float) and not raw_label.is_integer():
        raise InvalidPredictionError(INVALID_PREDICTION_MESSAGE)
    label_index = int(raw_label)

    try:
        label = label_for_index(label_index)
    except IndexError as exc:
        raise InvalidPredictionError(INVALID_PREDICTION_MESSAGE) from exc

    probability = payload.get("probability")
    if not _is_number(probability) or not 0.0 <= float(probability) <= 1.0:
        raise InvalidPredictionError(INVALID_PREDICTION_MESSAGE)

    return ImagePrediction(label_index=label_index, label=label, probability=float(probability))


class ImageClassifier:
    """Forward uploaded scans to the image classifier as multipart form data."""

    def __init__(self, client: httpx.AsyncClient, url: Optional[str], timeout: Optional[float] = None) -> None:
        if client is None:
            raise ValueError("HTTP client must be provided.")
        self.client = client
        self.url = url
        self.timeout = timeout

    async def classify(self, image_bytes: bytes, *, filename: str, content_type: str) -> ImagePrediction:
        """Send the scan in the `file` field and return the validated prediction."""
        start_time = time.time()
        response = await post_upstream(
            self.client,
            self.url,
            timeout=self.timeout,
            files={"file": (filename, image_bytes, content_type)},
        )

        if not response.is_success:
            LOGGER.error("Image classifier returned %s: %s", response.status_code, response.text)
            raise UpstreamStatusError(response.status_code, response.reason_phrase)

        try:
            payload = response.json()
        except ValueError as exc:
            LOGGER.error("Image classifier body is not JSON: %r", response.text)
            raise InvalidPredictionError(INVALID_FORMAT_MESSAGE) from exc

        LOGGER.info("Image classifier response: %s", payload)
        try:
            prediction = parse_image_prediction(payload)
        except InvalidPredictionError:
            LOGGER.error("Rejected image classifier payload: %r", payload)
            raise

        LOGGER.info("Image classification latency: %.3fs", time.time() - start_time)
        return prediction
