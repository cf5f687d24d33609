"""Shared HTTP dispatch for the hosted classifiers."""

import logging
from typing import Any, Optional

import httpx

from services.classifiers.errors import NoResponseError, RequestSetupError

LOGGER = logging.getLogger(__name__)


async def post_upstream(
    client: httpx.AsyncClient,
    url: Optional[str],
    *,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> httpx.Response:
    """POST to a classifier and translate transport failures into classifier errors.

    The response is returned whatever its status; callers decide what a
    non-2xx answer means for their contract. Nothing is retried.

    Raises:
        RequestSetupError: If the URL is missing or the request cannot be built.
        NoResponseError: If the request went out but nothing usable came back.
    """
    if not url:
        LOGGER.error("Classifier URL is not configured.")
        raise RequestSetupError()

    try:
        return await client.post(url, timeout=timeout, **kwargs)
    except (httpx.InvalidURL, httpx.UnsupportedProtocol, httpx.LocalProtocolError) as exc:
        LOGGER.error("Could not build classifier request to %s: %s", url, exc)
        raise RequestSetupError() from exc
    except httpx.RequestError as exc:
        LOGGER.error("No response from classifier at %s: %s", url, exc)
        raise NoResponseError() from exc
