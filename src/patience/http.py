r"""Attempt suppliers for HTTP requests made with httpx.

This module adapts an ``httpx`` request into an attempt supplier for the
``RetryExecutor``: transient problems become retryable ``Failure``
outcomes, while responses that will not improve by retrying abort the
run.

Example:
    ```pycon
    >>> import httpx
    >>> from patience.delays import exponential
    >>> from patience.http import request_attempt
    >>> from patience.retry import RetryExecutor
    >>> with httpx.Client() as client:  # doctest: +SKIP
    ...     supplier = request_attempt(client, "GET", "https://api.example.com/data")
    ...     result = RetryExecutor(exponential(2, 0.3)).execute(supplier, max_duration=10)
    ...

    ```
"""

from __future__ import annotations

__all__ = ["RETRY_STATUS_CODES", "request_attempt", "response_outcome"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from patience.exceptions import PatienceError
from patience.results import Failure, Success

if TYPE_CHECKING:
    from collections.abc import Callable

    from patience.results import AttemptOutcome

logger: logging.Logger = logging.getLogger(__name__)

# HTTP status codes that should trigger automatic retry
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


def response_outcome(
    response: httpx.Response,
    method: str,
    url: str,
    status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES,
) -> AttemptOutcome[httpx.Response]:
    """Classify an HTTP response as an attempt outcome.

    Args:
        response: The HTTP response to evaluate.
        method: The HTTP method used, for descriptions.
        url: The URL requested, for descriptions.
        status_forcelist: Status codes that should be retried.

    Returns:
        ``Failure`` if the status is retryable, ``Success`` if the status
        is below 400.

    Raises:
        PatienceError: For other error statuses, which are not retryable.
    """
    status_code = response.status_code
    if status_code in status_forcelist:
        return Failure(f"{method} request to {url} failed with status {status_code}")
    if status_code < 400:
        return Success(response)

    msg = f"{method} request to {url} failed with non-retryable status {status_code}"
    logger.debug(msg)
    raise PatienceError(msg)


def request_attempt(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES,
    **kwargs: Any,
) -> Callable[[], AttemptOutcome[httpx.Response]]:
    """Create an attempt supplier issuing one HTTP request per call.

    Timeouts and transport errors are reported as ``Failure`` outcomes.

    Args:
        client: The httpx client used to send requests.
        method: The HTTP method (e.g., "GET", "POST").
        url: The URL to request.
        status_forcelist: Status codes that should be retried.
        **kwargs: Additional arguments passed to ``client.request``.

    Returns:
        A zero-argument attempt supplier.
    """
    method = method.upper()

    def attempt() -> AttemptOutcome[httpx.Response]:
        try:
            response = client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            logger.debug(f"{method} request to {url} timed out: {exc}")
            return Failure(f"{method} request to {url} timed out: {exc}")
        except httpx.RequestError as exc:
            error_type = type(exc).__name__
            logger.debug(f"{method} request to {url} encountered {error_type}: {exc}")
            return Failure(f"{method} request to {url} encountered {error_type}: {exc}")
        return response_outcome(response, method, url, status_forcelist)

    return attempt
