"""httpx adapters for Graph API error extraction.

Turns an ``httpx.Response`` into the result envelope shape used by the Graph
batch API, so plain and batched requests go through the same extraction.
"""

import logging
from typing import Any, Dict, Optional, Union

import httpx

from .helper import BODY_KEY, CODE_KEY, extract_error, from_local_failure
from .request_error import GraphRequestError

logger = logging.getLogger(__name__)

HEADERS_KEY = "headers"


def envelope_from_response(response: httpx.Response) -> Dict[str, Any]:
    """Build a result envelope from an HTTP response.

    Args:
        response: Response returned by an httpx client.

    Returns:
        dict: ``{"code": status, "body": text, "headers": [{"name", "value"}]}``.
    """
    return {
        CODE_KEY: response.status_code,
        BODY_KEY: response.text,
        HEADERS_KEY: [
            {"name": name, "value": value}
            for name, value in response.headers.multi_items()
        ],
    }


def error_from_response(
    response: httpx.Response,
    config: Optional[Union[Dict[str, Any], Any]] = None,
) -> Optional[GraphRequestError]:
    """Check an HTTP response and create an error if it failed.

    The response is kept on the error as its transport, so callers can read
    headers such as ``x-fb-trace-id`` from it.

    Args:
        response: Response returned by an httpx client.
        config: Optional configuration dict or object.

    Returns:
        GraphRequestError or None.
    """
    return extract_error(
        envelope_from_response(response), transport=response, config=config
    )


def error_from_exception(
    exc: BaseException, transport: Any = None
) -> GraphRequestError:
    """Create an error for a request that raised before a response was read.

    Args:
        exc: Caught exception, typically an ``httpx.HTTPError``.
        transport: Client or request object used. Defaults to the request
            attached to an ``httpx.RequestError``, when there is one.

    Returns:
        GraphRequestError with invalid status and error codes.
    """
    if transport is None and isinstance(exc, httpx.RequestError):
        try:
            transport = exc.request
        except RuntimeError:
            # .request raises when the exception was created without one
            transport = None

    if isinstance(transport, httpx.Request):
        logger.warning(
            f"Graph API request {transport.method} {transport.url} failed: {exc}"
        )
    else:
        logger.warning(f"Graph API request failed: {exc}")

    return from_local_failure(transport, exc)
