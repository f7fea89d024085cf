"""Error extraction from Graph API request results.

The Graph API reports errors in one of two shapes inside a response body:

- a nested ``error`` object with ``type``, ``message``, ``code`` and
  ``error_subcode`` fields (current API versions), or
- flat top-level ``error_code``, ``error_msg``, ``error_reason`` and
  ``error_subcode`` fields (legacy REST-style endpoints).

The nested shape always wins when both are present. A non-2xx status with
no recognizable error shape is still reported, with invalid error codes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .config import get_decode_failure_log_level, get_non_json_property
from .errors import GraphJSONError
from .json_util import (
    freeze,
    get_int,
    get_string_property_as_json,
    opt_int,
    opt_string,
)
from .request_error import (
    INVALID_ERROR_CODE,
    BatchResult,
    GraphRequestError,
    RequestResult,
    SingleResult,
)

logger = logging.getLogger(__name__)

# Envelope keys
CODE_KEY = "code"
BODY_KEY = "body"

# Nested error object keys
ERROR_KEY = "error"
ERROR_TYPE_FIELD_KEY = "type"
ERROR_CODE_FIELD_KEY = "code"
ERROR_MESSAGE_FIELD_KEY = "message"

# Flat error keys
ERROR_CODE_KEY = "error_code"
ERROR_SUB_CODE_KEY = "error_subcode"
ERROR_MSG_KEY = "error_msg"
ERROR_REASON_KEY = "error_reason"


class ErrorSchema(Enum):
    """Shape in which the Graph API reported an error."""

    NESTED = "nested"
    FLAT = "flat"


@dataclass(frozen=True)
class ErrorDetails:
    """Error fields read from a response body, tagged with their schema."""

    schema: ErrorSchema
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_code: int = INVALID_ERROR_CODE
    sub_error_code: int = INVALID_ERROR_CODE


def _parse_nested_error(body: Mapping[str, Any]) -> Optional[ErrorDetails]:
    if ERROR_KEY not in body:
        return None

    error = get_string_property_as_json(body, ERROR_KEY)
    if not isinstance(error, dict):
        raise GraphJSONError(f"'{ERROR_KEY}' is not a JSON object")

    return ErrorDetails(
        schema=ErrorSchema.NESTED,
        error_type=opt_string(error, ERROR_TYPE_FIELD_KEY),
        error_message=opt_string(error, ERROR_MESSAGE_FIELD_KEY),
        error_code=opt_int(error, ERROR_CODE_FIELD_KEY, INVALID_ERROR_CODE),
        sub_error_code=opt_int(error, ERROR_SUB_CODE_KEY, INVALID_ERROR_CODE),
    )


def _parse_flat_error(body: Mapping[str, Any]) -> Optional[ErrorDetails]:
    flat_keys = (ERROR_CODE_KEY, ERROR_MSG_KEY, ERROR_REASON_KEY)
    if not any(key in body for key in flat_keys):
        return None

    return ErrorDetails(
        schema=ErrorSchema.FLAT,
        error_type=opt_string(body, ERROR_REASON_KEY),
        error_message=opt_string(body, ERROR_MSG_KEY),
        error_code=opt_int(body, ERROR_CODE_KEY, INVALID_ERROR_CODE),
        sub_error_code=opt_int(body, ERROR_SUB_CODE_KEY, INVALID_ERROR_CODE),
    )


# Priority order: first match wins
_ERROR_SCHEMA_PARSERS: List[Callable[[Mapping[str, Any]], Optional[ErrorDetails]]] = [
    _parse_nested_error,
    _parse_flat_error,
]


def parse_error_details(body: Mapping[str, Any]) -> Optional[ErrorDetails]:
    """Find error details in a decoded response body.

    Args:
        body: Decoded response body (a JSON object).

    Returns:
        ErrorDetails from the first matching schema, or None if the body
        carries no error.

    Raises:
        GraphJSONError: If the body has an ``error`` property that is not a
            JSON object.
    """
    for parser in _ERROR_SCHEMA_PARSERS:
        details = parser(body)
        if details is not None:
            return details
    return None


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def extract_error(
    envelope: Mapping[str, Any],
    batch_result: Optional[RequestResult] = None,
    transport: Any = None,
    config: Optional[Union[Dict[str, Any], Any]] = None,
) -> Optional[GraphRequestError]:
    """Check a request result envelope and create an error if it failed.

    Args:
        envelope: Result of one request, with the HTTP status under ``code``
            and the (possibly serialized) response body under ``body``.
        batch_result: SingleResult or BatchResult the envelope belongs to.
            Defaults to SingleResult(envelope).
        transport: Connection or response object used for the request. Stored
            on the error, never inspected.
        config: Optional configuration dict or object.

    Returns:
        GraphRequestError if the response reports an error or has a non-2xx
        status, None otherwise. Malformed JSON also yields None; consumers of
        the body will fail on it themselves.

    Example:
        Basic::

            envelope = {"code": 400, "body": '{"error": {"code": 190}}'}
            error = extract_error(envelope)
            error.error_code  # 190
    """
    if CODE_KEY not in envelope:
        return None

    try:
        status_code = get_int(envelope, CODE_KEY)
        body = get_string_property_as_json(
            envelope, BODY_KEY, get_non_json_property(config)
        )
        details = parse_error_details(body) if isinstance(body, dict) else None
    except GraphJSONError as e:
        # Left to whatever consumes the body to fail on it
        logger.log(
            get_decode_failure_log_level(config),
            f"Skipping error extraction for malformed result: {e}",
        )
        return None

    if details is None and _is_success(status_code):
        return None

    if batch_result is None:
        batch_result = SingleResult(freeze(dict(envelope)))

    if details is not None:
        logger.debug(
            f"Graph API error in {details.schema.value} schema: "
            f"status={status_code} code={details.error_code} "
            f"subcode={details.sub_error_code} type={details.error_type}"
        )
        return GraphRequestError(
            request_status_code=status_code,
            error_code=details.error_code,
            sub_error_code=details.sub_error_code,
            error_type=details.error_type,
            error_message=details.error_message,
            request_result_body=body,
            request_result=dict(envelope),
            batch_request_result=batch_result,
            transport=transport,
        )

    # No error details, but a failure status code: report it anyway
    logger.debug(f"Graph API HTTP {status_code} without error details")
    return GraphRequestError(
        request_status_code=status_code,
        request_result_body=body if isinstance(body, dict) else None,
        request_result=dict(envelope),
        batch_request_result=batch_result,
        transport=transport,
    )


check_response_and_create_error = extract_error


def extract_batch_errors(
    results: Sequence[Mapping[str, Any]],
    transport: Any = None,
    config: Optional[Union[Dict[str, Any], Any]] = None,
) -> List[Optional[GraphRequestError]]:
    """Extract errors from every envelope of a batch response.

    Args:
        results: Per-request result envelopes, in request order. The Graph API
            returns null for sub-requests it did not complete; such entries,
            and any entry that is not a JSON object, yield None.
        transport: Connection or response object used for the batch request.
        config: Optional configuration dict or object.

    Returns:
        list: One entry per envelope, GraphRequestError or None, in order.
    """
    batch_result = BatchResult(
        tuple(freeze(dict(r)) if isinstance(r, Mapping) else r for r in results)
    )
    errors = [
        extract_error(result, batch_result, transport, config)
        if isinstance(result, Mapping)
        else None
        for result in results
    ]
    failed = sum(1 for error in errors if error is not None)
    if failed:
        logger.debug(f"{failed} of {len(errors)} batch requests failed")
    return errors


def from_local_failure(transport: Any, failure: BaseException) -> GraphRequestError:
    """Create an error for a request that failed before a response was read.

    Args:
        transport: Connection or client object used for the request.
        failure: The caught exception.

    Returns:
        GraphRequestError: Error with invalid status and error codes, whose
        exception is the failure (or a GraphError wrapping it).
    """
    return GraphRequestError.from_local_failure(transport, failure)
