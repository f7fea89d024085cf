"""Structured representation of a failed Graph API request."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from box import Box

from .errors import GraphError, GraphServiceError

# Invalid or unknown error code from the server
INVALID_ERROR_CODE = -1

# No valid HTTP status code was returned: the error happened locally, before
# the request was sent, or the connection failed. Check the exception.
INVALID_HTTP_STATUS_CODE = -1


class Category(Enum):
    """Classification of a request error, used to decide how to recover from it."""

    # Unknown, likely unrelated to the Graph API itself
    UNKNOWN = "unknown"
    # Authentication related; retry the request after some user action
    AUTHENTICATION_RETRY = "authentication_retry"
    # Authentication related; close the session and reopen it
    AUTHENTICATION_REOPEN_SESSION = "authentication_reopen_session"
    PERMISSION = "permission"
    # Unexpected server failure, or server temporarily unavailable
    SERVER = "server"
    # The server is throttling the client
    THROTTLING = "throttling"
    # Graph API related but not yet categorized, likely newer than this library
    OTHER = "other"
    # Bad or malformed request from the application
    BAD_REQUEST = "bad_request"
    # Client-side error such as a JSON parsing failure or a connection error
    CLIENT = "client"


@dataclass(frozen=True)
class SingleResult:
    """Result of a single, non-batched request."""

    envelope: Box


@dataclass(frozen=True)
class BatchResult:
    """Result of a batched request: one envelope per sub-request, in order."""

    results: Tuple[Any, ...]


RequestResult = Union[SingleResult, BatchResult]


class GraphRequestError:
    """Error information for a Graph API request that failed.

    Instances are created by extract_error() when a response carries an error,
    or by from_local_failure() when the request never produced a response.
    They are read-only once created.

    Example:
        Basic::

            error = extract_error(envelope)
            if error is not None:
                if error.error_code == 190:
                    ...
                logger.warning(str(error))
    """

    def __init__(
        self,
        request_status_code: int = INVALID_HTTP_STATUS_CODE,
        error_code: int = INVALID_ERROR_CODE,
        sub_error_code: int = INVALID_ERROR_CODE,
        error_type: Optional[str] = None,
        error_message: Optional[str] = None,
        request_result_body: Optional[Dict[str, Any]] = None,
        request_result: Optional[Dict[str, Any]] = None,
        batch_request_result: Optional[RequestResult] = None,
        transport: Any = None,
        exception: Optional[GraphError] = None,
    ):
        self._request_status_code = request_status_code
        self._error_code = error_code
        self._sub_error_code = sub_error_code
        self._error_type = error_type
        self._error_message = error_message
        self._request_result_body = (
            Box(request_result_body, frozen_box=True)
            if request_result_body is not None
            else None
        )
        self._request_result = (
            Box(request_result, frozen_box=True) if request_result is not None else None
        )
        self._batch_request_result = batch_request_result
        self._transport = transport
        if exception is not None:
            self._exception = exception
        else:
            self._exception = GraphServiceError(self, error_message)

        # Not computed by extraction; see DESIGN.md
        self._category = Category.UNKNOWN
        self._user_action_message: Optional[str] = None

    @classmethod
    def from_local_failure(
        cls, transport: Any, failure: BaseException
    ) -> "GraphRequestError":
        """Create an error for a request that failed before a response was read.

        Args:
            transport: Connection or client object used for the request.
            failure: The exception that was caught. Kept as-is if it is a
                GraphError, otherwise wrapped in one.

        Returns:
            GraphRequestError: Error with invalid status and error codes.
        """
        if isinstance(failure, GraphError):
            exception = failure
        else:
            exception = GraphError(str(failure) or type(failure).__name__)
            exception.__cause__ = failure

        return cls(transport=transport, exception=exception)

    @property
    def user_action_message(self) -> Optional[str]:
        """User-friendly message for the application to present, if any."""
        return self._user_action_message

    @property
    def category(self) -> Category:
        """Category the error belongs to."""
        return self._category

    @property
    def request_status_code(self) -> int:
        """HTTP status code of the request, or INVALID_HTTP_STATUS_CODE."""
        return self._request_status_code

    @property
    def error_code(self) -> int:
        """Error code returned by the Graph API, or INVALID_ERROR_CODE."""
        return self._error_code

    @property
    def sub_error_code(self) -> int:
        """Sub-error code returned by the Graph API, or INVALID_ERROR_CODE."""
        return self._sub_error_code

    @property
    def error_type(self) -> Optional[str]:
        """Raw error type string, e.g. ``OAuthException``."""
        return self._error_type

    @property
    def error_message(self) -> str:
        """Error message returned by the Graph API.

        Falls back to the message of the associated exception when the
        response carried none.
        """
        if self._error_message is not None:
            return self._error_message
        return self._exception.message

    @property
    def request_result_body(self) -> Optional[Box]:
        """Body of the response for the request."""
        return self._request_result_body

    @property
    def request_result(self) -> Optional[Box]:
        """Full result envelope for the request.

        For a batched request this also holds the HTTP headers of that
        sub-request under ``headers``.
        """
        return self._request_result

    @property
    def batch_request_result(self) -> Optional[RequestResult]:
        """SingleResult for a plain request, BatchResult for a batched one."""
        return self._batch_request_result

    @property
    def transport(self) -> Any:
        """Connection or response object used to make the request."""
        return self._transport

    @property
    def exception(self) -> GraphError:
        """Exception associated with this error. Never None."""
        return self._exception

    @property
    def cause(self) -> GraphError:
        """Alias of exception."""
        return self._exception

    def to_dict(self) -> Dict[str, Any]:
        """Convert the scalar error fields to a dictionary.

        Returns:
            Dictionary suitable for structured logging.
        """
        return {
            "request_status_code": self._request_status_code,
            "error_code": self._error_code,
            "sub_error_code": self._sub_error_code,
            "error_type": self._error_type,
            "error_message": self.error_message,
            "category": self._category.name,
        }

    def __str__(self) -> str:
        return (
            f"{{HttpStatus: {self._request_status_code}, "
            f"errorCode: {self._error_code}, "
            f"errorType: {self._error_type}, "
            f"errorMessage: {self.error_message}}}"
        )

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"GraphRequestError({items})"
