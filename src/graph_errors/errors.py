"""Graph error classes used as the cause of a GraphRequestError."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .request_error import GraphRequestError


class GraphError(Exception):
    """Base exception for Graph API request failures.

    Used directly to wrap local failures (connection errors, timeouts, TLS
    problems) that happened before a response could be read.

    Args:
        message: Human-readable description of the failure.
    """

    def __init__(self, message: Optional[str] = None):
        self.message = message or "Graph API request failed"
        super().__init__(self.message)


class GraphServiceError(GraphError):
    """Raised when the Graph API itself reported an error.

    Args:
        request_error: The GraphRequestError describing the response.
        message: Message reported by the service, if any. When absent a
            message naming the HTTP status is used instead.
    """

    def __init__(
        self, request_error: "GraphRequestError", message: Optional[str] = None
    ):
        self.request_error = request_error
        super().__init__(
            message
            or f"Graph API request failed (HTTP {request_error.request_status_code})"
        )


class GraphJSONError(GraphError, ValueError):
    """Raised when a result envelope holds malformed JSON."""
