"""Graph Errors - structured errors for Facebook Graph API requests.

This package turns Graph API result envelopes (status code plus JSON body) and
local transport failures into immutable GraphRequestError values that callers
can inspect for error codes, sub-codes, types and messages.
"""

from .config import GraphErrorsConfig
from .errors import GraphError, GraphJSONError, GraphServiceError
from .helper import (
    ErrorDetails,
    ErrorSchema,
    check_response_and_create_error,
    extract_batch_errors,
    extract_error,
    from_local_failure,
    parse_error_details,
)
from .request_error import (
    INVALID_ERROR_CODE,
    INVALID_HTTP_STATUS_CODE,
    BatchResult,
    Category,
    GraphRequestError,
    SingleResult,
)
from .transport import envelope_from_response, error_from_exception, error_from_response

__all__ = [
    "INVALID_ERROR_CODE",
    "INVALID_HTTP_STATUS_CODE",
    "BatchResult",
    "Category",
    "ErrorDetails",
    "ErrorSchema",
    "GraphError",
    "GraphErrorsConfig",
    "GraphJSONError",
    "GraphRequestError",
    "GraphServiceError",
    "SingleResult",
    "check_response_and_create_error",
    "envelope_from_response",
    "error_from_exception",
    "error_from_response",
    "extract_batch_errors",
    "extract_error",
    "from_local_failure",
    "parse_error_details",
]

try:
    from ._version import version as __version__
except ImportError:
    __version__ = "unknown"
