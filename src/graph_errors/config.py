"""Graph errors configuration management."""

# ruff: noqa: N803
# Allow uppercase argument names for config (they match the config key names)

import logging
from typing import Any, Dict, Optional, Union

DEFAULT_NON_JSON_RESPONSE_PROPERTY = "FACEBOOK_NON_JSON_RESULT"
DEFAULT_DECODE_FAILURE_LOG_LEVEL = "DEBUG"

LogLevel = Union[str, int]


class GraphErrorsConfig:
    """Configuration for Graph API error extraction.

    All configuration variables follow the GRAPH_* naming convention.

    Example:
        Basic::

            from graph_errors.config import GraphErrorsConfig
            config = GraphErrorsConfig(
                GRAPH_NON_JSON_RESPONSE_PROPERTY="RAW_RESULT",
                GRAPH_DECODE_FAILURE_LOG_LEVEL="WARNING",
            )
            error = extract_error(envelope, config=config)
    """

    def __init__(
        self,
        GRAPH_NON_JSON_RESPONSE_PROPERTY: str = DEFAULT_NON_JSON_RESPONSE_PROPERTY,
        GRAPH_DECODE_FAILURE_LOG_LEVEL: LogLevel = DEFAULT_DECODE_FAILURE_LOG_LEVEL,
    ):
        """Initialize Graph errors configuration.

        Args:
            GRAPH_NON_JSON_RESPONSE_PROPERTY: Property name under which a non-JSON
                response body (e.g. a literal ``true``) is wrapped
                (default: "FACEBOOK_NON_JSON_RESULT")
            GRAPH_DECODE_FAILURE_LOG_LEVEL: Logging level name or number used
                when a malformed envelope is skipped during extraction
                (default: "DEBUG")
        """
        self.GRAPH_NON_JSON_RESPONSE_PROPERTY = GRAPH_NON_JSON_RESPONSE_PROPERTY
        self.GRAPH_DECODE_FAILURE_LOG_LEVEL = (
            GRAPH_DECODE_FAILURE_LOG_LEVEL.upper()
            if isinstance(GRAPH_DECODE_FAILURE_LOG_LEVEL, str)
            else GRAPH_DECODE_FAILURE_LOG_LEVEL
        )

        self._validate()

    def _validate(self):
        """Validate configuration values."""
        if not self.GRAPH_NON_JSON_RESPONSE_PROPERTY or not isinstance(
            self.GRAPH_NON_JSON_RESPONSE_PROPERTY, str
        ):
            raise ValueError(
                "GRAPH_NON_JSON_RESPONSE_PROPERTY must be a non-empty string"
            )

        if _to_level(self.GRAPH_DECODE_FAILURE_LOG_LEVEL) is None:
            raise ValueError(
                f"GRAPH_DECODE_FAILURE_LOG_LEVEL "
                f"({self.GRAPH_DECODE_FAILURE_LOG_LEVEL!r}) "
                f"is not a known logging level"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary containing all configuration values.
        """
        return {
            "GRAPH_NON_JSON_RESPONSE_PROPERTY": self.GRAPH_NON_JSON_RESPONSE_PROPERTY,
            "GRAPH_DECODE_FAILURE_LOG_LEVEL": self.GRAPH_DECODE_FAILURE_LOG_LEVEL,
        }

    def __repr__(self) -> str:
        """String representation of config."""
        items = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"GraphErrorsConfig({items})"


def get_config_value(config: Optional[Any], key: str, default: Any = None) -> Any:
    """Get configuration value from config object.

    Supports both dict-like and object attribute access patterns.

    Args:
        config: Configuration object or dict.
        key: Configuration key to retrieve.
        default: Default value if key not found.

    Returns:
        Configuration value or default.
    """
    if config is None:
        return default

    # Try dict-like access first
    if isinstance(config, dict):
        return config.get(key, default)

    # Try attribute access (for objects)
    return getattr(config, key, default)


def get_non_json_property(config: Optional[Any] = None) -> str:
    """Get the property name used to wrap non-JSON response bodies."""
    return get_config_value(
        config, "GRAPH_NON_JSON_RESPONSE_PROPERTY", DEFAULT_NON_JSON_RESPONSE_PROPERTY
    )


def get_decode_failure_log_level(config: Optional[Any] = None) -> int:
    """Get the numeric logging level for swallowed decode failures.

    Accepts a level name or number. Unknown levels fall back to
    ``logging.DEBUG``.
    """
    level = _to_level(
        get_config_value(
            config, "GRAPH_DECODE_FAILURE_LOG_LEVEL", DEFAULT_DECODE_FAILURE_LOG_LEVEL
        )
    )
    return level if level is not None else logging.DEBUG


def _to_level(value: Any) -> Optional[int]:
    """Convert a logging level name or number to a number, or None if unknown."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        level = logging.getLevelName(value.upper())
        if isinstance(level, int):
            return level
    return None
