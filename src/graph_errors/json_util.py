"""Typed reads over parsed Graph API JSON results.

Graph API result envelopes carry their body as pre-serialized JSON text, and
the body itself may be a JSON object, a JSON array, or a bare scalar such as
``true``. These helpers decode such properties and read optional typed fields
with defaults.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional

from box import Box

from .errors import GraphJSONError

logger = logging.getLogger(__name__)

# Leading characters of text that must parse as a JSON document
_JSON_DOCUMENT_PREFIXES = ("{", "[", '"')


def parse_json_text(text: str) -> Any:
    """Parse text as JSON if it looks like JSON, else return it unchanged.

    Text starting with ``{``, ``[`` or ``"`` is expected to be a JSON document
    and raises on decode failure. Anything else is tried as a JSON scalar
    (number, ``true``, ``false``, ``null``) and otherwise returned as an
    opaque string.

    Raises:
        GraphJSONError: If the text looks like a JSON document but is malformed.
    """
    stripped = text.strip()
    if stripped.startswith(_JSON_DOCUMENT_PREFIXES):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError as e:
            raise GraphJSONError(f"Malformed JSON document: {e}") from e
        except RecursionError as e:
            raise GraphJSONError("JSON document is nested too deeply") from e

    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        return text


def get_string_property_as_json(
    obj: Mapping[str, Any], key: str, non_json_property: Optional[str] = None
) -> Any:
    """Read a property that may hold serialized JSON.

    String values are decoded with parse_json_text(). The result is returned
    when it is an object or array. Scalars are wrapped as
    ``{non_json_property: value}`` when a property name is given.

    Args:
        obj: Parsed JSON object to read from.
        key: Property to read.
        non_json_property: Property name used to wrap scalar values.

    Returns:
        dict, list, or None if the property is absent or null.

    Raises:
        GraphJSONError: If the value is malformed JSON, or is a scalar and no
            non_json_property was given.
    """
    value = obj.get(key)
    if isinstance(value, str):
        value = parse_json_text(value)

    if value is not None and not isinstance(value, (dict, list)):
        if non_json_property is not None:
            # The Graph API sometimes answers with a literal such as true
            return {non_json_property: value}
        raise GraphJSONError(f"Got an unexpected non-JSON value for '{key}'")

    return value


def _float_to_int(value: float, raw: Any) -> int:
    try:
        return int(value)
    except (OverflowError, ValueError) as e:
        # inf and nan
        raise GraphJSONError(f"Expected an integer, got {raw!r}") from e


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise GraphJSONError(f"Expected an integer, got boolean {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _float_to_int(value, value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
        try:
            number = float(value.strip())
        except ValueError as e:
            raise GraphJSONError(f"Expected an integer, got {value!r}") from e
        return _float_to_int(number, value)
    raise GraphJSONError(f"Expected an integer, got {type(value).__name__}")


def get_int(obj: Mapping[str, Any], key: str) -> int:
    """Read a required integer property.

    Numbers and numeric strings are accepted.

    Raises:
        GraphJSONError: If the property is missing or not numeric.
    """
    if obj.get(key) is None:
        raise GraphJSONError(f"Missing integer property '{key}'")
    return _to_int(obj[key])


def opt_int(obj: Mapping[str, Any], key: str, default: int) -> int:
    """Read an optional integer property, returning default when absent or invalid."""
    value = obj.get(key)
    if value is None:
        return default
    try:
        return _to_int(value)
    except GraphJSONError:
        logger.debug(f"Ignoring non-integer value for '{key}': {value!r}")
        return default


def opt_string(
    obj: Mapping[str, Any], key: str, default: Optional[str] = None
) -> Optional[str]:
    """Read an optional property as a string.

    Non-string values are rendered the way they appear in JSON
    (``true``, ``12``, ``{"a": 1}``).
    """
    value = obj.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, dict, list, tuple)):
        return json.dumps(value)
    return str(value)


def freeze(value: Optional[Dict[str, Any]]) -> Optional[Box]:
    """Return an immutable Box view of a JSON object, or None."""
    if value is None:
        return None
    return Box(value, frozen_box=True)
