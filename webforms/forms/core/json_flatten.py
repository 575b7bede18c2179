"""
Where: webforms/forms/core/json_flatten.py
What: Flatten one level of a JSON object body into string field values.
Why: JSON bodies share the multi-value string map with form bodies.
"""

import json
import logging
from typing import TYPE_CHECKING, Any, Dict, Union

from ..exceptions import DecodeError

if TYPE_CHECKING:
    from .data import RequestData

logger = logging.getLogger("forms.json_flatten")


def to_field_value(value: Any) -> str:
    """
    Convert a decoded JSON value to its field string.

    - str: unchanged
    - bool: "true" / "false"
    - int / float: shortest round-trip text, without ".0" for whole numbers
    - None: ""
    - dict / list: compact JSON, to be decoded again by the caller
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return format(value, ".0f")
    if isinstance(value, (int, float)):
        return repr(value)
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    raise TypeError(f"Unsupported JSON value type: {type(value).__name__}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON number: {name}")


def loads_json(text: Union[str, bytes]) -> Any:
    """
    Decode JSON text, rejecting the NaN and Infinity literals.

    Raises:
        ValueError: text is not valid JSON
    """
    return json.loads(text, parse_constant=_reject_constant)


def flatten_json_object(data: "RequestData", obj: Dict[str, Any]) -> None:
    """Append every key/value of a decoded JSON object to data."""
    for key, value in obj.items():
        data.add(key, to_field_value(value))


def parse_json_body(data: "RequestData", body: bytes) -> None:
    """
    Decode a JSON request body and flatten it into data.

    An empty body yields no fields. A top-level value that is not an object
    raises DecodeError.
    """
    if len(body) == 0:
        # don't attempt to parse empty bodies
        return

    try:
        decoded = loads_json(body)
    except ValueError as e:
        raise DecodeError(f"Malformed JSON body: {e}") from e

    if not isinstance(decoded, dict):
        raise DecodeError(
            f"JSON body must be an object, got {type(decoded).__name__}"
        )

    flatten_json_object(data, decoded)
    logger.debug("Flattened JSON body", extra={"field_count": len(decoded)})
