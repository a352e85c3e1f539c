"""Normalization of Python input into JSON-compatible values, and shape predicates."""

import dataclasses
import math
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, List

from .types import JsonArray, JsonObject, JsonValue


def normalize_value(value: Any) -> JsonValue:
    """Convert an arbitrary Python value into the JSON value model.

    Mappings keep their insertion order and get string keys, tuples and
    sets become lists, dataclasses and pydantic-style models become
    dicts, dates become ISO-8601 text and non-finite floats become None.
    Anything else unknown falls back to ``str(value)``.

    Args:
        value: Value to normalize

    Returns:
        JSON-compatible value
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return value

    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        if value == value.to_integral_value():
            return int(value)
        return float(value)

    if isinstance(value, (datetime, date, time)):
        return value.isoformat()

    if isinstance(value, Mapping):
        return {str(k): normalize_value(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [normalize_value(item) for item in value]

    if isinstance(value, (set, frozenset)):
        return [normalize_value(item) for item in sorted(value, key=repr)]

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return normalize_value(dataclasses.asdict(value))

    # pydantic v2, then v1
    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        return normalize_value(model_dump())
    if hasattr(value, "__fields__") and callable(getattr(value, "dict", None)):
        return normalize_value(value.dict())

    return str(value)


def is_json_primitive(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def is_json_array(value: Any) -> bool:
    return isinstance(value, list)


def is_json_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_array_of_primitives(arr: JsonArray) -> bool:
    return all(is_json_primitive(item) for item in arr)


def is_uniform_array(arr: JsonArray) -> bool:
    """Check whether every element is an object sharing the first element's key set.

    Key order inside the elements does not matter. An empty array, or one
    whose first object has no keys, is never uniform.
    """
    if not arr or not is_json_object(arr[0]) or not arr[0]:
        return False

    first_keys = set(arr[0])
    return all(is_json_object(item) and len(item) == len(first_keys) and set(item) == first_keys for item in arr)


def detect_tabular_header(arr: JsonArray) -> List[str] | None:
    """Detect if array can use tabular format and return header keys.

    The array must be uniform and every cell must be a primitive. Columns
    follow the first element's insertion order, not an alphabetical one.

    Args:
        arr: Array to inspect

    Returns:
        List of keys if tabular, None otherwise
    """
    if not is_uniform_array(arr):
        return None

    obj: JsonObject
    for obj in arr:
        if not all(is_json_primitive(value) for value in obj.values()):
            return None

    return list(arr[0].keys())
