"""Classification and structural equality for parsed JSON values."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Union

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


class JsonType(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def json_type(value: Any) -> JsonType:
    """Return the JSON variant of a value produced by ``json.load``.

    ``bool`` is checked before numbers because it subclasses ``int``.
    Tuples are accepted as arrays so hand-built documents behave like parsed ones.
    """
    if value is None:
        return JsonType.NULL
    if isinstance(value, bool):
        return JsonType.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonType.NUMBER
    if isinstance(value, str):
        return JsonType.STRING
    if isinstance(value, (list, tuple)):
        return JsonType.ARRAY
    if isinstance(value, dict):
        return JsonType.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def is_container(value: Any) -> bool:
    return json_type(value) in (JsonType.ARRAY, JsonType.OBJECT)


def json_equal(a: Any, b: Any) -> bool:
    """Structural equality over JSON values.

    Numbers compare by value (``1`` equals ``1.0``), but a boolean never
    equals a number. Arrays compare element-wise in order, objects by key set
    and values regardless of key order.
    """
    kind = json_type(a)
    if kind is not json_type(b):
        return False
    if kind is JsonType.ARRAY:
        if len(a) != len(b):
            return False
        return all(json_equal(left, right) for left, right in zip(a, b))
    if kind is JsonType.OBJECT:
        if a.keys() != b.keys():
            return False
        return all(json_equal(a[key], b[key]) for key in a)
    return a == b


__all__ = ["JsonValue", "JsonType", "json_type", "is_container", "json_equal"]
