"""
Serializable value shapes for semdag.

JSON-like values are the common currency between DTOs, entities and wire
formats. This module provides their annotations and shared Type
descriptors, so pipelines over plain JSON reuse one Type reference.

Example:
    >>> to_json = reversible_morphism(UserType, JsonType, dump_user, load_user)
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import JsonValue, TypeAdapter

from .types import Type

JsonLiteral = Union[str, int, float, bool, None]

__all__ = [
    "JsonLiteral",
    "JsonValue",
    "JsonType",
    "LiteralType",
    "json_equals",
]


def json_equals(a: Any, b: Any) -> bool:
    """Structural equality for JSON values.

    Numbers compare by value (1 == 1.0) but booleans never equal numbers.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(json_equals(a[key], b[key]) for key in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(json_equals(x, y) for x, y in zip(a, b))
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if type(a) is not type(b):
        return False
    return a == b


LiteralType: Type[Any] = Type(
    name="Literal",
    schema=TypeAdapter(JsonLiteral),
    equals=json_equals,
)

JsonType: Type[Any] = Type(
    name="Json",
    schema=TypeAdapter(JsonValue),
    equals=json_equals,
)
