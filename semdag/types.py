"""
Type descriptors for semdag.

A Type names one data shape, wraps a pydantic TypeAdapter that validates
and parses values of that shape, and carries a semantic equality
predicate used by round-trip checks.

Invariants:
    - Types are immutable once constructed
    - Types compare and hash by identity only; two Types built from the same
      annotation are different Types
    - equals is only meaningful for values accepted by schema

Example:
    >>> String = Type.of(str, name="String")
    >>> String.safe_parse("hello").success
    True
    >>> Number = Type.of(float, name="Number", equals=approximately(abs_tol=1e-9))
    >>> Number.equals(1.0, 1.0000000001)
    True
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from .errors import SchemaValidationError
from .result import Failure, Result, Success

T = TypeVar("T")


@dataclass(frozen=True, eq=False, repr=False)
class Type(Generic[T]):
    """Descriptor for a data shape.

    Attributes:
        name: Human-readable identifier, used only in diagnostics
        schema: pydantic TypeAdapter validating values of the shape
        equals: Semantic equality between two accepted values
    """

    name: str
    schema: TypeAdapter[T]
    equals: Callable[[T, T], bool] = operator.eq

    def __post_init__(self) -> None:
        """Validate type descriptor."""
        if not self.name:
            raise ValueError("Type name cannot be empty")
        if not isinstance(self.schema, TypeAdapter):
            raise TypeError(
                f"schema for type '{self.name}' must be a pydantic TypeAdapter, "
                f"got {type(self.schema).__name__}"
            )
        if not callable(self.equals):
            raise TypeError(f"equals for type '{self.name}' must be callable")

    @classmethod
    def of(
        cls,
        annotation: Any,
        name: Optional[str] = None,
        equals: Optional[Callable[[Any, Any], bool]] = None,
    ) -> Type[Any]:
        """Build a Type from a Python annotation or pydantic model.

        Args:
            annotation: Anything pydantic's TypeAdapter accepts
            name: Diagnostic name (defaults to the annotation's name)
            equals: Equality predicate (defaults to ==)

        Returns:
            A new Type; call once and share the reference
        """
        if name is None:
            name = getattr(annotation, "__name__", None) or repr(annotation)
        return cls(
            name=name,
            schema=TypeAdapter(annotation),
            equals=equals or operator.eq,
        )

    def safe_parse(self, value: Any) -> Result[T, ValidationError]:
        """Validate a value without raising.

        Returns:
            Success with the parsed value, or Failure with the pydantic error
        """
        try:
            return Success(self.schema.validate_python(value))
        except ValidationError as exc:
            return Failure(exc)

    def parse(self, value: Any) -> T:
        """Validate a value and return its parsed form.

        Raises:
            SchemaValidationError: If the value is rejected
        """
        try:
            return self.schema.validate_python(value)
        except ValidationError as exc:
            errors = format_errors(exc)
            raise SchemaValidationError(
                f"Validation failed for {self.name}: {'; '.join(errors)}",
                type_name=self.name,
                errors=errors,
            ) from exc

    def is_valid(self, value: Any) -> bool:
        """Whether the schema accepts value."""
        return self.safe_parse(value).success

    def json_schema(self) -> dict[str, Any]:
        """JSON schema of the wrapped shape."""
        return self.schema.json_schema()

    def __repr__(self) -> str:
        return f"Type({self.name!r})"


def format_errors(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into 'loc: msg' strings."""
    messages = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return messages


def approximately(
    abs_tol: float = 1e-9,
    rel_tol: float = 0.0,
) -> Callable[[float, float], bool]:
    """Equality predicate with floating-point tolerance."""

    def equals(a: float, b: float) -> bool:
        return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)

    return equals
