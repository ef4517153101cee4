"""
Result type for semdag.

A Result is either a Success carrying a value or a Failure carrying an
error. Fallible operations exposed to callers (reversal, safe parsing,
checked application) return a Result instead of raising, so callers must
branch on ``result.success``.

Example:
    >>> result = reverse(composed, "PRE_HELLO")
    >>> if result.success:
    ...     print(result.value)
    ... else:
    ...     print(result.error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from .errors import UnwrapError

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The produced value
    """

    value: T

    @property
    def success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: Why the operation failed
    """

    error: E

    @property
    def success(self) -> bool:
        return False

    def unwrap(self) -> Any:
        """Raise UnwrapError carrying the error."""
        raise UnwrapError(self.error)

    def unwrap_or(self, default: Any) -> Any:
        return default


Result = Union[Success[T], Failure[E]]


def is_success(result: Result[Any, Any]) -> bool:
    """Whether result is a Success."""
    return isinstance(result, Success)


def is_failure(result: Result[Any, Any]) -> bool:
    """Whether result is a Failure."""
    return isinstance(result, Failure)
