"""
Morphisms for semdag.

A morphism is a directional transformation between two Types. There are
three variants:
- BasicMorphism: forward only
- ReversibleMorphism: forward plus a declared inverse
- ComposedMorphism: two morphisms chained end to end

Invariants:
    - Morphisms are immutable; composition references its parts, never copies
    - map() never validates; schema checks are opt-in (see engine.apply)
    - is_reversible() and inverse_of() look at the variant tag only, so a
      composed morphism is never reported reversible by them

Example:
    >>> upper = reversible_morphism(String, String, str.upper, str.lower)
    >>> upper.map("hello")
    'HELLO'
    >>> inverse_of(upper)("HELLO")
    'hello'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Generic, Optional, TypeVar, Union

from .types import Type

A = TypeVar("A")
B = TypeVar("B")


class MorphismKind(str, Enum):
    """Morphism variant tags."""

    BASIC = "basic"
    REVERSIBLE = "reversible"
    COMPOSED = "composed"


@dataclass(frozen=True)
class BaseMorphism(Generic[A, B]):
    """Fields and behaviour shared by every variant.

    Attributes:
        source: Type of accepted values
        target: Type of produced values
    """

    source: Type[A]
    target: Type[B]

    kind: ClassVar[MorphismKind]

    def __post_init__(self) -> None:
        if not isinstance(self.source, Type):
            raise TypeError(f"source must be a Type, got {type(self.source).__name__}")
        if not isinstance(self.target, Type):
            raise TypeError(f"target must be a Type, got {type(self.target).__name__}")

    @property
    def signature(self) -> str:
        """'<source> -> <target>' using the Type names."""
        return f"{self.source.name} -> {self.target.name}"

    @property
    def label(self) -> str:
        """Explicit name if one was given, otherwise the signature."""
        return getattr(self, "name", None) or self.signature

    def map(self, value: A) -> B:
        raise NotImplementedError

    def __call__(self, value: A) -> B:
        return self.map(value)


@dataclass(frozen=True)
class BasicMorphism(BaseMorphism[A, B]):
    """Forward-only morphism."""

    forward: Callable[[A], B]
    name: Optional[str] = None

    kind: ClassVar[MorphismKind] = MorphismKind.BASIC

    def __post_init__(self) -> None:
        super().__post_init__()
        if not callable(self.forward):
            raise TypeError(f"forward of '{self.signature}' must be callable")

    def map(self, value: A) -> B:
        return self.forward(value)


@dataclass(frozen=True)
class ReversibleMorphism(BaseMorphism[A, B]):
    """Morphism carrying a declared inverse.

    The inverse is trusted, not verified; use check_reversibility() to probe
    it on concrete values.
    """

    forward: Callable[[A], B]
    inverse: Callable[[B], A]
    name: Optional[str] = None

    kind: ClassVar[MorphismKind] = MorphismKind.REVERSIBLE

    def __post_init__(self) -> None:
        super().__post_init__()
        if not callable(self.forward):
            raise TypeError(f"forward of '{self.signature}' must be callable")
        if not callable(self.inverse):
            raise TypeError(f"inverse of '{self.signature}' must be callable")

    def map(self, value: A) -> B:
        return self.forward(value)


@dataclass(frozen=True, eq=False, repr=False)
class ComposedMorphism(BaseMorphism[A, B]):
    """Two morphisms chained end to end.

    Built by engine.compose(); the intermediate Type is not part of this
    class's signature. Compares by identity and walks its chain without
    recursion, so chain depth is bounded by memory only.

    Attributes:
        first: Applied first, source side
        second: Applied second, target side
    """

    first: Morphism[A, Any]
    second: Morphism[Any, B]
    name: Optional[str] = None

    kind: ClassVar[MorphismKind] = MorphismKind.COMPOSED

    def map(self, value: A) -> B:
        result: Any = value
        for leaf in leaves(self):
            result = leaf.map(result)
        return result

    def __eq__(self, other: object) -> bool:
        return self is other

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return f"ComposedMorphism({self.label!r})"


Morphism = Union[BasicMorphism[A, B], ReversibleMorphism[A, B], ComposedMorphism[A, B]]


def morphism(
    source: Type[A],
    target: Type[B],
    forward: Callable[[A], B],
    *,
    name: Optional[str] = None,
) -> BasicMorphism[A, B]:
    """Create a basic (non-reversible) morphism.

    Args:
        source: Source Type
        target: Target Type
        forward: Mapping from source values to target values
        name: Optional diagnostic name

    Returns:
        BasicMorphism instance

    Example:
        >>> absolute = morphism(Number, Number, abs)
    """
    return BasicMorphism(source=source, target=target, forward=forward, name=name)


def reversible_morphism(
    source: Type[A],
    target: Type[B],
    forward: Callable[[A], B],
    backward: Callable[[B], A],
    *,
    name: Optional[str] = None,
) -> ReversibleMorphism[A, B]:
    """Create a reversible morphism.

    Args:
        source: Source Type
        target: Target Type
        forward: Mapping from source values to target values
        backward: Candidate inverse of forward
        name: Optional diagnostic name

    Returns:
        ReversibleMorphism instance
    """
    return ReversibleMorphism(
        source=source,
        target=target,
        forward=forward,
        inverse=backward,
        name=name,
    )


def is_reversible(m: Any) -> bool:
    """Whether m is the reversible variant."""
    return getattr(m, "kind", None) == MorphismKind.REVERSIBLE


def inverse_of(m: Any) -> Optional[Callable[[Any], Any]]:
    """Stored inverse of a reversible morphism, None for any other variant."""
    if is_reversible(m):
        return m.inverse
    return None


def leaves(m: Any) -> tuple[Any, ...]:
    """Non-composed morphisms of a chain, in application order.

    Raises:
        ValueError: If a node tagged composed lacks first or second
    """
    found = []
    stack = [m]
    while stack:
        node = stack.pop()
        if getattr(node, "kind", None) != MorphismKind.COMPOSED:
            found.append(node)
            continue
        if not hasattr(node, "first") or not hasattr(node, "second"):
            raise ValueError("Composed morphism is missing its first or second part")
        # second is pushed first so first is visited first
        stack.append(node.second)
        stack.append(node.first)
    return tuple(found)


def is_invertible(m: Any) -> bool:
    """Whether every morphism in the chain is the reversible variant."""
    try:
        chain = leaves(m)
    except ValueError:
        return False
    return all(is_reversible(leaf) for leaf in chain)
