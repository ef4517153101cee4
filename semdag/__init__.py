"""
semdag - typed, validated, optionally reversible data transformations.

This package provides a small algebra of morphisms between Type
descriptors:
- Type descriptors (Type) wrapping a pydantic schema and an equality
- Morphisms: basic, reversible and composed
- Composition checked by Type identity
- Reversal reported as a Result, plus a round-trip probe

Example:
    >>> from semdag import Type, compose, reverse, reversible_morphism
    >>>
    >>> String = Type.of(str, name="String")
    >>> upper = reversible_morphism(String, String, str.upper, str.lower)
    >>> prefix = reversible_morphism(String, String, lambda s: "PRE_" + s, lambda s: s[4:])
    >>>
    >>> composed = compose(upper, prefix)
    >>> composed.map("hello")
    'PRE_HELLO'
    >>> reverse(composed, "PRE_HELLO")
    Success(value='hello')

Invariants:
    - Types and morphisms are immutable after construction
    - Every operation is synchronous and completes in the calling frame
"""

__version__ = "0.3.1"

from .config import Settings, get_settings
from .engine import apply, check_reversibility, compose, compose_all, reverse
from .errors import (
    CompositionError,
    DuplicateRegistrationError,
    RegistryError,
    RegistryFrozenError,
    SchemaValidationError,
    SemdagError,
    UnknownTypeError,
    UnwrapError,
)
from .log import setup_logging
from .morphism import (
    BasicMorphism,
    ComposedMorphism,
    Morphism,
    MorphismKind,
    ReversibleMorphism,
    inverse_of,
    is_invertible,
    is_reversible,
    leaves,
    morphism,
    reversible_morphism,
)
from .registry import (
    TypeRegistry,
    get_registry,
    register_morphism,
    register_type,
)
from .result import Failure, Result, Success, is_failure, is_success
from .serializable import JsonLiteral, JsonType, JsonValue, LiteralType, json_equals
from .types import Type, approximately

__all__ = [
    # Version
    "__version__",
    # Types
    "Type",
    "approximately",
    # Morphisms
    "Morphism",
    "MorphismKind",
    "BasicMorphism",
    "ReversibleMorphism",
    "ComposedMorphism",
    "morphism",
    "reversible_morphism",
    "is_reversible",
    "is_invertible",
    "inverse_of",
    "leaves",
    # Engine
    "compose",
    "compose_all",
    "reverse",
    "check_reversibility",
    "apply",
    # Result
    "Result",
    "Success",
    "Failure",
    "is_success",
    "is_failure",
    # Serializable values
    "JsonLiteral",
    "JsonValue",
    "JsonType",
    "LiteralType",
    "json_equals",
    # Registry
    "TypeRegistry",
    "get_registry",
    "register_type",
    "register_morphism",
    # Configuration
    "Settings",
    "get_settings",
    "setup_logging",
    # Errors
    "SemdagError",
    "CompositionError",
    "SchemaValidationError",
    "UnwrapError",
    "RegistryError",
    "RegistryFrozenError",
    "DuplicateRegistrationError",
    "UnknownTypeError",
]
