"""
Error types for semdag.

This module defines all exception types raised by the library:
- SemdagError: Base exception
- CompositionError: Two morphisms were chained across incompatible types
- SchemaValidationError: A value was rejected by a Type's schema
- UnwrapError: A failed Result was unwrapped
- RegistryError: Type registry misuse (frozen, duplicate, unknown)

Invariants:
    - All errors inherit from SemdagError
    - Errors include context for debugging
    - Reversal never raises; it reports failures through Result
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class SemdagError(Exception):
    """Base exception for all semdag errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "SEMDAG_ERROR"
        self.details = details or {}


class CompositionError(SemdagError):
    """Morphisms cannot be composed.

    Raised when:
    - The first morphism's target Type is not the very same object as the
      second morphism's source Type
    - compose_all() is called without any morphism

    This signals a pipeline wired incorrectly, not a runtime condition.

    Attributes:
        first: Label of the first morphism
        second: Label of the second morphism
        target_type: Name of the first morphism's target Type
        source_type: Name of the second morphism's source Type
    """

    def __init__(
        self,
        message: str,
        first: Optional[str] = None,
        second: Optional[str] = None,
        target_type: Optional[str] = None,
        source_type: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="COMPOSITION_ERROR",
            details={
                "first": first,
                "second": second,
                "target_type": target_type,
                "source_type": source_type,
            },
        )
        self.first = first
        self.second = second
        self.target_type = target_type
        self.source_type = source_type


class SchemaValidationError(SemdagError):
    """A value does not match a Type's schema.

    Attributes:
        type_name: The Type that rejected the value
        errors: Flattened validation messages
    """

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        errors: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={"type_name": type_name, "errors": errors or []},
        )
        self.type_name = type_name
        self.errors = errors or []


class UnwrapError(SemdagError):
    """unwrap() was called on a Failure.

    Attributes:
        error: The error carried by the Failure
    """

    def __init__(self, error: Any) -> None:
        super().__init__(
            f"Called unwrap() on a failed result: {error}",
            code="UNWRAP_ERROR",
            details={"error": error},
        )
        self.error = error


class RegistryError(SemdagError):
    """Base class for type registry errors."""

    def __init__(self, message: str, code: str = "REGISTRY_ERROR") -> None:
        super().__init__(message, code=code)


class RegistryFrozenError(RegistryError):
    """Raised when attempting to modify a frozen registry."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="REGISTRY_FROZEN")


class DuplicateRegistrationError(RegistryError):
    """Raised when a Type or morphism name is already registered."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="DUPLICATE_REGISTRATION")


class UnknownTypeError(RegistryError):
    """Unknown Type name.

    Includes suggestions for similar registered names.

    Attributes:
        type_name: The unknown name
        suggestions: Similar registered names
    """

    def __init__(
        self,
        type_name: str,
        suggestions: Optional[List[str]] = None,
    ) -> None:
        suggestions = suggestions or []
        msg = f"Unknown type '{type_name}'"
        if suggestions:
            msg += f". Did you mean: {', '.join(suggestions)}?"
        super().__init__(msg, code="UNKNOWN_TYPE")
        self.type_name = type_name
        self.suggestions = suggestions
