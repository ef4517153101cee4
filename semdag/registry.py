"""
Type registry for semdag.

compose() compares Types by identity, so every stage of a pipeline must
share the same Type objects. The TypeRegistry is the place to keep them:
- Registration of Types and named morphisms
- Lookup by name
- Fingerprinting of the registered shapes
- Freeze mechanism to prevent runtime modifications

Invariants:
    - Registry is mutable during startup, frozen before serving
    - Once frozen, nothing can be registered
    - Type names and morphism labels are unique per registry
    - Fingerprint changes when a registered shape changes

Example:
    >>> registry = TypeRegistry()
    >>> registry.register_type(Type.of(str, name="String"))
    >>> String = registry.require_type("String")
    >>> registry.freeze()
    'sha256:...'
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from difflib import get_close_matches
from typing import Any, Dict, Iterator, Optional

from pydantic.errors import PydanticInvalidForJsonSchema

from .errors import DuplicateRegistrationError, RegistryFrozenError, UnknownTypeError
from .morphism import Morphism
from .types import Type

logger = logging.getLogger(__name__)

# Global registry instance
_global_registry: Optional[TypeRegistry] = None
_registry_lock = threading.Lock()


class TypeRegistry:
    """Registry of shared Type descriptors and named morphisms.

    Thread-safe for concurrent registration during startup.
    """

    def __init__(self) -> None:
        self._types: Dict[str, Type[Any]] = {}
        self._morphisms: Dict[str, Morphism[Any, Any]] = {}
        self._frozen = False
        self._fingerprint: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def frozen(self) -> bool:
        """Whether registry is frozen."""
        return self._frozen

    @property
    def fingerprint(self) -> Optional[str]:
        """Fingerprint (available after freeze)."""
        return self._fingerprint

    def register_type(self, type_: Type[Any]) -> Type[Any]:
        """Register a Type under its name.

        Args:
            type_: The Type to register

        Returns:
            The registered Type, for assignment at module level

        Raises:
            RegistryFrozenError: If registry is frozen
            DuplicateRegistrationError: If the name is already registered
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(
                    f"Cannot register type '{type_.name}': registry is frozen"
                )

            if type_.name in self._types:
                raise DuplicateRegistrationError(
                    f"Type name '{type_.name}' already registered"
                )

            self._types[type_.name] = type_
            logger.debug(f"Registered type: {type_.name}")
            return type_

    def register_morphism(self, m: Morphism[Any, Any]) -> Morphism[Any, Any]:
        """Register a morphism under its label.

        A morphism whose source or target is not the registered Type of that
        name is accepted, with a warning: it will not compose with morphisms
        built on the registered Type.

        Raises:
            RegistryFrozenError: If registry is frozen
            DuplicateRegistrationError: If the label is already registered
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(
                    f"Cannot register morphism '{m.label}': registry is frozen"
                )

            if m.label in self._morphisms:
                raise DuplicateRegistrationError(
                    f"Morphism '{m.label}' already registered"
                )

            for role, type_ in (("source", m.source), ("target", m.target)):
                registered = self._types.get(type_.name)
                if registered is None:
                    logger.warning(
                        f"Morphism '{m.label}' references unregistered {role} type '{type_.name}'"
                    )
                elif registered is not type_:
                    logger.warning(
                        f"Morphism '{m.label}' {role} type '{type_.name}' is not the "
                        f"registered instance and will not compose with it"
                    )

            self._morphisms[m.label] = m
            logger.debug(f"Registered morphism: {m.label} ({m.kind.value})")
            return m

    def get_type(self, name: str) -> Optional[Type[Any]]:
        """Get a Type by name, or None."""
        return self._types.get(name)

    def require_type(self, name: str) -> Type[Any]:
        """Get a Type by name.

        Raises:
            UnknownTypeError: If no Type has that name
        """
        type_ = self._types.get(name)
        if type_ is None:
            suggestions = get_close_matches(name, list(self._types), n=3)
            raise UnknownTypeError(name, suggestions)
        return type_

    def get_morphism(self, name: str) -> Optional[Morphism[Any, Any]]:
        """Get a morphism by label, or None."""
        return self._morphisms.get(name)

    def types(self) -> Iterator[Type[Any]]:
        """Iterate over all registered Types."""
        yield from self._types.values()

    def morphisms(self) -> Iterator[Morphism[Any, Any]]:
        """Iterate over all registered morphisms."""
        yield from self._morphisms.values()

    def freeze(self) -> str:
        """Freeze the registry and compute its fingerprint.

        Returns:
            Fingerprint string 'sha256:<hash>'

        Raises:
            RegistryFrozenError: If already frozen
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Registry is already frozen")

            self._fingerprint = self._compute_fingerprint()
            self._frozen = True
            logger.info(
                f"Type registry frozen with {len(self._types)} types, "
                f"{len(self._morphisms)} morphisms, fingerprint={self._fingerprint}"
            )
            return self._fingerprint

    def _compute_fingerprint(self) -> str:
        """SHA-256 over the canonical JSON form, sorted by name."""
        canonical = json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
        return f"sha256:{hashlib.sha256(canonical.encode('utf-8')).hexdigest()}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "types": [
                {"name": name, "schema": _schema_of(self._types[name])}
                for name in sorted(self._types)
            ],
            "morphisms": [
                {
                    "name": label,
                    "kind": self._morphisms[label].kind.value,
                    "source": self._morphisms[label].source.name,
                    "target": self._morphisms[label].target.name,
                }
                for label in sorted(self._morphisms)
            ],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)


def _schema_of(type_: Type[Any]) -> Optional[Dict[str, Any]]:
    try:
        return type_.json_schema()
    except PydanticInvalidForJsonSchema:
        logger.warning(f"Type '{type_.name}' has no JSON schema; fingerprint uses its name only")
        return None


def get_registry() -> TypeRegistry:
    """Get the global type registry."""
    global _global_registry
    with _registry_lock:
        if _global_registry is None:
            _global_registry = TypeRegistry()
        return _global_registry


def register_type(type_: Type[Any]) -> Type[Any]:
    """Register a Type in the global registry."""
    return get_registry().register_type(type_)


def register_morphism(m: Morphism[Any, Any]) -> Morphism[Any, Any]:
    """Register a morphism in the global registry."""
    return get_registry().register_morphism(m)


def reset_registry() -> None:
    """Reset the global registry (for testing only)."""
    global _global_registry
    with _registry_lock:
        _global_registry = None
