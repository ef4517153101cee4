"""
Composition and reversal engine for semdag.

This module combines morphisms into chains and runs them backwards:
- compose / compose_all: chain morphisms, checking Type compatibility
- reverse: recover an input from an output, reported as a Result
- check_reversibility: probe the round-trip law on one value
- apply: forward application with opt-in schema validation

Invariants:
    - compose() only accepts first.target being the very same Type object as
      second.source; equal-looking Types built separately are rejected
    - Incompatible composition raises; reversal never raises for missing
      inverses, it returns a Failure naming the offending morphism
    - A composed chain is fully checked before any inverse runs

How to change safely:
    - Keep reversal messages stable; callers match on them
    - Reuse one Type object per shape across a pipeline (see registry)
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Optional

from .config import get_settings
from .errors import CompositionError
from .morphism import (
    ComposedMorphism,
    Morphism,
    MorphismKind,
    inverse_of,
    is_reversible,
    leaves,
)
from .result import Failure, Result, Success
from .types import format_errors

logger = logging.getLogger(__name__)


def compose(
    first: Morphism[Any, Any],
    second: Morphism[Any, Any],
    *,
    name: Optional[str] = None,
) -> ComposedMorphism[Any, Any]:
    """Compose two morphisms: first, then second.

    Args:
        first: Morphism applied first
        second: Morphism applied to first's output
        name: Optional diagnostic name for the composition

    Returns:
        ComposedMorphism from first.source to second.target

    Compatibility is identity of the Type descriptors themselves, not of
    their schemas: two Types wrapping one shared TypeAdapter still do not
    compose. Share the Type object across a pipeline instead.

    Raises:
        CompositionError: If first.target is not second.source

    Example:
        >>> composed = compose(upper, prefix)
        >>> composed.map("hello")
        'PRE_HELLO'
    """
    if first.target is not second.source:
        raise CompositionError(
            f"Cannot compose morphisms '{first.label}' and '{second.label}': "
            f"incompatible types. "
            f"First morphism target type: {first.target.name}. "
            f"Second morphism source type: {second.source.name}",
            first=first.label,
            second=second.label,
            target_type=first.target.name,
            source_type=second.source.name,
        )

    composed: ComposedMorphism[Any, Any] = ComposedMorphism(
        source=first.source,
        target=second.target,
        first=first,
        second=second,
        name=name,
    )
    logger.debug(f"Composed '{first.label}' with '{second.label}'")
    return composed


def compose_all(*morphisms: Morphism[Any, Any]) -> Morphism[Any, Any]:
    """Compose morphisms left to right.

    A single morphism is returned as is.

    Raises:
        CompositionError: If no morphism is given or two neighbours are
            incompatible
    """
    if not morphisms:
        raise CompositionError("compose_all() requires at least one morphism")
    return functools.reduce(compose, morphisms)


def reverse(m: Any, value: Any) -> Result[Any, str]:
    """Attempt to recover the input that m mapped to value.

    Reversible morphisms apply their inverse. Composed morphisms are
    reversible when every morphism in the chain is; inverses then run
    right to left. Basic morphisms and unknown kinds fail. An inverse raising
    ValueError becomes a Failure; other exceptions propagate.

    Args:
        m: Morphism to run backwards
        value: A value of m.target

    Returns:
        Success with the recovered value, or Failure with a diagnostic
    """
    kind = getattr(m, "kind", None)

    if kind == MorphismKind.REVERSIBLE:
        return _invert(m, value)
    if kind == MorphismKind.COMPOSED:
        return _reverse_composed(m, value)
    if kind == MorphismKind.BASIC:
        error = f'Morphism "{_signature(m)}" is not reversible'
        logger.debug(error)
        return Failure(error)

    logger.debug(f"Cannot reverse object with kind {kind!r}")
    return Failure("Unknown morphism kind")


def _reverse_composed(m: ComposedMorphism[Any, Any], value: Any) -> Result[Any, str]:
    try:
        chain = leaves(m)
    except ValueError as e:
        logger.debug(f"Cannot reverse malformed composition: {e}")
        return Failure(f"Malformed composed morphism: {e}")

    for leaf in reversed(chain):
        if not is_reversible(leaf):
            error = f'Morphism "{_signature(leaf)}" within composition is not reversible'
            logger.debug(error)
            return Failure(error)

    result: Result[Any, str] = Success(value)
    for leaf in reversed(chain):
        result = _invert(leaf, result.value)
        if not result.success:
            return result
    return result


def _invert(m: Any, value: Any) -> Result[Any, str]:
    # ValueError covers rejected values, pydantic ValidationError included;
    # any other exception is a bug in the inverse and propagates
    try:
        return Success(m.inverse(value))
    except ValueError as e:
        logger.debug(f"Inverse of '{_signature(m)}' raised: {e}")
        return Failure(f'Inverse of "{_signature(m)}" failed: {e}')


def _signature(m: Any) -> str:
    return f"{m.source.name} -> {m.target.name}"


def check_reversibility(m: Any, test_value: Any) -> bool:
    """Check the round-trip law of m on one value.

    Only the reversible variant has a stored inverse, so basic and composed
    morphisms always report False here; use reverse() for chains.

    Args:
        m: Morphism to probe
        test_value: A value accepted by m.source

    Returns:
        True if inverse(map(test_value)) equals test_value under m.source
    """
    inverse = inverse_of(m)
    if inverse is None:
        return False

    forward = m.map(test_value)
    backward = inverse(forward)
    return bool(m.source.equals(test_value, backward))


def apply(
    m: Morphism[Any, Any],
    value: Any,
    *,
    validate_input: Optional[bool] = None,
    validate_output: Optional[bool] = None,
) -> Result[Any, str]:
    """Map a value with schema checks on either side.

    map() itself never validates. This is the strict path: the input is
    parsed by m.source before mapping and the output by m.target after.
    Checks left as None follow the configured defaults.

    Args:
        m: Morphism to apply
        value: Candidate source value
        validate_input: Parse value with m.source first
        validate_output: Parse the result with m.target

    Returns:
        Success with the (parsed) output, or Failure naming the rejecting Type
    """
    settings = get_settings()
    if validate_input is None:
        validate_input = settings.validate_input
    if validate_output is None:
        validate_output = settings.validate_output

    if validate_input:
        parsed = m.source.safe_parse(value)
        if not parsed.success:
            return Failure(
                f"Input rejected by {m.source.name}: {'; '.join(format_errors(parsed.error))}"
            )
        value = parsed.value

    output = m.map(value)

    if validate_output:
        checked = m.target.safe_parse(output)
        if not checked.success:
            return Failure(
                f'Output of "{m.signature}" rejected by {m.target.name}: '
                f"{'; '.join(format_errors(checked.error))}"
            )
        output = checked.value

    return Success(output)
