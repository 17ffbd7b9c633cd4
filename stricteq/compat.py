"""
Pairwise compatibility rules for two single (non-union) operand types.

Each rule inspects an ordered pair and returns True (safe), False (unsafe) or
None (no opinion). Rules are evaluated in table order and the first opinion
wins. Orientation matters, so callers go through `compatible`, which tries
both operand orders.
"""

from typing import Callable, Optional, Sequence, Tuple

from .kinds import (
    Atomic, Kind, Polarity, STRUCTURAL_KINDS,
    is_a, is_string_like, is_too_complicated,
)

PairRule = Callable[[Atomic, Atomic], Optional[bool]]


def same_string(first: Atomic, second: Atomic) -> Optional[bool]:
    # numeric strings coerce on both sides, "1e1" == "10" holds either way
    if is_string_like(first) and is_string_like(second):
        return True
    return None


def _same_scalar(kind: Kind) -> PairRule:
    def rule(first: Atomic, second: Atomic) -> Optional[bool]:
        if first.kind is kind and second.kind is kind:
            return True
        return None
    rule.__name__ = f"same_{kind.name.lower()}"
    return rule


same_int = _same_scalar(Kind.INT)
same_float = _same_scalar(Kind.FLOAT)
same_bool = _same_scalar(Kind.BOOL)


def structural_lattice(first: Atomic, second: Atomic) -> Optional[bool]:
    """Array-like operands related in the structural lattice."""
    if first.kind in STRUCTURAL_KINDS and second.kind in STRUCTURAL_KINDS:
        if is_a(first, second) or is_a(second, first):
            return True
    return None


def object_lattice(first: Atomic, second: Atomic) -> Optional[bool]:
    if first.kind is Kind.OBJECT and second.kind in (Kind.OBJECT, Kind.NAMED_OBJECT):
        return True
    if first.kind is Kind.NAMED_OBJECT and second.kind is Kind.NAMED_OBJECT:
        return True
    return None


def too_complicated_guard(first: Atomic, second: Atomic) -> Optional[bool]:
    """Arrays and objects are only trusted against plain strings."""
    if not is_too_complicated(first):
        return None
    return is_string_like(second)


def same_or_parent(first: Atomic, second: Atomic) -> Optional[bool]:
    if is_a(first, second):
        return True
    return None


SCALAR_RULES: Tuple[PairRule, ...] = (same_string, same_int, same_float, same_bool)

LATTICE_RULES: Tuple[PairRule, ...] = SCALAR_RULES + (
    structural_lattice,
    object_lattice,
    too_complicated_guard,
    same_or_parent,
)

# Guard first: two arrays or two objects are never rewritten
CONSERVATIVE_RULES: Tuple[PairRule, ...] = SCALAR_RULES + (
    too_complicated_guard,
    same_or_parent,
)


def compatible_ordered(first: Atomic, second: Atomic,
                       rules: Sequence[PairRule] = LATTICE_RULES) -> bool:
    """Evaluate the rule table for one operand orientation."""
    for rule in rules:
        opinion = rule(first, second)
        if opinion is not None:
            return opinion
    return False


def compatible(first: Atomic, second: Atomic, polarity: Polarity = Polarity.EQUAL,
               rules: Sequence[PairRule] = LATTICE_RULES) -> bool:
    """
    Decide whether a loose comparison of two single types can be made strict.

    Args:
        first: Left operand type
        second: Right operand type
        polarity: Operator polarity; both polarities share the same table
        rules: Ordered rule table to evaluate

    Returns:
        True if either operand orientation is judged safe
    """
    return compatible_ordered(first, second, rules) or compatible_ordered(second, first, rules)
