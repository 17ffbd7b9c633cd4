"""
Compatibility rules used when at least one operand type is a union.

Both rules are folds over the ordered members of a union. The state each fold
threads through the members is an explicit immutable value, so the effect of
member order is visible in the code and can be tested directly.
"""

from dataclasses import dataclass
from functools import reduce
from typing import Optional, Sequence

from .kinds import (
    Atomic, Kind, Polarity,
    is_a, is_string_like, is_too_complicated,
)


@dataclass(frozen=True)
class DominantScan:
    """State of a homogeneous-lattice walk.

    Attributes:
        dominant: Widest member seen so far, None before the first member
        uniform: False once a member unrelated to the dominant one shows up
    """
    dominant: Optional[Atomic] = None
    uniform: bool = True


def _widen(state: DominantScan, member: Atomic) -> DominantScan:
    if not state.uniform:
        return state
    if state.dominant is None:
        return DominantScan(member)
    if is_a(member, state.dominant):
        return state
    if is_a(state.dominant, member):
        return DominantScan(member)
    return DominantScan(state.dominant, uniform=False)


def scan_dominant(members: Sequence[Atomic], start: DominantScan = DominantScan()) -> DominantScan:
    """Fold `members` into the widest kind they all relate to, if any."""
    return reduce(_widen, members, start)


def homogeneous_compatible(first: Sequence[Atomic], second: Sequence[Atomic]) -> bool:
    """Both sides collapse onto one dominant kind that is not too complicated."""
    state = scan_dominant(first)
    if not state.uniform or state.dominant is None or is_too_complicated(state.dominant):
        return False
    return scan_dominant(second, state).uniform


@dataclass(frozen=True)
class StringScan:
    """State of a string-only walk.

    Attributes:
        string_only: False once a member that is not string-like shows up
        with_null: A non-empty string member was seen, which licenses null
            on the other side
    """
    string_only: bool = True
    with_null: bool = False


def _scan_string(state: StringScan, member: Atomic) -> StringScan:
    if not state.string_only:
        return state
    if member.kind is Kind.NON_EMPTY_STRING:
        return StringScan(with_null=True)
    if member.kind is Kind.STRING:
        return state
    return StringScan(string_only=False, with_null=state.with_null)


def scan_strings(members: Sequence[Atomic]) -> StringScan:
    return reduce(_scan_string, members, StringScan())


_STRING_SAFE_KINDS = frozenset({Kind.CALLABLE, Kind.RESOURCE, Kind.CLOSED_RESOURCE})


def _string_safe(member: Atomic, with_null: bool) -> bool:
    if is_string_like(member):
        return True
    if member.kind is Kind.NULL:
        return with_null
    return is_too_complicated(member) or member.kind in _STRING_SAFE_KINDS


def nullable_string_compatible(first: Sequence[Atomic], second: Sequence[Atomic]) -> bool:
    """A string-only side against kinds that compare uniformly with strings."""
    state = scan_strings(first)
    if not state.string_only:
        return False
    return all(_string_safe(member, state.with_null) for member in second)


def union_compatible_ordered(first: Sequence[Atomic], second: Sequence[Atomic]) -> bool:
    return homogeneous_compatible(first, second) or nullable_string_compatible(first, second)


def union_compatible(first: Sequence[Atomic], second: Sequence[Atomic],
                     polarity: Polarity = Polarity.EQUAL) -> bool:
    """
    Decide rewrite safety when either operand is a union.

    Args:
        first: Members of the left operand type, in declaration order
        second: Members of the right operand type, in declaration order
        polarity: Operator polarity; both polarities share the same rules

    Returns:
        True if either rule holds in either operand orientation
    """
    return union_compatible_ordered(first, second) or union_compatible_ordered(second, first)
