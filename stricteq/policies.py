"""
Compatibility policies for the strict-equality engine.

A policy bundles the pairwise rule table and the union rules used to decide
whether a loose comparison can be rewritten. Policies are looked up by name
from the rule configuration so a stricter table can be selected per project.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence, Tuple

from .compat import CONSERVATIVE_RULES, LATTICE_RULES, PairRule, compatible
from .kinds import Atomic, Polarity
from .unions import union_compatible


class UnknownPolicyError(ValueError):
    """Raised when a configuration names a policy that is not registered."""


class CompatibilityPolicy(ABC):
    """Abstract base class for compatibility policies."""

    name: str = ""

    @abstractmethod
    def compatible(self, first: Atomic, second: Atomic, polarity: Polarity) -> bool:
        """Decide safety for two single types, trying both orientations."""
        pass

    @abstractmethod
    def union_compatible(self, first: Sequence[Atomic], second: Sequence[Atomic],
                         polarity: Polarity) -> bool:
        """Decide safety when either side is a union, trying both orientations."""
        pass


class TablePolicy(CompatibilityPolicy):
    """Policy driven by an ordered pairwise rule table."""

    def __init__(self, name: str, rules: Tuple[PairRule, ...], description: str = ""):
        self.name = name
        self.rules = rules
        self.description = description

    def compatible(self, first: Atomic, second: Atomic, polarity: Polarity) -> bool:
        return compatible(first, second, polarity, self.rules)

    def union_compatible(self, first: Sequence[Atomic], second: Sequence[Atomic],
                         polarity: Polarity) -> bool:
        return union_compatible(first, second, polarity)

    def __repr__(self) -> str:
        return f"TablePolicy({self.name!r})"


LATTICE_POLICY = TablePolicy(
    "lattice",
    LATTICE_RULES,
    "Scalars, structural and object lattices, then the too-complicated guard",
)

CONSERVATIVE_POLICY = TablePolicy(
    "conservative",
    CONSERVATIVE_RULES,
    "Scalars, then the too-complicated guard; arrays and objects only against strings",
)

DEFAULT_POLICY_NAME = LATTICE_POLICY.name

_policies: Dict[str, CompatibilityPolicy] = {
    LATTICE_POLICY.name: LATTICE_POLICY,
    CONSERVATIVE_POLICY.name: CONSERVATIVE_POLICY,
}


def get_policy(name: str = DEFAULT_POLICY_NAME) -> CompatibilityPolicy:
    """Get a registered policy by name."""
    try:
        return _policies[name]
    except KeyError:
        raise UnknownPolicyError(
            f"Unknown compatibility policy '{name}' (available: {', '.join(list_policies())})"
        ) from None


def register_policy(policy: CompatibilityPolicy) -> None:
    """Register a policy under its name, replacing any previous one."""
    _policies[policy.name] = policy


def list_policies() -> List[str]:
    return sorted(_policies)
