"""
Rewrite decision service.

Given the inferred types of both operands of a loose comparison, decide
whether the operator can be replaced by its strict counterpart and produce
the replacement text. The service is a pure function of its arguments; the
annotation-trust toggle and the policy are passed in by the caller.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .kinds import Polarity, TypeDescriptor, Verdict
from .policies import CompatibilityPolicy, LATTICE_POLICY

logger = logging.getLogger(__name__)

_REPLACEMENTS = {
    Polarity.EQUAL: " === ",
    Polarity.NOT_EQUAL: " !== ",
}


@dataclass(frozen=True)
class RewriteDecision:
    """Outcome of evaluating one comparison.

    Attributes:
        verdict: SAFE or UNSAFE
        replacement: Text replacing the span between both operands, only when SAFE
    """
    verdict: Verdict
    replacement: Optional[str] = None

    @property
    def is_safe(self) -> bool:
        return self.verdict is Verdict.SAFE


UNSAFE = RewriteDecision(Verdict.UNSAFE)


def replacement_for(polarity: Polarity) -> str:
    """Strict operator, padded with the single spaces the rewritten span includes."""
    return _REPLACEMENTS[polarity]


def evaluate_rewrite(left: TypeDescriptor, right: TypeDescriptor, polarity: Polarity,
                     allow_annotated_types: bool = False,
                     policy: Optional[CompatibilityPolicy] = None) -> RewriteDecision:
    """
    Decide whether `left <op> right` can use strict comparison.

    Args:
        left: Inferred type of the left operand
        right: Inferred type of the right operand
        polarity: EQUAL for ==, NOT_EQUAL for !=
        allow_annotated_types: Trust types that come from annotations/docblocks
        policy: Compatibility policy, the lattice policy when None

    Returns:
        RewriteDecision with the verdict and, when safe, the replacement text
    """
    if policy is None:
        policy = LATTICE_POLICY

    if (left.is_annotated() or right.is_annotated()) and not allow_annotated_types:
        logger.debug("Refusing rewrite of %s %s %s: annotated operand type",
                     left, polarity.value, right)
        return UNSAFE

    if left.is_single() and right.is_single():
        safe = policy.compatible(left.single(), right.single(), polarity)
    else:
        safe = policy.union_compatible(left.atomic_kinds(), right.atomic_kinds(), polarity)

    logger.debug("%s %s %s -> %s (policy=%s)", left, polarity.value, right,
                 "safe" if safe else "unsafe", policy.name)

    if not safe:
        return UNSAFE
    return RewriteDecision(Verdict.SAFE, replacement_for(polarity))
