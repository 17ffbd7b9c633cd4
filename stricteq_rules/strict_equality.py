"""Rule: lang.strict_equality

Flags every loose comparison (== and !=, <> as an alias of !=) and, when the
inferred operand types make it provably behavior-preserving, attaches an
autofix replacing the operator with its strict counterpart (=== and !==).

Loose comparison coerces operands before comparing:
- "abc" == 0         # true before PHP 8
- "1e1" == "10"      # true (numeric strings)
- null == ""         # true
- [] == false        # true

The finding is reported for every occurrence so existing uses can be
baselined or suppressed; the autofix only appears for safe rewrites.
"""

import logging
from typing import Iterator

from stricteq.decision import evaluate_rewrite
from stricteq.kinds import Polarity
from stricteq.policies import DEFAULT_POLICY_NAME, CompatibilityPolicy, UnknownPolicyError, get_policy
from stricteq.types import ComparisonInfo, Edit, Finding, Requires, RuleContext, RuleMeta

logger = logging.getLogger(__name__)

LOOSE_OPERATORS = ("==", "!=", "<>")


class StrictEqualityRule:
    """Replace loose comparison with strict comparison when operand types allow it."""

    meta = RuleMeta(
        id="lang.strict_equality",
        category="lang",
        priority="P1",
        autofix_safety="safe",
        description="Use strict comparison ===/!== instead of ==/!=",
        langs=["php"]
    )

    requires = Requires(inferred_types=True)

    def visit(self, ctx: RuleContext) -> Iterator[Finding]:
        """Report loose comparisons and provide safe autofixes."""
        config = ctx.config or {}
        alter_code = config.get('alter_code', True)
        allow_annotated_types = config.get('allow_annotated_types', False)
        policy = self._resolve_policy(config.get('policy', DEFAULT_POLICY_NAME), ctx.file_path)

        for comparison in ctx.comparisons:
            # Synthesized by the host for its own analysis, no source to point at
            if comparison.is_virtual:
                continue
            if comparison.operator not in LOOSE_OPERATORS:
                continue

            polarity = Polarity.from_operator(comparison.operator)
            strict = "===" if polarity is Polarity.EQUAL else "!=="
            autofix = None
            meta = {"operator": comparison.operator, "policy": policy.name}

            if alter_code and self._has_types(comparison):
                decision = evaluate_rewrite(
                    comparison.left_type,
                    comparison.right_type,
                    polarity,
                    allow_annotated_types=allow_annotated_types,
                    policy=policy,
                )
                meta["verdict"] = decision.verdict.value
                if decision.is_safe:
                    start_byte, end_byte = comparison.operator_range
                    autofix = [Edit(
                        start_byte=start_byte,
                        end_byte=end_byte,
                        replacement=decision.replacement
                    )]

            start_byte, end_byte = comparison.range
            yield Finding(
                rule=self.meta.id,
                message=f"Using {comparison.operator} is deprecated, prefer {strict}",
                file=ctx.file_path,
                start_byte=start_byte,
                end_byte=end_byte,
                severity="warn",
                autofix=autofix,
                meta=meta
            )

    def _resolve_policy(self, name: str, file_path: str) -> CompatibilityPolicy:
        """Look up the configured policy, falling back to the default one."""
        try:
            return get_policy(name)
        except UnknownPolicyError as e:
            logger.warning("%s in %s; using '%s'", e, file_path, DEFAULT_POLICY_NAME)
            return get_policy(DEFAULT_POLICY_NAME)

    def _has_types(self, comparison: ComparisonInfo) -> bool:
        if comparison.left_type is None or comparison.right_type is None:
            logger.debug("No inferred type for an operand at %d-%d", *comparison.range)
            return False
        return True


# Export rule for auto-discovery
RULES = [StrictEqualityRule()]
