"""
Strict-equality engine package.

This package decides whether loose comparisons (== and !=) can be rewritten
to strict ones (=== and !==) from the inferred types of their operands.
"""

from .kinds import (
    Kind, Atomic, Provenance, Polarity, Verdict, TypeDescriptor,
    is_a, is_too_complicated, single, union, named_object, keyed_array
)

from .decision import RewriteDecision, evaluate_rewrite, replacement_for

from .policies import (
    CompatibilityPolicy, UnknownPolicyError, get_policy, register_policy, list_policies
)

from .types import (
    Finding, RuleMeta, Rule, RuleContext, Edit, Requires, ComparisonInfo,
    Severity, NodeRange
)

from .registry import (
    register_rule, get_rule, get_all_rules, get_enabled_rules, discover_rules, clear
)

from .config import (
    EngineConfig, load_config, get_default_config, save_config, find_config_file, get_rule_severity
)

__all__ = [
    # Type model
    "Kind", "Atomic", "Provenance", "Polarity", "Verdict", "TypeDescriptor",
    "is_a", "is_too_complicated", "single", "union", "named_object", "keyed_array",

    # Decision
    "RewriteDecision", "evaluate_rewrite", "replacement_for",
    "CompatibilityPolicy", "UnknownPolicyError", "get_policy", "register_policy", "list_policies",

    # Types
    "Finding", "RuleMeta", "Rule", "RuleContext", "Edit", "Requires", "ComparisonInfo",
    "Severity", "NodeRange",

    # Registry
    "register_rule", "get_rule", "get_all_rules", "get_enabled_rules", "discover_rules", "clear",

    # Config
    "EngineConfig", "load_config", "get_default_config", "save_config", "find_config_file", "get_rule_severity"
]
