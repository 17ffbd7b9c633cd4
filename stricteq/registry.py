"""
Registry for rules.

This module provides a central registry to register and discover rules in
the strict-equality engine.
"""

import fnmatch
import importlib
import logging
import pkgutil
from typing import Dict, List, Optional

from .types import Rule

logger = logging.getLogger(__name__)


class Registry:
    """Central registry for rules."""

    def __init__(self):
        self._rules: List[Rule] = []
        self._rule_index: Dict[str, Rule] = {}  # id -> rule

    def register_rule(self, rule: Rule) -> None:
        """Register a rule in the registry."""
        if rule.meta.id in self._rule_index:
            # Skip duplicate registration silently to avoid import noise
            return

        self._rules.append(rule)
        self._rule_index[rule.meta.id] = rule

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        """Get rule by id."""
        return self._rule_index.get(rule_id)

    def get_all_rules(self) -> List[Rule]:
        """Get all registered rules."""
        return self._rules.copy()

    def get_rule_ids(self) -> List[str]:
        """Get all registered rule IDs."""
        return list(self._rule_index.keys())

    def get_rules_for_language(self, language: str) -> List[Rule]:
        """Get all rules that support a specific language."""
        return [rule for rule in self._rules if language in rule.meta.langs]

    def get_enabled_rules(self, enabled_patterns: List[str], language: Optional[str] = None) -> List[Rule]:
        """Get rules whose id matches one of the patterns, optionally for one language."""
        rules = self.get_rules_for_language(language) if language else self.get_all_rules()

        enabled_rules = []
        for rule in rules:
            if any(fnmatch.fnmatch(rule.meta.id, pattern) for pattern in enabled_patterns):
                enabled_rules.append(rule)
        return enabled_rules

    def discover_rules(self, entry_packages: List[str]) -> int:
        """
        Auto-discover and register rules from packages.

        Args:
            entry_packages: List of package names to discover from

        Returns:
            Number of rules discovered and registered
        """
        initial_count = len(self._rules)

        for package_name in entry_packages:
            try:
                package = importlib.import_module(package_name)
            except ImportError as e:
                logger.warning("Could not import rule package %s: %s", package_name, e)
                continue

            self._extract_rules_from_module(package, package_name)
            for _, modname, _ in pkgutil.walk_packages(getattr(package, '__path__', []),
                                                       package.__name__ + "."):
                try:
                    module = importlib.import_module(modname)
                except Exception as e:
                    logger.warning("Failed to import %s: %s", modname, e)
                    continue
                self._extract_rules_from_module(module, modname)

        discovered = len(self._rules) - initial_count
        logger.debug("Discovered %d rules from %s", discovered, ", ".join(entry_packages))
        return discovered

    def _extract_rules_from_module(self, module, module_name: str) -> None:
        """Register every entry of a module-level RULES list."""
        rules = getattr(module, 'RULES', None)
        if not isinstance(rules, list):
            return

        for rule in rules:
            # If it's a class, instantiate it
            if isinstance(rule, type):
                rule = rule()
            if not (hasattr(rule, 'meta') and hasattr(rule, 'visit') and hasattr(rule, 'requires')):
                logger.warning("Ignoring non-rule entry %r in %s.RULES", rule, module_name)
                continue
            self.register_rule(rule)

    def clear(self) -> None:
        """Clear all registered rules (mainly for testing)."""
        self._rules.clear()
        self._rule_index.clear()


# Global registry instance
_global_registry = Registry()


# Convenience functions that operate on the global registry
def register_rule(rule: Rule) -> None:
    """Register a rule in the global registry."""
    _global_registry.register_rule(rule)


def get_rule(rule_id: str) -> Optional[Rule]:
    """Get rule by id from the global registry."""
    return _global_registry.get_rule(rule_id)


def get_all_rules() -> List[Rule]:
    """Get all registered rules from the global registry."""
    return _global_registry.get_all_rules()


def get_rule_ids() -> List[str]:
    """Get all registered rule IDs."""
    return _global_registry.get_rule_ids()


def get_enabled_rules(enabled_patterns: List[str], language: Optional[str] = None) -> List[Rule]:
    """Get rules enabled by patterns from the global registry."""
    return _global_registry.get_enabled_rules(enabled_patterns, language)


def discover_rules(entry_packages: List[str]) -> int:
    """Auto-discover and register rules from packages."""
    return _global_registry.discover_rules(entry_packages)


def clear() -> None:
    """Clear the global registry (mainly for testing)."""
    _global_registry.clear()
