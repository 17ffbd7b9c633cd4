"""
Runner for the strict-equality engine.

The host analyzer parses files and infers operand types; this module takes
the resulting comparisons for one file, runs the enabled rules over them and
returns the findings that survive severity overrides, the per-file cap and
inline suppressions.
"""

import logging
import time
from typing import List, Optional

from .config import EngineConfig, get_default_config
from .registry import discover_rules, get_enabled_rules
from .suppressions import SuppressionParser
from .types import ComparisonInfo, Edit, Finding, Rule, RuleContext

logger = logging.getLogger(__name__)

DEFAULT_RULE_PACKAGES = ["stricteq_rules"]


def load_rules(config: EngineConfig, language: Optional[str] = None,
               packages: Optional[List[str]] = None) -> List[Rule]:
    """Discover rule packages and return the rules the config enables."""
    discover_rules(packages or DEFAULT_RULE_PACKAGES)
    return get_enabled_rules(config.enabled_rules, language)


def analyze_comparisons(file_path: str, text: str, comparisons: List[ComparisonInfo],
                        rules: Optional[List[Rule]] = None,
                        config: Optional[EngineConfig] = None,
                        language: str = "php") -> List[Finding]:
    """Analyze the comparisons of a single file and return findings.

    Args:
        file_path: Path of the analyzed file, copied into findings
        text: Source text of the file, used for suppression comments
        comparisons: Comparisons extracted and typed by the host
        rules: Rules to run; discovered from DEFAULT_RULE_PACKAGES when None
        config: Engine configuration; defaults when None
        language: Language of the file
    """
    if config is None:
        config = get_default_config()
    if rules is None:
        rules = load_rules(config, language)

    start_time = time.time()
    suppressions = SuppressionParser(text)
    findings: List[Finding] = []

    for rule in rules:
        rule_id = rule.meta.id
        context = RuleContext(
            file_path=file_path,
            text=text,
            comparisons=list(comparisons),
            config=dict(config.rule_configs.get(rule_id, {})),
            language=language,
        )

        try:
            rule_findings = list(rule.visit(context))
        except Exception as e:
            logger.warning("Rule '%s' failed on %s: %s", rule_id, file_path, e)
            continue

        # Suppressed findings do not count toward the per-file limit
        for finding in rule_findings:
            if suppressions.is_suppressed(finding.rule, finding.start_byte):
                continue
            # Apply severity overrides from config
            if finding.rule in config.rule_severities:
                finding = finding._replace(severity=config.rule_severities[finding.rule])
            findings.append(finding)

        # Apply per-file limit
        if len(findings) >= config.max_findings_per_file:
            findings = findings[:config.max_findings_per_file]
            break

    logger.debug("%s: %d findings from %d comparisons in %.1fms", file_path, len(findings),
                 len(comparisons), (time.time() - start_time) * 1000)
    return findings


def collect_edits(findings: List[Finding]) -> List[Edit]:
    """Gather autofix edits in source order, dropping any that overlap an earlier one."""
    edits = sorted(
        (edit for finding in findings for edit in (finding.autofix or [])),
        key=lambda edit: (edit.start_byte, edit.end_byte),
    )

    accepted: List[Edit] = []
    for edit in edits:
        if accepted and accepted[-1].overlaps(edit):
            logger.debug("Skipping overlapping edit at %d-%d", edit.start_byte, edit.end_byte)
            continue
        accepted.append(edit)
    return accepted
