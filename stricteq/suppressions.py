"""
Suppression system for strict-equality rules.

This module parses suppression comments in analyzed source code so findings
can be silenced line by line, e.g.:

    if ($a == $b) { // stricteq: ignore[lang.strict_equality]
"""

import fnmatch
import re
from typing import Dict, List, Set, Tuple

_IGNORE_PATTERN = re.compile(r'(?://|#|/\*)\s*stricteq:\s*ignore\s*\[\s*([^\]]+)\s*\]', re.IGNORECASE)
_MALFORMED_PATTERN = re.compile(r'(?://|#|/\*)\s*stricteq:\s*ignore\s*\[[^\]\n]*\]?', re.IGNORECASE)


class SuppressionParser:
    """Parser for stricteq suppression comments."""

    def __init__(self, text: str):
        self.text = text
        self.lines = text.split('\n')
        self.line_suppressions: Dict[int, Set[str]] = self._parse_suppressions()

    def _parse_suppressions(self) -> Dict[int, Set[str]]:
        """Map 1-based line numbers to the rule patterns suppressed there."""
        suppressions = {}
        for line_num, line in enumerate(self.lines, 1):
            patterns = self._extract_suppression_patterns(line)
            if patterns:
                suppressions[line_num] = patterns
        return suppressions

    def _extract_suppression_patterns(self, line: str) -> Set[str]:
        patterns = set()
        for match in _IGNORE_PATTERN.finditer(line):
            for pattern in match.group(1).split(','):
                pattern = pattern.strip()
                if pattern:
                    patterns.add(pattern)
        return patterns

    def is_suppressed(self, rule_id: str, start_byte: int) -> bool:
        """Check if a rule finding should be suppressed."""
        line_num = self._byte_to_line(start_byte)
        return any(
            fnmatch.fnmatch(rule_id, pattern)
            for pattern in self.line_suppressions.get(line_num, ())
        )

    def _byte_to_line(self, byte_offset: int) -> int:
        """Convert byte offset to 1-based line number."""
        if byte_offset < 0:
            return 1
        encoded = self.text.encode('utf-8')
        if byte_offset >= len(encoded):
            return len(self.lines)
        return encoded[:byte_offset].count(b'\n') + 1

    def get_suppression_stats(self) -> Dict[str, int]:
        """Get statistics about suppressions in the file."""
        all_patterns = set()
        for patterns in self.line_suppressions.values():
            all_patterns.update(patterns)

        return {
            "suppressed_lines": len(self.line_suppressions),
            "unique_patterns": len(all_patterns),
            "total_suppressions": sum(len(patterns) for patterns in self.line_suppressions.values())
        }


def filter_suppressed_findings(findings: List, text: str) -> List:
    """Filter out suppressed findings from a list."""
    if not findings:
        return findings

    parser = SuppressionParser(text)
    return [
        finding for finding in findings
        if not parser.is_suppressed(getattr(finding, 'rule', ''), getattr(finding, 'start_byte', 0))
    ]


def validate_suppression_patterns(text: str) -> List[Tuple[int, str]]:
    """
    Validate suppression patterns in text and return any errors.

    Returns:
        List of (line_number, error_message) tuples
    """
    errors = []

    for line_num, line in enumerate(text.split('\n'), 1):
        for match in _MALFORMED_PATTERN.finditer(line):
            comment = match.group(0)
            if not comment.endswith(']'):
                errors.append((line_num, "Unclosed suppression bracket"))
            elif re.search(r'\[\s*\]', comment):
                errors.append((line_num, "Empty suppression pattern"))

    return errors
