"""Shared helpers for building host-side comparison records in tests."""

import re

from stricteq.types import ComparisonInfo

_OPERATOR = re.compile(r'\s*(==|!=|<>)\s*')


def comparison_in(source: str, expression: str, left_type=None, right_type=None,
                  occurrence: int = 0, is_virtual: bool = False) -> ComparisonInfo:
    """Locate `expression` (e.g. "$a == $b") in ASCII `source` and describe it like a host would."""
    start = -1
    for _ in range(occurrence + 1):
        start = source.index(expression, start + 1)
    end = start + len(expression)

    match = _OPERATOR.search(expression)
    return ComparisonInfo(
        operator=match.group(1),
        left_range=(start, start + match.start()),
        right_range=(start + match.end(), end),
        range=(start, end),
        left_type=left_type,
        right_type=right_type,
        is_virtual=is_virtual,
    )


def apply_edits(source: str, edits) -> str:
    """Apply non-overlapping edits, last first so earlier offsets stay valid."""
    for edit in sorted(edits, key=lambda e: e.start_byte, reverse=True):
        source = source[:edit.start_byte] + edit.replacement + source[edit.end_byte:]
    return source
