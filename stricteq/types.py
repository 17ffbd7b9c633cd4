"""
Core types for the strict-equality engine.

This module provides the shared dataclasses exchanged between the host
analyzer, the engine and the rules.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Literal, Optional, Protocol, Tuple

from .kinds import TypeDescriptor


# Type aliases for clarity
Severity = Literal["info", "warn", "error"]
Priority = Literal["P0", "P1", "P2"]
NodeRange = Tuple[int, int]  # (start_byte, end_byte) 0-based, end exclusive


@dataclass(frozen=True)
class Edit:
    """A suggested edit to fix an issue."""
    start_byte: int
    end_byte: int
    replacement: str

    def overlaps(self, other: "Edit") -> bool:
        return self.start_byte < other.end_byte and other.start_byte < self.end_byte


@dataclass(frozen=True)
class Finding:
    """A finding represents an issue detected by a rule."""
    rule: str
    message: str
    file: str
    start_byte: int
    end_byte: int
    severity: Severity
    autofix: Optional[List[Edit]] = None
    meta: Optional[Dict[str, Any]] = None

    def _replace(self, **kwargs):
        """Provide NamedTuple-like _replace method for compatibility."""
        return replace(self, **kwargs)

    @property
    def fixable(self) -> bool:
        return bool(self.autofix)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "rule_id": self.rule,
            "message": self.message,
            "file_path": self.file,
            "start_byte": self.start_byte,
            "end_byte": self.end_byte,
            "severity": self.severity,
            "fixable": self.fixable,
        }
        if self.autofix:
            data["autofix"] = [
                {"start_byte": e.start_byte, "end_byte": e.end_byte, "replacement": e.replacement}
                for e in self.autofix
            ]
        if self.meta:
            data["meta"] = dict(self.meta)
        return data


@dataclass(frozen=True)
class RuleMeta:
    """Metadata about a rule.

    Attributes:
        id: Unique rule identifier (e.g., "lang.strict_equality")
        category: Rule category for grouping
        priority: P0/P1/P2 priority level
        autofix_safety: Whether autofix is safe/caution/suggest-only
        description: Human-readable description
        langs: List of supported languages
    """
    id: str
    category: str
    priority: Priority
    autofix_safety: Literal["safe", "caution", "suggest-only"]
    description: str = ""
    langs: List[str] = None

    def __post_init__(self):
        if self.langs is None:
            object.__setattr__(self, 'langs', [])


@dataclass(frozen=True)
class Requires:
    """Represents what a rule needs from the host to run."""
    inferred_types: bool = True


@dataclass(frozen=True)
class ComparisonInfo:
    """One binary comparison as handed over by the host analyzer.

    Attributes:
        operator: Operator token, e.g. "==", "!=", "<>"
        left_range: Byte range of the left operand
        right_range: Byte range of the right operand
        range: Byte range of the whole expression
        left_type: Inferred type of the left operand, None when unknown
        right_type: Inferred type of the right operand, None when unknown
        is_virtual: The node was synthesized by the host and has no source text
    """
    operator: str
    left_range: NodeRange
    right_range: NodeRange
    range: NodeRange
    left_type: Optional[TypeDescriptor] = None
    right_type: Optional[TypeDescriptor] = None
    is_virtual: bool = False

    @property
    def operator_range(self) -> NodeRange:
        """Span between the operands, surrounding whitespace included."""
        return (self.left_range[1], self.right_range[0])


@dataclass
class RuleContext:
    """Context passed to rules during execution."""
    file_path: str
    text: str
    comparisons: List[ComparisonInfo] = field(default_factory=list)
    config: Dict[str, Any] = field(default_factory=dict)
    language: str = "php"


class Rule(Protocol):
    """Protocol for all rules in the engine.

    Rules analyze code and return findings. They should be stateless and thread-safe.
    """
    meta: RuleMeta
    requires: Requires

    def visit(self, ctx: RuleContext) -> Iterable[Finding]:
        """Visit a file and return findings.

        Args:
            ctx: Rule context containing file path, text, comparisons and config

        Returns:
            Iterable of findings for this file
        """
        ...
