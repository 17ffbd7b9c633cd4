"""Tests for running rules over the comparisons of one file."""

from helpers import apply_edits, comparison_in
from stricteq.config import get_default_config
from stricteq.kinds import ARRAY, INT, OBJECT, STRING, single
from stricteq.runner import analyze_comparisons, collect_edits, load_rules
from stricteq.types import Edit, Finding, Requires, RuleMeta
from stricteq_rules.strict_equality import StrictEqualityRule

SOURCE = """<?php
$same = $a == $b;
$kept = $c == $d; // stricteq: ignore[lang.strict_equality]
$mixed = $e != $f;
"""


def _comparisons():
    return [
        comparison_in(SOURCE, "$a == $b", single(INT), single(INT)),
        comparison_in(SOURCE, "$c == $d", single(STRING), single(STRING)),
        comparison_in(SOURCE, "$e != $f", single(OBJECT), single(ARRAY)),
    ]


class ExplodingRule:
    meta = RuleMeta(id="test.exploding", category="test", priority="P2", autofix_safety="suggest-only")
    requires = Requires()

    def visit(self, ctx):
        raise RuntimeError("boom")


class TestAnalyzeComparisons:

    def setup_method(self):
        self.rules = [StrictEqualityRule()]

    def test_findings_and_suppressions(self):
        findings = analyze_comparisons("test.php", SOURCE, _comparisons(), rules=self.rules)

        assert len(findings) == 2
        assert [f.fixable for f in findings] == [True, False]
        assert all(f.severity == "warn" for f in findings)

    def test_fixed_source(self):
        findings = analyze_comparisons("test.php", SOURCE, _comparisons(), rules=self.rules)
        fixed = apply_edits(SOURCE, collect_edits(findings))
        assert "$same = $a === $b;" in fixed
        assert "$kept = $c == $d;" in fixed
        assert "$mixed = $e != $f;" in fixed

    def test_severity_override(self):
        config = get_default_config()
        config.rule_severities["lang.strict_equality"] = "error"
        findings = analyze_comparisons("test.php", SOURCE, _comparisons(), rules=self.rules, config=config)
        assert {f.severity for f in findings} == {"error"}

    def test_rule_config_is_passed(self):
        config = get_default_config()
        config.rule_configs["lang.strict_equality"]["alter_code"] = False
        findings = analyze_comparisons("test.php", SOURCE, _comparisons(), rules=self.rules, config=config)
        assert not any(f.fixable for f in findings)

    def test_per_file_limit(self):
        config = get_default_config()
        config.max_findings_per_file = 1
        findings = analyze_comparisons("test.php", SOURCE, _comparisons(), rules=self.rules, config=config)
        assert len(findings) == 1

    def test_failing_rule_does_not_stop_others(self, caplog):
        findings = analyze_comparisons("test.php", SOURCE, _comparisons(),
                                       rules=[ExplodingRule(), StrictEqualityRule()])
        assert len(findings) == 2
        assert "test.exploding" in caplog.text

    def test_unknown_policy_still_reports(self):
        config = get_default_config()
        config.rule_configs["lang.strict_equality"]["policy"] = "strict"
        source = "<?php\n$same = $a == $b;\n"
        comparisons = [comparison_in(source, "$a == $b", single(INT), single(INT))]

        findings = analyze_comparisons("t.php", source, comparisons, rules=self.rules, config=config)
        assert len(findings) == 1
        assert findings[0].fixable

    def test_suppressed_findings_do_not_use_up_limit(self):
        source = (
            "<?php\n"
            "$x = $a == $b; // stricteq: ignore[lang.strict_equality]\n"
            "$y = $a == $b; // stricteq: ignore[lang.strict_equality]\n"
            "$z = $a == $b; // stricteq: ignore[lang.strict_equality]\n"
            "$w = $c == $d;\n"
        )
        comparisons = [
            comparison_in(source, "$a == $b", single(INT), single(INT), occurrence=i) for i in range(3)
        ] + [comparison_in(source, "$c == $d", single(INT), single(INT))]
        config = get_default_config()
        config.max_findings_per_file = 3

        findings = analyze_comparisons("t.php", source, comparisons, rules=self.rules, config=config)
        assert [f.start_byte for f in findings] == [source.index("$c == $d")]

    def test_discovers_rules_by_default(self):
        findings = analyze_comparisons("test.php", SOURCE, _comparisons())
        assert {f.rule for f in findings} == {"lang.strict_equality"}

    def test_load_rules_respects_enabled_patterns(self):
        config = get_default_config()
        config.enabled_rules = ["imports.*"]
        assert load_rules(config) == []


class TestCollectEdits:

    def _finding(self, *edits):
        return Finding(rule="r", message="m", file="f", start_byte=0, end_byte=1,
                       severity="warn", autofix=list(edits) or None)

    def test_sorted(self):
        edits = collect_edits([self._finding(Edit(10, 14, " === ")), self._finding(Edit(2, 6, " !== "))])
        assert [e.start_byte for e in edits] == [2, 10]

    def test_overlapping_dropped(self):
        edits = collect_edits([self._finding(Edit(2, 8, "x")), self._finding(Edit(5, 9, "y"))])
        assert edits == [Edit(2, 8, "x")]

    def test_no_autofix(self):
        assert collect_edits([self._finding()]) == []
