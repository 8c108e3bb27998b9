"""Tests for finding aggregation and scoring."""

import pytest

from workflowlint.rules.base import Category, Finding, Severity
from workflowlint.scoring import aggregate, compute_score, grade_for, summarize


def finding(severity, rule_id="r", line=1):
    return Finding(
        rule_id=rule_id,
        severity=severity,
        category=Category.SECURITY,
        message_key=rule_id,
        line=line,
    )


class TestScore:
    def test_no_findings(self):
        assert compute_score([]) == 100

    @pytest.mark.parametrize(
        "severity,expected",
        [
            (Severity.CRITICAL, 75),
            (Severity.HIGH, 85),
            (Severity.MEDIUM, 90),
            (Severity.LOW, 95),
            (Severity.INFO, 100),
        ],
    )
    def test_deduction_per_severity(self, severity, expected):
        assert compute_score([finding(severity)]) == expected

    def test_repeated_findings_each_deduct(self):
        assert compute_score([finding(Severity.HIGH)] * 3) == 55

    def test_clamped_at_zero(self):
        assert compute_score([finding(Severity.CRITICAL)] * 5) == 0

    def test_non_increasing(self):
        findings = []
        previous = compute_score(findings)
        for severity in [Severity.LOW, Severity.INFO, Severity.HIGH, Severity.CRITICAL] * 3:
            findings.append(finding(severity))
            score = compute_score(findings)
            assert 0 <= score <= previous
            previous = score


class TestGrade:
    @pytest.mark.parametrize(
        "score,grade",
        [(100, "A"), (90, "A"), (89, "B"), (80, "B"), (79, "C"), (70, "C"), (69, "D"),
         (60, "D"), (59, "F"), (0, "F")],
    )
    def test_thresholds(self, score, grade):
        assert grade_for(score) == grade


class TestAggregate:
    def test_summary_partitions_findings(self):
        findings = [
            finding(Severity.HIGH),
            finding(Severity.CRITICAL),
            finding(Severity.HIGH),
            finding(Severity.INFO),
        ]
        summary = summarize(findings)
        assert summary == {"critical": 1, "high": 2, "medium": 0, "low": 0, "info": 1}
        assert sum(summary.values()) == len(findings)

    def test_insertion_order_kept(self):
        findings = [
            finding(Severity.LOW, "b", line=9),
            finding(Severity.CRITICAL, "a", line=1),
        ]
        result = aggregate(findings, duration=1.5)
        assert [f.rule_id for f in result.findings] == ["b", "a"]
        assert result.score == 70
        assert result.grade == "C"
        assert result.duration == 1.5

    def test_to_dict_shape(self):
        result = aggregate([finding(Severity.MEDIUM)])
        data = result.to_dict()
        assert set(data) == {"findings", "summary", "score", "grade", "duration"}
        assert data["findings"][0]["ruleId"] == "r"
        assert "snippet" not in data["findings"][0]
        assert "docs" not in data["findings"][0]
