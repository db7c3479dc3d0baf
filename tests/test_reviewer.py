"""Tests for the heuristic review orchestrator."""

from __future__ import annotations

from diffspine.detectors import detect_marker_comments
from diffspine.reviewer import extract_added_lines, review_diff, score_issues, summarize_review
from diffspine.schemas import Issue, Severity


def _diff(path: str, lines: list[str]) -> str:
    return f"diff --git a/{path} b/{path}\n--- a/{path}\n+++ b/{path}\n@@ -1 +1 @@\n" + "\n".join(lines)


def _issue(severity: Severity) -> Issue:
    return Issue(severity=severity, description="d", suggestion="s")


class TestExtractAddedLines:
    def test_strips_plus_and_skips_markers(self) -> None:
        diff = _diff("src/a.ts", ["+const a = 1;", "-const b = 2;", " const c = 3;", "+  return a;"])
        assert extract_added_lines(diff) == ["const a = 1;", "  return a;"]

    def test_empty(self) -> None:
        assert extract_added_lines("") == []

    def test_bare_plus_is_blank_line(self) -> None:
        assert extract_added_lines("+\n+x") == ["", "x"]


class TestScoring:
    def test_penalties(self) -> None:
        assert score_issues([]) == 100
        assert score_issues([_issue(Severity.CRITICAL)]) == 75
        assert score_issues([_issue(Severity.WARNING)]) == 90
        assert score_issues([_issue(Severity.INFO)]) == 97

    def test_floor_at_zero(self) -> None:
        assert score_issues([_issue(Severity.CRITICAL)] * 5) == 0


class TestSummary:
    def test_no_issues(self) -> None:
        assert summarize_review([], 100) == "No issues found. Quality score: 100/100."

    def test_no_issues_with_context(self) -> None:
        summary = summarize_review([], 100, context="hotfix for login")
        assert summary == "No issues found. Quality score: 100/100. Additional context was considered."

    def test_breakdown(self) -> None:
        issues = [_issue(Severity.CRITICAL), _issue(Severity.WARNING), _issue(Severity.WARNING)]
        assert summarize_review(issues, 55) == (
            "Found 3 issue(s): 1 critical, 2 warning, 0 info. Quality score: 55/100."
        )

    def test_empty_context_not_noted(self) -> None:
        assert "context" not in summarize_review([], 100, context="")


class TestReviewDiff:
    def test_clean_diff(self) -> None:
        result = review_diff(_diff("src/a.ts", ["+const a = 1;"]))
        assert result.issues == []
        assert result.score == 100
        assert result.summary == "No issues found. Quality score: 100/100."

    def test_empty_diff(self) -> None:
        result = review_diff("")
        assert result.issues == []
        assert result.score == 100

    def test_secret_costs_exactly_25(self) -> None:
        base = review_diff(_diff("src/a.ts", ["+const a = 1;"]))
        with_secret = review_diff(_diff("src/a.ts", ["+const a = 1;", '+const token = "abc123";']))
        critical = [i for i in with_secret.issues if i.severity == Severity.CRITICAL]
        assert len(critical) == 1
        assert base.score - with_secret.score == 25

    def test_mixed_issues(self) -> None:
        diff = _diff("src/a.ts", [
            "+// TODO: remove before release",
            '+console.log("debug");',
            '+const token = "abc123";',
        ])
        result = review_diff(diff)
        assert [i.severity for i in result.issues] == [Severity.INFO, Severity.WARNING, Severity.CRITICAL]
        assert result.score == 62
        assert result.summary == "Found 3 issue(s): 1 critical, 1 warning, 1 info. Quality score: 62/100."

    def test_context_noted(self) -> None:
        diff = _diff("src/a.ts", ["+console.log(x);"])
        result = review_diff(diff, context="Part of the logging migration")
        assert result.summary.endswith("Additional context was considered.")

    def test_removed_lines_ignored(self) -> None:
        diff = _diff("src/a.ts", ['-console.log("old");', '-const token = "abc";'])
        assert review_diff(diff).issues == []

    def test_line_numbers_index_added_lines(self) -> None:
        diff = _diff("src/a.ts", ["-removed", " context", "+const a = 1;", "+// FIXME"])
        issues = review_diff(diff).issues
        assert len(issues) == 1
        assert issues[0].line == 2

    def test_oversized_function(self) -> None:
        body = ["+function big() {"] + ["+  const x = 1;"] * 148 + ["+}"]
        result = review_diff(_diff("src/big.ts", body))
        assert len(result.issues) == 1
        assert result.issues[0].detector == "oversized-function"
        assert result.score == 97

    def test_custom_detectors(self) -> None:
        diff = _diff("src/a.ts", ["+// TODO", "+console.log(1);"])
        result = review_diff(diff, detectors=[detect_marker_comments])
        assert len(result.issues) == 1
        assert result.issues[0].severity == Severity.INFO

    def test_repeatable(self) -> None:
        diff = _diff("src/a.ts", ["+const a: any = await load();"])
        assert review_diff(diff) == review_diff(diff)
