"""Heuristic review of the lines a diff adds.

Runs every registered detector over the added lines, then folds the issues
into a 0-100 quality score and a one-sentence summary.
"""

from __future__ import annotations

import logging
from collections import Counter

from diffspine.detectors import DETECTORS, Detector
from diffspine.diff_metrics import split_lines
from diffspine.schemas import Issue, ReviewResult, Severity

logger = logging.getLogger(__name__)

SEVERITY_PENALTY: dict[Severity, int] = {
    Severity.CRITICAL: 25,
    Severity.WARNING: 10,
    Severity.INFO: 3,
}

CONTEXT_NOTE = " Additional context was considered."


def extract_added_lines(diff_text: str) -> list[str]:
    """Return added lines with their ``+`` stripped, skipping ``+++`` markers."""
    return [
        line[1:]
        for line in split_lines(diff_text)
        if line.startswith("+") and not line.startswith("+++")
    ]


def score_issues(issues: list[Issue]) -> int:
    penalty = sum(SEVERITY_PENALTY[issue.severity] for issue in issues)
    return max(0, 100 - penalty)


def summarize_review(issues: list[Issue], score: int, context: str | None = None) -> str:
    note = CONTEXT_NOTE if context else ""
    if not issues:
        return f"No issues found. Quality score: {score}/100.{note}"

    counts = Counter(issue.severity for issue in issues)
    return (
        f"Found {len(issues)} issue(s): "
        f"{counts[Severity.CRITICAL]} critical, "
        f"{counts[Severity.WARNING]} warning, "
        f"{counts[Severity.INFO]} info. "
        f"Quality score: {score}/100.{note}"
    )


def review_diff(
    diff: str,
    context: str | None = None,
    detectors: list[Detector] | None = None,
) -> ReviewResult:
    """Review the added lines of *diff*.

    Args:
        diff: Unified diff text.
        context: Optional free-text context from the caller.  It is only
            acknowledged in the summary; detectors never read it.
        detectors: Detector functions to run, defaults to :data:`DETECTORS`.

    Returns:
        The issues in detector order, the quality score and a summary.
    """
    added = extract_added_lines(diff)

    issues: list[Issue] = []
    for detector in detectors if detectors is not None else DETECTORS:
        issues.extend(detector(added))

    score = score_issues(issues)
    logger.debug("Reviewed %d added line(s): %d issue(s), score %d", len(added), len(issues), score)

    return ReviewResult(
        summary=summarize_review(issues, score, context),
        issues=issues,
        score=score,
    )
