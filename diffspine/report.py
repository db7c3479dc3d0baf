"""Combine structure, risk and heuristic review into one report."""

from __future__ import annotations

import logging

from diffspine.diff_metrics import parse_diff_metrics
from diffspine.reviewer import review_diff
from diffspine.risk import build_risk_summary, factors_from_metrics, score_from_factors
from diffspine.schemas import DiffReport, Severity
from diffspine.structure import analyze_metrics

logger = logging.getLogger(__name__)


def build_report(diff_text: str, context: str | None = None) -> DiffReport:
    """Run both pipelines over *diff_text* and merge their results."""
    metrics = parse_diff_metrics(diff_text)
    structure = analyze_metrics(metrics)

    if diff_text.strip():
        score = score_from_factors(factors_from_metrics(metrics))
    else:
        score = 0
    risk = build_risk_summary(score)

    review = review_diff(diff_text, context=context)

    logger.info(
        "Report: %d file(s), risk %s (%d/100), %d issue(s)",
        len(structure.modified_files),
        risk.level.value,
        risk.score,
        len(review.issues),
    )

    return DiffReport(
        structure=structure,
        risk=risk,
        review=review,
        context_used=bool(context),
    )


def risk_headline(report: DiffReport) -> str:
    return f"{report.risk.level.value.upper()} ({report.risk.score}/100)"


def has_critical_issues(report: DiffReport) -> bool:
    return any(issue.severity == Severity.CRITICAL for issue in report.review.issues)
