"""Merge-risk scoring for a unified diff.

The score is the clamped sum of four independent components:

- changed-line volume (up to 40)
- number of touched files (up to 25)
- missing test coverage relative to touched source files (up to 20)
- location: source and/or config files touched (2 to 15)

Each component can only rise or hold as the diff grows or its test coverage
shrinks, so the total is monotonic in every input taken on its own.
"""

from __future__ import annotations

import logging
import math

from diffspine.classifier import is_config_file, is_source_file, is_test_file
from diffspine.diff_metrics import parse_diff_metrics
from diffspine.schemas import DiffMetrics, RiskFactors, RiskLevel, RiskSummary

logger = logging.getLogger(__name__)

LINE_WEIGHT = 0.4
LINE_CAP = 40.0
FILE_WEIGHT = 4.0
FILE_CAP = 25.0
TEST_PENALTY_MAX = 20.0

LOCATION_SRC_AND_CONFIG = 15.0
LOCATION_SRC_ONLY = 12.0
LOCATION_CONFIG_ONLY = 5.0
LOCATION_OTHER = 2.0

# Upper bounds (inclusive) of each level.
LOW_MAX = 33
MEDIUM_MAX = 66

_REASONS: dict[RiskLevel, list[str]] = {
    RiskLevel.LOW: [
        "Smaller change footprint.",
        "Lower expected regression surface.",
    ],
    RiskLevel.MEDIUM: [
        "Moderate code churn.",
        "Requires focused regression checks.",
    ],
    RiskLevel.HIGH: [
        "High change volume or complexity.",
        "Elevated likelihood of cross-file regressions.",
    ],
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _location_component(src_files: int, config_files: int) -> float:
    if src_files > 0 and config_files > 0:
        return LOCATION_SRC_AND_CONFIG
    if src_files > 0:
        return LOCATION_SRC_ONLY
    if config_files > 0:
        return LOCATION_CONFIG_ONLY
    return LOCATION_OTHER


def factors_from_metrics(metrics: DiffMetrics) -> RiskFactors:
    """Compute every score component from a parsed diff."""
    files = metrics.touched_files
    src_files = sum(1 for p in files if is_source_file(p))
    test_files = sum(1 for p in files if is_test_file(p))
    config_files = sum(1 for p in files if is_config_file(p))

    if src_files == 0:
        test_penalty = 0.0
    else:
        test_penalty = TEST_PENALTY_MAX * (1 - min(1.0, test_files / src_files))

    return RiskFactors(
        src_files=src_files,
        test_files=test_files,
        config_files=config_files,
        touched_files=len(files),
        changed_lines=metrics.changed_line_count,
        line_component=min(LINE_CAP, metrics.changed_line_count * LINE_WEIGHT),
        file_component=min(FILE_CAP, len(files) * FILE_WEIGHT),
        test_penalty=test_penalty,
        location_component=_location_component(src_files, config_files),
    )


def risk_factors(diff_text: str) -> RiskFactors:
    """Score components for *diff_text*; all zero for an empty diff."""
    if not diff_text.strip():
        return RiskFactors()
    return factors_from_metrics(parse_diff_metrics(diff_text))


def score_from_factors(factors: RiskFactors) -> int:
    return _round_half_up(max(0.0, min(100.0, factors.total)))


def risk_score(diff_text: str) -> int:
    """Return the 0-100 merge-risk score of *diff_text*."""
    if not diff_text.strip():
        return 0
    factors = risk_factors(diff_text)
    score = score_from_factors(factors)
    logger.debug(
        "Risk score %d (lines=%.1f files=%.1f tests=%.1f location=%.1f)",
        score,
        factors.line_component,
        factors.file_component,
        factors.test_penalty,
        factors.location_component,
    )
    return score


def risk_level(score: int) -> RiskLevel:
    if score <= LOW_MAX:
        return RiskLevel.LOW
    if score <= MEDIUM_MAX:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def build_risk_summary(score: int) -> RiskSummary:
    """Bucket *score* into a level with that level's fixed explanation."""
    level = risk_level(score)
    return RiskSummary(score=score, level=level, reasons=list(_REASONS[level]))
