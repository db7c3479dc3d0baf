"""diffspine: structural summary, merge-risk score and heuristic review for unified diffs."""

from diffspine.report import build_report
from diffspine.reviewer import review_diff
from diffspine.risk import build_risk_summary, risk_score
from diffspine.structure import analyze_diff

__version__ = "0.1.0"

__all__ = [
    "analyze_diff",
    "build_report",
    "build_risk_summary",
    "review_diff",
    "risk_score",
]
