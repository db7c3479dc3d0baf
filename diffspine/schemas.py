"""Data models for diffspine."""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Diff structure
# ---------------------------------------------------------------------------

class DiffMetrics(BaseModel):
    touched_files: list[str] = Field(default_factory=list)  # unique, insertion order
    changed_line_count: int = 0
    lines: list[str] = Field(default_factory=list)


class StructuralAnalysis(BaseModel):
    modified_files: list[str] = Field(default_factory=list)
    new_exports: int = 0
    logic_summary: str = ""


# ---------------------------------------------------------------------------
# Risk
# ---------------------------------------------------------------------------

class RiskLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskFactors(BaseModel):
    src_files: int = 0
    test_files: int = 0
    config_files: int = 0
    touched_files: int = 0
    changed_lines: int = 0
    line_component: float = 0.0
    file_component: float = 0.0
    test_penalty: float = 0.0
    location_component: float = 0.0

    @property
    def total(self) -> float:
        return self.line_component + self.file_component + self.test_penalty + self.location_component


class RiskSummary(BaseModel):
    score: int = 0
    level: RiskLevel = RiskLevel.LOW
    reasons: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Heuristic review
# ---------------------------------------------------------------------------

class Severity(str, enum.Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class Issue(BaseModel):
    severity: Severity
    description: str
    suggestion: str = ""
    line: int | None = None  # 1-based index into the added lines
    detector: str = ""


class ReviewResult(BaseModel):
    summary: str = ""
    issues: list[Issue] = Field(default_factory=list)
    score: int = 100


# ---------------------------------------------------------------------------
# Input triage
# ---------------------------------------------------------------------------

class TriageResult(BaseModel):
    safe: bool = True
    reason: str = ""


# ---------------------------------------------------------------------------
# Combined report
# ---------------------------------------------------------------------------

class DiffReport(BaseModel):
    structure: StructuralAnalysis = Field(default_factory=StructuralAnalysis)
    risk: RiskSummary = Field(default_factory=RiskSummary)
    review: ReviewResult = Field(default_factory=ReviewResult)
    context_used: bool = False
    generated_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
