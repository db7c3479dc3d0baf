"""Structural analysis: modified files and the net-new export surface."""

from __future__ import annotations

import re

from diffspine.diff_metrics import parse_diff_metrics
from diffspine.schemas import DiffMetrics, StructuralAnalysis

EXPORT_TOKEN = "export"

# An added line declaring public API: "+export ...", "+   export ...".
_ADDED_EXPORT = re.compile(rf"^\+\s*{EXPORT_TOKEN}\b")

SUMMARY_TEMPLATE = (
    "Industrial Minimalism | "
    "startup-gloss: rejected | "
    "spine-logic: modified-files={files}; new-exports={exports} | "
    "kernel-invariants: explicit-export-delta; diff-header-bounded-file-set; "
    "additive-export-count-only"
)


def count_new_exports(lines: list[str]) -> int:
    """Count added (never removed) lines that open with the export token."""
    count = 0
    for raw in lines:
        line = raw.strip()
        if line.startswith("+++"):
            continue
        if _ADDED_EXPORT.match(line):
            count += 1
    return count


def summarize_structure(modified_files: int, new_exports: int) -> str:
    return SUMMARY_TEMPLATE.format(files=modified_files, exports=new_exports)


def analyze_metrics(metrics: DiffMetrics) -> StructuralAnalysis:
    """Build the structural result from an already-parsed diff."""
    modified_files = list(metrics.touched_files)
    new_exports = count_new_exports(metrics.lines)
    return StructuralAnalysis(
        modified_files=modified_files,
        new_exports=new_exports,
        logic_summary=summarize_structure(len(modified_files), new_exports),
    )


def analyze_diff(diff_text: str) -> StructuralAnalysis:
    """Parse *diff_text* and return its structural summary."""
    return analyze_metrics(parse_diff_metrics(diff_text))
