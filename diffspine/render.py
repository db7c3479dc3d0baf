"""Render a DiffReport as markdown and JSON."""

from __future__ import annotations

import logging
from pathlib import Path

from diffspine.report import risk_headline
from diffspine.schemas import DiffReport

logger = logging.getLogger(__name__)

MARKDOWN_FILE = "diffspine-report.md"
JSON_FILE = "diffspine-report.json"

_SEVERITY_ICON = {
    "critical": "🔴",
    "warning": "🟡",
    "info": "🔵",
}


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def render_markdown(report: DiffReport) -> str:
    lines: list[str] = [
        "# diffspine Report",
        "",
        f"**Risk:** {risk_headline(report)}",
        f"**Risk Signals:** {' '.join(report.risk.reasons)}",
        "",
        f"**{report.structure.logic_summary}**",
        "",
        f"## Modified Files ({len(report.structure.modified_files)})",
        "",
    ]

    if report.structure.modified_files:
        lines.extend(f"- `{path}`" for path in report.structure.modified_files)
    else:
        lines.append("_No files detected in the diff._")
    lines.append("")
    lines.append(f"New exports: {report.structure.new_exports}")
    lines.append("")

    lines.append(f"## Heuristic Review ({report.review.score}/100)")
    lines.append("")
    lines.append(report.review.summary)
    lines.append("")

    if report.review.issues:
        lines.append("| Severity | Line | Issue | Suggestion |")
        lines.append("|---|---|---|---|")
        for issue in report.review.issues:
            icon = _SEVERITY_ICON.get(issue.severity.value, "")
            line_ref = str(issue.line) if issue.line is not None else "-"
            lines.append(
                f"| {icon} {issue.severity.value} | {line_ref} "
                f"| {_cell(issue.description)} | {_cell(issue.suggestion)} |"
            )
        lines.append("")

    lines.append("---")
    lines.append(f"_Generated at {report.generated_at.isoformat()}_")
    return "\n".join(lines) + "\n"


def render_json(report: DiffReport) -> str:
    return report.model_dump_json(indent=2)


def write_outputs(report: DiffReport, output_dir: str = "./out") -> tuple[Path, Path]:
    """Write markdown and JSON renderings into *output_dir*."""
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    md_path = out / MARKDOWN_FILE
    json_path = out / JSON_FILE
    md_path.write_text(render_markdown(report), encoding="utf-8")
    json_path.write_text(render_json(report), encoding="utf-8")

    logger.info("Wrote %s and %s", md_path, json_path)
    return md_path, json_path
