"""CLI entrypoint for diffspine."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from diffspine.config import Config, load_config
from diffspine.schemas import DiffReport, RiskLevel

app = typer.Typer(
    name="diffspine",
    help="Structural summary, merge-risk score and heuristic review for unified diffs.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

_LEVEL_ORDER = [RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH]
_LEVEL_STYLE = {RiskLevel.LOW: "green", RiskLevel.MEDIUM: "yellow", RiskLevel.HIGH: "red"}


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=True)],
    )


# ---------------------------------------------------------------------------
# analyze
# ---------------------------------------------------------------------------

@app.command()
def analyze(
    diff: str = typer.Option("-", "--diff", help="Path to a diff/patch file ('-' for stdin)"),
    config_file: str = typer.Option(None, "--config", help="Path to config YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Show modified files and the count of newly added exports."""
    _setup_logging(verbose)
    cfg = load_config(config_path=config_file)
    diff_text = _read_diff(diff, cfg)

    from diffspine.structure import analyze_diff

    result = analyze_diff(diff_text)

    table = Table(title=f"Modified Files ({len(result.modified_files)})")
    table.add_column("Path", style="cyan")
    for path in result.modified_files:
        table.add_row(escape(path))
    console.print(table)
    console.print(f"New exports: [bold]{result.new_exports}[/bold]")
    console.print(result.logic_summary)


# ---------------------------------------------------------------------------
# risk
# ---------------------------------------------------------------------------

@app.command()
def risk(
    diff: str = typer.Option("-", "--diff", help="Path to a diff/patch file ('-' for stdin)"),
    config_file: str = typer.Option(None, "--config", help="Path to config YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Score how risky the change is to merge (0-100)."""
    _setup_logging(verbose)
    cfg = load_config(config_path=config_file)
    diff_text = _read_diff(diff, cfg)

    from diffspine.risk import build_risk_summary, risk_factors, score_from_factors

    factors = risk_factors(diff_text)
    summary = build_risk_summary(score_from_factors(factors))

    style = _LEVEL_STYLE[summary.level]
    console.print(f"[bold {style}]Risk: {summary.level.value.upper()} ({summary.score}/100)[/bold {style}]")
    for reason in summary.reasons:
        console.print(f"  - {reason}")

    table = Table(title="Score Components")
    table.add_column("Component", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Changed lines", f"{factors.line_component:.1f}")
    table.add_row("Files touched", f"{factors.file_component:.1f}")
    table.add_row("Missing tests", f"{factors.test_penalty:.1f}")
    table.add_row("Location", f"{factors.location_component:.1f}")
    console.print(table)
    console.print(
        f"  src={factors.src_files} test={factors.test_files} config={factors.config_files} "
        f"files={factors.touched_files} lines={factors.changed_lines}"
    )


# ---------------------------------------------------------------------------
# review
# ---------------------------------------------------------------------------

@app.command()
def review(
    diff: str = typer.Option("-", "--diff", help="Path to a diff/patch file ('-' for stdin)"),
    context: Optional[str] = typer.Option(None, "--context", help="Free-text context for the review"),
    output_dir: Optional[str] = typer.Option(None, "--output", "-o", help="Write markdown and JSON reports here"),
    write: bool = typer.Option(False, "--write", "-w", help="Write reports to the configured output_dir"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 on high risk or critical issues"),
    config_file: str = typer.Option(None, "--config", help="Path to config YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run the full report: structure, risk and heuristic review."""
    _setup_logging(verbose)
    cfg = load_config(config_path=config_file, overrides={"output_dir": output_dir})
    diff_text = _read_diff(diff, cfg)

    from diffspine.render import render_json, write_outputs
    from diffspine.report import build_report, has_critical_issues
    from diffspine.shield import InputShield

    if context:
        triage = InputShield(cfg.shield).triage(context)
        if not triage.safe:
            logger.warning("Ignoring review context: %s", triage.reason)
            err_console.print(f"[yellow]Shield Alert: {triage.reason} Context ignored.[/yellow]")
            context = None

    report = build_report(diff_text, context=context)

    if as_json:
        console.print_json(render_json(report))
    else:
        _print_report(report)

    if write or output_dir:
        md_path, json_path = write_outputs(report, output_dir=cfg.output_dir)
        err_console.print(f"[green]Report written to {md_path}[/green]")
        err_console.print(f"[green]JSON written to {json_path}[/green]")

    if strict:
        if _level_at_least(report.risk.level, cfg.fail_on):
            err_console.print(f"[red]Risk level {report.risk.level.value} meets fail-on threshold {cfg.fail_on.value}[/red]")
            raise typer.Exit(1)
        if has_critical_issues(report):
            err_console.print("[red]Critical issues found[/red]")
            raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _read_diff(diff: str, cfg: Config) -> str:
    """Read diff text from a path or stdin, enforcing the size guard."""
    if diff == "-":
        diff_text = sys.stdin.read()
    else:
        diff_path = Path(diff)
        if not diff_path.exists():
            err_console.print(f"[red]Diff file not found: {diff}[/red]")
            raise typer.Exit(1)
        diff_text = diff_path.read_text(encoding="utf-8")

    if len(diff_text) > cfg.max_diff_chars:
        err_console.print(
            f"[red]Diff is {len(diff_text)} chars; limit is {cfg.max_diff_chars}[/red]"
        )
        raise typer.Exit(1)

    return diff_text


def _level_at_least(level: RiskLevel, threshold: RiskLevel) -> bool:
    return _LEVEL_ORDER.index(level) >= _LEVEL_ORDER.index(threshold)


def _print_report(report: DiffReport) -> None:
    style = _LEVEL_STYLE[report.risk.level]
    console.print(
        f"[bold {style}]Risk: {report.risk.level.value.upper()} ({report.risk.score}/100)[/bold {style}]"
    )
    console.print(f"Risk Signals: {' '.join(report.risk.reasons)}")
    console.print(report.structure.logic_summary)
    console.print("")

    if report.review.issues:
        table = Table(title=f"Issues ({len(report.review.issues)})")
        table.add_column("Severity", style="cyan")
        table.add_column("Line", justify="right")
        table.add_column("Issue")
        table.add_column("Suggestion", style="green")
        for issue in report.review.issues:
            table.add_row(
                issue.severity.value,
                str(issue.line) if issue.line is not None else "-",
                escape(issue.description),
                escape(issue.suggestion),
            )
        console.print(table)

    console.print(f"[bold]{report.review.summary}[/bold]")


if __name__ == "__main__":
    app()
