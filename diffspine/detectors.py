"""Heuristic detectors over the added lines of a diff.

Every detector takes the added-line sequence (``+`` already stripped) and
returns a list of :class:`Issue`.  Line numbers are 1-based positions in that
sequence, not in the changed file.  The detectors share no state and may run in
any order.

The two state-machine detectors (unguarded awaits, oversized functions) count
keywords and braces instead of parsing, so braces inside string literals or
statements split over several lines throw them off.
"""

from __future__ import annotations

import re
from typing import Callable

from diffspine.schemas import Issue, Severity

Detector = Callable[[list[str]], list[Issue]]

OVERSIZED_FUNCTION_LINES = 100

_MARKER_RE = re.compile(r"\b(todo|fixme)\b", re.I)

# console.warn and console.error are deliberate output and are not flagged.
_DEBUG_RE = re.compile(r"\bconsole\.(log|debug|info|trace)\s*\(")

_WEAK_TYPE_RE = re.compile(
    r":\s*(any|unknown)\b"  # annotation
    r"|<\s*(any|unknown)\s*[,>\[]"  # generic parameter
    r"|\bas\s+(any|unknown)\b"  # type assertion
)

_SECRET_NAME = r"[\w$]*(api[_-]?key|apikey|token|password|secret)[\w$]*"
_TYPE_ANNOTATION = r"(\s*:\s*[\w<>\[\]|. ]+?)?"
_SECRET_RES = [
    # const apiKey = "..." / API_TOKEN = '...' / const apiKey: string = "..."
    re.compile(rf"\b{_SECRET_NAME}{_TYPE_ANNOTATION}\s*=\s*(['\"`])[^'\"`]+\3", re.I),
    # { password: "..." } / "secret": "..."
    re.compile(rf"(['\"]?){_SECRET_NAME}\1\s*:\s*(['\"`])[^'\"`]+\3", re.I),
]

_AWAIT_RE = re.compile(r"\bawait\b")
_TRY_RE = re.compile(r"\btry\b")
_CATCH_RE = re.compile(r"\bcatch\b")

_FUNCTION_OPEN_RE = re.compile(r"\bfunction\b|(=>|\))\s*\{")


def _snippet(line: str) -> str:
    return line.strip()[:80]


# ---------------------------------------------------------------------------
# Line-pattern detectors
# ---------------------------------------------------------------------------

def detect_marker_comments(lines: list[str]) -> list[Issue]:
    issues: list[Issue] = []
    for i, content in enumerate(lines, 1):
        match = _MARKER_RE.search(content)
        if match:
            issues.append(Issue(
                severity=Severity.INFO,
                description=f"Line {i}: {match.group(1).upper()} marker left in added code.",
                suggestion="Resolve the note or track it in an issue before merging.",
                line=i,
                detector="marker-comment",
            ))
    return issues


def detect_debug_statements(lines: list[str]) -> list[Issue]:
    issues: list[Issue] = []
    for i, content in enumerate(lines, 1):
        match = _DEBUG_RE.search(content)
        if match:
            issues.append(Issue(
                severity=Severity.WARNING,
                description=f"Line {i}: debug statement `console.{match.group(1)}` added.",
                suggestion="Remove the debug output or route it through the project logger.",
                line=i,
                detector="debug-statement",
            ))
    return issues


def detect_weak_typing(lines: list[str]) -> list[Issue]:
    issues: list[Issue] = []
    for i, content in enumerate(lines, 1):
        if _WEAK_TYPE_RE.search(content):
            issues.append(Issue(
                severity=Severity.WARNING,
                description=f"Line {i}: weak `any`/`unknown` typing in `{_snippet(content)}`.",
                suggestion="Replace with a concrete type or a narrowed union.",
                line=i,
                detector="weak-typing",
            ))
    return issues


def detect_secret_exposure(lines: list[str]) -> list[Issue]:
    """Flag credential-looking names assigned a string literal (one issue per line)."""
    issues: list[Issue] = []
    for i, content in enumerate(lines, 1):
        if any(p.search(content) for p in _SECRET_RES):
            issues.append(Issue(
                severity=Severity.CRITICAL,
                description=f"Line {i}: possible hard-coded secret or credential.",
                suggestion="Load the value from an environment variable or a secrets manager.",
                line=i,
                detector="secret-exposure",
            ))
    return issues


# ---------------------------------------------------------------------------
# State-machine detectors
# ---------------------------------------------------------------------------

def try_depths(lines: list[str]) -> list[int]:
    """Return the try-block depth recorded for each line.

    ``try`` opens a level, ``catch`` closes one (the line keeps the depth it
    had before closing), and on other lines each ``}`` closes a level while any
    is open.
    """
    depths: list[int] = []
    depth = 0
    for content in lines:
        if _TRY_RE.search(content):
            depth += 1
        if _CATCH_RE.search(content):
            depths.append(depth)
            depth = max(0, depth - 1)
            continue
        depths.append(depth)
        if depth > 0:
            depth = max(0, depth - content.count("}"))
    return depths


def detect_unguarded_awaits(lines: list[str]) -> list[Issue]:
    issues: list[Issue] = []
    depths = try_depths(lines)
    for i, (content, depth) in enumerate(zip(lines, depths), 1):
        if not _AWAIT_RE.search(content):
            continue
        if depth > 0:
            continue
        if _TRY_RE.search(content) or _CATCH_RE.search(content):
            continue
        issues.append(Issue(
            severity=Severity.WARNING,
            description=f"Line {i}: awaited call without surrounding try/catch.",
            suggestion="Wrap the await in try/catch or attach a rejection handler.",
            line=i,
            detector="unguarded-await",
        ))
    return issues


def function_spans(lines: list[str]) -> list[tuple[int, int]]:
    """Return ``(start_line, span)`` for every function closed within *lines*.

    Only one function is tracked at a time; a function opening while another is
    open is folded into the outer one.  A function still open when the input
    ends is not reported.
    """
    spans: list[tuple[int, int]] = []
    depth = 0
    start: int | None = None
    close_depth = 0

    for i, content in enumerate(lines, 1):
        opened = content.count("{")
        closed = content.count("}")

        if start is None and _FUNCTION_OPEN_RE.search(content):
            start = i
            close_depth = depth + opened

        depth += opened - closed

        if start is not None and depth < close_depth:
            spans.append((start, i - start + 1))
            start = None

    return spans


def detect_oversized_functions(lines: list[str]) -> list[Issue]:
    issues: list[Issue] = []
    for start, span in function_spans(lines):
        if span > OVERSIZED_FUNCTION_LINES:
            issues.append(Issue(
                severity=Severity.INFO,
                description=f"Function starting at line {start} spans {span} added lines.",
                suggestion="Split it into smaller, focused functions.",
                line=start,
                detector="oversized-function",
            ))
    return issues


DETECTORS: list[Detector] = [
    detect_marker_comments,
    detect_debug_statements,
    detect_weak_typing,
    detect_secret_exposure,
    detect_unguarded_awaits,
    detect_oversized_functions,
]
