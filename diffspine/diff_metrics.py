"""Unified diff tokenizer: touched file paths and changed-line counts."""

from __future__ import annotations

import logging
import re

from diffspine.schemas import DiffMetrics

logger = logging.getLogger(__name__)

# "diff --git a/<before> b/<after>" -- only the after-path is recorded, so a
# rename shows up under its destination.
_GIT_HEADER = re.compile(r"^diff --git a/(.+?) b/(.+)$")
# "+++ b/<path>" target-file marker
_TARGET_MARKER = re.compile(r"^\+\+\+ b/(.+)$")

_LINE_SPLIT = re.compile(r"\r?\n")


def split_lines(diff_text: str) -> list[str]:
    """Split diff text on ``\\n`` or ``\\r\\n``."""
    return _LINE_SPLIT.split(diff_text)


def is_changed_line(line: str) -> bool:
    """True for ``+``/``-`` body lines, False for ``+++``/``---`` markers."""
    if line.startswith("+"):
        return not line.startswith("+++")
    if line.startswith("-"):
        return not line.startswith("---")
    return False


def parse_diff_metrics(diff_text: str) -> DiffMetrics:
    """Parse unified diff text into touched files and a changed-line count.

    Never raises: unrecognized lines (hunk headers, ``index``, ``rename from``,
    binary notices, ...) are skipped.
    """
    lines = split_lines(diff_text)
    touched: dict[str, None] = {}
    changed = 0

    for line in lines:
        header = _GIT_HEADER.match(line)
        if header:
            touched.setdefault(header.group(2), None)
            continue

        target = _TARGET_MARKER.match(line)
        if target:
            touched.setdefault(target.group(1), None)
            continue

        if is_changed_line(line):
            changed += 1

    logger.debug("Parsed diff: %d touched file(s), %d changed line(s)", len(touched), changed)

    return DiffMetrics(
        touched_files=list(touched),
        changed_line_count=changed,
        lines=lines,
    )
