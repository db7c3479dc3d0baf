"""Path classification used by the risk scorer.

The predicates are independent: a path such as ``src/logic.test.ts`` is both a
source file and a test file, and each category is counted on its own.
"""

from __future__ import annotations

import re

SOURCE = "source"
TEST = "test"
CONFIG = "config"

_SOURCE_RE = re.compile(r"(^|/)src/")

_TEST_RE = re.compile(
    r"([._](test|spec)\.[A-Za-z0-9]+$)"
    r"|((^|/)test_[^/]+$)"
    r"|((^|/)(__tests__|tests?|spec)/)",
    re.I,
)

_CONFIG_NAME_RE = re.compile(
    r"(^|/)("
    r"package\.json|package-lock\.json|yarn\.lock|pnpm-lock\.yaml|"
    r"tsconfig[^/]*\.json|wrangler\.toml|pyproject\.toml|setup\.cfg|"
    r"Dockerfile|Makefile|[^/]+\.config\.(js|ts|mjs|cjs)"
    r")$"
)
_CONFIG_DIR_RE = re.compile(r"(^|/)\.github/workflows/")
_CONFIG_EXT_RE = re.compile(r"\.(ya?ml|toml|ini|cfg|conf|env)$", re.I)


def is_source_file(path: str) -> bool:
    return bool(_SOURCE_RE.search(path))


def is_test_file(path: str) -> bool:
    return bool(_TEST_RE.search(path))


def is_config_file(path: str) -> bool:
    return bool(
        _CONFIG_NAME_RE.search(path)
        or _CONFIG_DIR_RE.search(path)
        or _CONFIG_EXT_RE.search(path)
    )


def classify_path(path: str) -> set[str]:
    """Return every category label *path* satisfies (possibly none)."""
    labels: set[str] = set()
    if is_source_file(path):
        labels.add(SOURCE)
    if is_test_file(path):
        labels.add(TEST)
    if is_config_file(path):
        labels.add(CONFIG)
    return labels
