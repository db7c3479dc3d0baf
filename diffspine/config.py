"""Configuration loading from YAML, env vars, and CLI defaults."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from diffspine.schemas import RiskLevel
from diffspine.shield import ShieldConfig

DEFAULT_CONFIG_PATHS = [
    Path("diffspine.yaml"),
    Path.home() / ".diffspine" / "config.yaml",
]


class Config(BaseModel):
    max_diff_chars: int = 1_000_000
    output_dir: str = "./out"
    fail_on: RiskLevel = RiskLevel.HIGH
    shield: ShieldConfig = Field(default_factory=ShieldConfig)


def load_config(
    config_path: str | None = None,
    overrides: dict[str, Any] | None = None,
) -> Config:
    """Load config from YAML file, env vars, and caller overrides (in that priority).

    Keys:
        max_diff_chars: Largest diff the CLI accepts
            (``DIFFSPINE_MAX_DIFF_CHARS``).
        output_dir: Where ``review --write`` puts the markdown and JSON reports
            (``DIFFSPINE_OUTPUT_DIR``; ``--output`` overrides it).
        fail_on: Lowest risk level that fails ``review --strict``.
        shield: Triage policy for ``--context`` text (YAML only).
    """
    raw: dict[str, Any] = {}

    # 1. Load from YAML file
    paths_to_try = [Path(config_path)] if config_path else DEFAULT_CONFIG_PATHS
    for p in paths_to_try:
        if p.exists():
            with open(p) as f:
                raw = yaml.safe_load(f) or {}
            break

    # 2. Env var overrides
    if max_chars := os.environ.get("DIFFSPINE_MAX_DIFF_CHARS"):
        raw["max_diff_chars"] = max_chars
    if output_dir := os.environ.get("DIFFSPINE_OUTPUT_DIR"):
        raw["output_dir"] = output_dir

    # 3. Caller overrides (CLI flags)
    if overrides:
        raw.update({k: v for k, v in overrides.items() if v is not None})

    return Config(**raw)
