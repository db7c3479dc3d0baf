"""Input triage: reject free text that looks like prompt injection or is oversized."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from diffspine.schemas import TriageResult

INJECTION_REASON = "Potential prompt injection detected."
OVERSIZE_REASON = "Input exceeds safety threshold."


# ---------------------------------------------------------------------------
# Policy configuration
# ---------------------------------------------------------------------------

class ShieldConfig(BaseModel):
    """Configuration for free-text input triage."""

    enabled: bool = True

    injection_patterns: list[str] = Field(
        default_factory=lambda: [
            r"ignore all previous",
            r"system prompt",
            r"reveal your instructions",
            r"forget your rules",
            r"new persona",
        ],
        description="Regex patterns (case-insensitive) that mark input as unsafe.",
    )

    max_input_chars: int = Field(
        default=2000,
        description="Inputs longer than this are rejected.",
    )


# ---------------------------------------------------------------------------
# Shield
# ---------------------------------------------------------------------------

class InputShield:
    """Classifies free text as safe or unsafe.

    Pattern checks run before the length guard, so an oversized input that
    also contains an injection phrase reports the injection.
    """

    def __init__(self, policy: ShieldConfig | None = None) -> None:
        self.policy = policy or ShieldConfig()
        self._patterns = [re.compile(p, re.I) for p in self.policy.injection_patterns]

    def triage(self, text: str) -> TriageResult:
        if not self.policy.enabled:
            return TriageResult(safe=True)

        for pattern in self._patterns:
            if pattern.search(text):
                return TriageResult(safe=False, reason=INJECTION_REASON)

        if len(text) > self.policy.max_input_chars:
            return TriageResult(safe=False, reason=OVERSIZE_REASON)

        return TriageResult(safe=True)


def triage_input(text: str) -> TriageResult:
    """Triage *text* with the default policy."""
    return InputShield().triage(text)
