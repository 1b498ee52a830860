# Defines the data structures shared by the scorer, classifier and annotation engine.

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Literal, Optional

# Categorical verdicts. These strings double as badge kinds.
Verdict = Literal["not-ai", "maybe-ai", "slop"]


@dataclass(frozen=True)
class BadgeStyle:
    """Fixed presentation of one badge kind."""

    label: str
    background: str
    default_title: str


BADGE_CONFIG: dict[str, BadgeStyle] = {
    "not-ai": BadgeStyle(
        label="✓ Not AI",
        background="linear-gradient(135deg, #10b981, #059669)",
        default_title="Pre-ChatGPT content",
    ),
    "maybe-ai": BadgeStyle(
        label="⚠ Maybe AI",
        background="linear-gradient(135deg, #f59e0b, #d97706)",
        default_title="Could be AI generated",
    ),
    "slop": BadgeStyle(
        label="✖ AI Slop",
        background="linear-gradient(135deg, #ef4444, #b91c1c)",
        default_title="Likely AI-generated (ChatGPT-style writing detected)",
    ),
}


@dataclass(frozen=True)
class ExtractedDate:
    """A publication date guessed from result text, plus the substring it came from."""

    date: date
    text: str


@dataclass(frozen=True)
class Classification:
    """Verdict for one result and the tooltip its badge should carry (None = badge default)."""

    verdict: Verdict
    tooltip: Optional[str] = None


@dataclass
class LabelOutcome:
    """What the engine decided for one result node during a labeling pass."""

    title: str
    verdict: Verdict
    score: int
    tooltip: Optional[str] = None
    date_text: Optional[str] = None
    published: Optional[date] = None


@dataclass
class EngineState:
    """Per-page state owned by the annotation engine."""

    labels_enabled: bool = True
    hidden_count: int = 0


@dataclass
class MutationRecord:
    """A structural change under an observed container (node added or removed)."""

    kind: Literal["added", "removed"]
    nodes: list = field(default_factory=list)
