# grephuman/ui.py
# Presentation-only utilities for CLI output.
from __future__ import annotations

from collections import Counter
from typing import IO, Any, Iterable, Mapping, Optional

from grephuman.models import BADGE_CONFIG, ExtractedDate, LabelOutcome
from grephuman.settings import Settings


def _writeln(text: str = "", *, file: IO[str]) -> None:
    file.write(text + "\n")


def render_label_header(path: str, url: str, *, file: IO[str]) -> None:
    _writeln(f"Labeling results in: {path} (as {url})...", file=file)


def render_outcomes_section(outcomes: Iterable[LabelOutcome], *, file: IO[str]) -> None:
    items = list(outcomes)
    if not items:
        return
    _writeln("\n--- Results ---", file=file)
    for outcome in items:
        label = BADGE_CONFIG[outcome.verdict].label
        _writeln(f"- [{label:<11}] {outcome.title}", file=file)
        detail = f"score={outcome.score}"
        if outcome.date_text:
            detail += f"  date={outcome.date_text!r}"
        _writeln(f"    {detail}", file=file)


def render_summary_line(
    outcomes: Iterable[LabelOutcome], state: Mapping[str, Any], *, file: IO[str]
) -> None:
    counts = Counter(o.verdict for o in outcomes)
    _writeln(
        f"\nNot AI: {counts['not-ai']}  Maybe AI: {counts['maybe-ai']}  "
        f"AI Slop: {counts['slop']}  Hidden: {state.get('hiddenCount', 0)}",
        file=file,
    )


def render_score(score: int, threshold: int, *, file: IO[str]) -> None:
    verdict = "slop" if score >= threshold else "below threshold"
    _writeln(f"Slop score: {score}/100 ({verdict})", file=file)


def render_date(found: Optional[ExtractedDate], *, file: IO[str]) -> None:
    if found is None:
        _writeln("No date found", file=file)
        return
    _writeln(f"{found.date.isoformat()}  (matched {found.text!r})", file=file)


def render_settings(settings: Settings, directory: Optional[str], *, file: IO[str]) -> None:
    _writeln(f"Store: {directory or '(in memory)'}", file=file)
    for key, value in settings.to_dict().items():
        _writeln(f"  {key}: {str(value).lower()}", file=file)
