# Combines the slop score and the extracted publication date into one verdict.

from __future__ import annotations

from datetime import date
from typing import Optional

from grephuman.models import Classification, ExtractedDate
from grephuman.slop import SLOP_THRESHOLD

# ChatGPT launch. Content published before this is presumed human-written.
GPT_LAUNCH_DATE = date(2022, 11, 30)


def format_cutoff(cutoff: date) -> str:
    """Render a cutoff the way tooltips show it, e.g. "Nov 30, 2022"."""
    return f"{cutoff:%b} {cutoff.day}, {cutoff.year}"


def classify(
    score: int,
    extracted: Optional[ExtractedDate],
    cutoff: date = GPT_LAUNCH_DATE,
) -> Classification:
    """
    Decide the verdict for one result.

    The slop check runs first, so a strong lexical signal wins over an old
    publication date. A missing date is treated as unknown and lands in
    "maybe-ai" together with post-cutoff dates.
    """
    if score >= SLOP_THRESHOLD:
        return Classification(
            verdict="slop",
            tooltip=f"AI slop score: {score}/100 - ChatGPT-style writing detected",
        )

    date_text = extracted.text if extracted else None

    if extracted is not None and extracted.date < cutoff:
        tooltip = None
        if date_text:
            tooltip = f"Published {date_text} - Before ChatGPT ({format_cutoff(cutoff)})"
        return Classification(verdict="not-ai", tooltip=tooltip)

    tooltip = f"Published {date_text} - After ChatGPT launch" if date_text else None
    return Classification(verdict="maybe-ai", tooltip=tooltip)


def is_flagged(verdict: str) -> bool:
    """True for verdicts that mark a result as possibly AI-generated."""
    return verdict != "not-ai"
