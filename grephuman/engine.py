# grephuman/engine.py
"""
Annotation engine.

Walks the result nodes of a host document, classifies each one and keeps
the badges, AI markers and hidden results in sync with EngineState.
All document access goes through a ResultProvider.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Optional

from grephuman.classifier import GPT_LAUNCH_DATE, classify, is_flagged
from grephuman.dates import extract_date
from grephuman.models import EngineState, LabelOutcome
from grephuman.page import ResultProvider
from grephuman.slop import detect_slop

log = logging.getLogger(__name__)


class AnnotationEngine:
    """Labels, hides and restores search results on one page."""

    def __init__(
        self,
        provider: ResultProvider,
        state: Optional[EngineState] = None,
        cutoff: date = GPT_LAUNCH_DATE,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.provider = provider
        self.state = state if state is not None else EngineState()
        self.cutoff = cutoff
        self.today = today
        # Outcomes of every node labeled since the badges were last cleared.
        self.outcomes: list[LabelOutcome] = []

    def label_all(self) -> list[LabelOutcome]:
        """
        Label every result that does not carry a badge yet.

        Returns the outcomes of this pass only; a second pass over an
        unchanged page returns an empty list.
        """
        if not self.state.labels_enabled:
            return []
        if not self.provider.is_search_results():
            log.debug("Not a search results page; nothing to label.")
            return []

        log.info("Labeling results...")
        labeled: list[LabelOutcome] = []
        for node in self.provider.results():
            try:
                outcome = self._label_one(node)
            except Exception as e:
                log.warning("Failed to label a result: %s", e, exc_info=True)
                continue
            if outcome is not None:
                labeled.append(outcome)

        self.outcomes.extend(labeled)
        log.info("Labeled %d new results.", len(labeled))
        return labeled

    def _label_one(self, node: Any) -> Optional[LabelOutcome]:
        if self.provider.has_badge(node):
            return None

        title = self.provider.title_text(node)
        if title is None:
            log.debug("Result without a title element; skipping.")
            return None

        snippet = self.provider.snippet_text(node)
        score = detect_slop(f"{snippet} {title}")
        extracted = extract_date(self.provider.full_text(node), today=self.today())
        result = classify(score, extracted, self.cutoff)

        self.provider.attach_badge(node, result.verdict, result.tooltip)
        self.provider.set_ai_flag(node, is_flagged(result.verdict))

        return LabelOutcome(
            title=title.strip(),
            verdict=result.verdict,
            score=score,
            tooltip=result.tooltip,
            date_text=extracted.text if extracted else None,
            published=extracted.date if extracted else None,
        )

    def remove_all_badges(self) -> int:
        """Strip every badge. AI markers and visibility are left alone."""
        removed = self.provider.remove_badges()
        self.outcomes.clear()
        log.info("Removed %d badges.", removed)
        return removed

    def hide_flagged(self) -> int:
        """Hide every result marked as AI. The count is recomputed on each call."""
        count = 0
        for node in self.provider.results():
            if self.provider.is_ai_flagged(node):
                self.provider.hide(node)
                count += 1
        self.state.hidden_count = count
        log.info("Hidden %d results", count)
        return count

    def show_all(self) -> None:
        """Restore every hidden result and reset the hidden count."""
        for node in self.provider.hidden_nodes():
            self.provider.unhide(node)
        self.state.hidden_count = 0

    def set_enabled(self, enabled: bool) -> None:
        """
        Turn labeling on or off. Disabling also un-hides everything, since
        hiding depends on the labels.
        """
        self.state.labels_enabled = bool(enabled)
        if self.state.labels_enabled:
            self.label_all()
        else:
            self.remove_all_badges()
            self.show_all()

    def snapshot(self) -> dict[str, Any]:
        """Read-only view of the engine state, keyed the way GET_STATE reports it."""
        return {
            "labelsEnabled": self.state.labels_enabled,
            "hiddenCount": self.state.hidden_count,
            "isGoogleSearch": self.provider.is_search_results(),
        }
