# grephuman/watcher.py
"""
Keeps labels in sync with a page that keeps changing.

Debouncer is a single-slot timer on the asyncio event loop: scheduling a
call cancels whichever call is still pending, so a burst of triggers
produces one call after the burst goes quiet (trailing edge).

ChangeWatcher wires page mutations to a debounced AnnotationEngine.label_all.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, List, Optional

from grephuman.engine import AnnotationEngine
from grephuman.models import MutationRecord
from grephuman.page import SearchPage

log = logging.getLogger(__name__)

# Idle window before a labeling pass runs after the last mutation.
DEBOUNCE_SECONDS = 0.3

CallLater = Callable[[float, Callable[[], Any]], Any]


class Debouncer:
    """Trailing-edge debounce with exactly one pending call at a time."""

    def __init__(self, delay: float = DEBOUNCE_SECONDS, call_later: Optional[CallLater] = None):
        self.delay = delay
        self._call_later = call_later
        self._handle: Any = None
        self._fn: Optional[Callable[[], Any]] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def has_clock(self) -> bool:
        """True when a call can be armed: an injected call_later or a running loop."""
        return self._clock() is not None

    def _clock(self) -> Optional[CallLater]:
        if self._call_later is not None:
            return self._call_later
        try:
            return asyncio.get_running_loop().call_later
        except RuntimeError:
            return None

    def schedule(self, fn: Callable[[], Any]) -> None:
        """
        Arm fn to run after the idle window, replacing any pending call.
        Without a clock the call is dropped; it never runs inline.
        """
        self.cancel()
        call_later = self._clock()
        if call_later is None:
            log.warning("No running event loop; debounced call dropped.")
            return
        self._fn = fn
        self._handle = call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._fn = None

    def _fire(self) -> None:
        fn = self._fn
        self._handle = None
        self._fn = None
        if fn is not None:
            fn()


class ChangeWatcher:
    """Re-runs labeling once the results container stops changing."""

    def __init__(
        self,
        page: SearchPage,
        engine: AnnotationEngine,
        delay: float = DEBOUNCE_SECONDS,
        call_later: Optional[CallLater] = None,
    ) -> None:
        self.page = page
        self.engine = engine
        self.debouncer = Debouncer(delay, call_later=call_later)
        self.observing = False

    def start(self) -> bool:
        """
        Begin observing. Returns False when the page has no results container
        or there is no clock (no injected call_later and no running loop).
        """
        if self.observing:
            return True
        if not self.debouncer.has_clock:
            log.warning("No running event loop; not watching for changes.")
            return False
        self.observing = self.page.observe(self._on_mutations)
        if not self.observing:
            log.info("No results container found; not watching for changes.")
        return self.observing

    def stop(self) -> None:
        self.page.disconnect(self._on_mutations)
        self.debouncer.cancel()
        self.observing = False

    def _on_mutations(self, records: List[MutationRecord]) -> None:
        log.debug("Observed %d mutation records; rescheduling labeling.", len(records))
        self.debouncer.schedule(self._run)

    def _run(self) -> None:
        try:
            self.engine.label_all()
        except Exception as e:
            log.error("Labeling pass failed: %s", e, exc_info=True)
