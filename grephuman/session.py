# grephuman/session.py
"""
One labeling session per loaded page.

PageSession is what runs inside the page: it decides whether the page is a
search results page, does the first labeling pass, keeps labels current via
the ChangeWatcher and answers control messages.

Message protocol (request -> response), keyed by the "type" field:

    PING              -> {"pong": True}
    GET_STATE         -> {"labelsEnabled", "hiddenCount", "isGoogleSearch"}
    TOGGLE_LABELS     -> {"success": True}        payload: {"enabled": bool}
    HIDE_AI_RESULTS   -> {"hiddenCount": int}
    SHOW_ALL_RESULTS  -> {"success": True}
    anything else     -> {"error": "Unknown message"}
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Dict, Mapping, Optional

from grephuman.config import DEFAULT_CONFIG, cutoff_from
from grephuman.engine import AnnotationEngine
from grephuman.page import SearchPage
from grephuman.watcher import CallLater, ChangeWatcher

log = logging.getLogger(__name__)

Response = Dict[str, Any]


class PageSession:
    """Engine, watcher and message handling bound to one SearchPage."""

    def __init__(
        self,
        page: SearchPage,
        config: Optional[dict[str, Any]] = None,
        today: Callable[[], date] = date.today,
        call_later: Optional[CallLater] = None,
    ) -> None:
        cfg = config or DEFAULT_CONFIG
        self.page = page
        self.engine = AnnotationEngine(page, cutoff=cutoff_from(cfg), today=today)
        self.watcher = ChangeWatcher(
            page,
            self.engine,
            delay=float(cfg.get("debounce_seconds", DEFAULT_CONFIG["debounce_seconds"])),
            call_later=call_later,
        )
        self._handlers: dict[str, Callable[[Mapping[str, Any]], Response]] = {
            "PING": self._ping,
            "GET_STATE": self._get_state,
            "TOGGLE_LABELS": self._toggle_labels,
            "HIDE_AI_RESULTS": self._hide_ai_results,
            "SHOW_ALL_RESULTS": self._show_all_results,
        }

    def start(self) -> bool:
        """
        Auto-start on search results pages: inject badge styles, label what is
        already there and watch for results loaded later. Returns False (and
        does nothing) on any other page.
        """
        if not self.page.is_search_results():
            log.info("Not a search results page: %s", self.page.url)
            return False
        log.info("Search results page detected, labeling...")
        self.page.inject_badge_styles()
        self.engine.label_all()
        self.watcher.start()
        return True

    def stop(self) -> None:
        self.watcher.stop()

    def handle_message(self, message: Mapping[str, Any]) -> Response:
        """Answer one control message. Always returns exactly one response."""
        msg_type = message.get("type") if isinstance(message, Mapping) else None
        log.info("Message: %s", msg_type)
        handler = self._handlers.get(msg_type) if isinstance(msg_type, str) else None
        if handler is None:
            return {"error": "Unknown message"}
        try:
            return handler(message)
        except Exception as e:
            log.error("Message handler error: %s", e, exc_info=True)
            return {"error": str(e)}

    # ---- Handlers -----------------------------------------------------------

    def _ping(self, message: Mapping[str, Any]) -> Response:
        return {"pong": True}

    def _get_state(self, message: Mapping[str, Any]) -> Response:
        return self.engine.snapshot()

    def _toggle_labels(self, message: Mapping[str, Any]) -> Response:
        self.engine.set_enabled(bool(message.get("enabled")))
        return {"success": True}

    def _hide_ai_results(self, message: Mapping[str, Any]) -> Response:
        return {"hiddenCount": self.engine.hide_flagged()}

    def _show_all_results(self, message: Mapping[str, Any]) -> Response:
        self.engine.show_all()
        return {"success": True}
