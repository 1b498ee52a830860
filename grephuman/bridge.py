# grephuman/bridge.py
"""
Caller side of the page message protocol.

A transport is any callable that delivers one message to a page session and
returns its response (PageSession.handle_message in-process, or whatever
relays messages to another context). Failures never propagate: the caller
gets None and the failure is logged.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

log = logging.getLogger(__name__)

Transport = Callable[[Mapping[str, Any]], Dict[str, Any]]


class MessageBridge:
    """Sends control messages, re-attaching the page side once on failure."""

    def __init__(
        self,
        transport: Optional[Transport] = None,
        reattach: Optional[Callable[[], None]] = None,
    ) -> None:
        self.transport = transport
        self.reattach = reattach

    @property
    def is_connected(self) -> bool:
        return self.transport is not None

    def send(self, message: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Deliver a message and return the response, or None.

        If the first attempt fails and a reattach hook is set, the hook runs
        (e.g. to start a session on the page) and the message is retried once.
        """
        if self.transport is None:
            log.debug("No transport; dropping %s", message.get("type"))
            return None

        try:
            return self.transport(message)
        except Exception as first_error:
            if self.reattach is None:
                log.error("Failed to send message: %s", first_error)
                return None
            log.info("Send failed (%s); re-attaching and retrying once.", first_error)

        try:
            self.reattach()
            return self.transport(message)
        except Exception as retry_error:
            log.error(
                "Failed to send message after re-attaching: %s", retry_error, exc_info=True
            )
            return None

    def ping(self) -> bool:
        """True if a live session answers PING."""
        response = self.send({"type": "PING"})
        return bool(response and response.get("pong"))

    # ---- Convenience wrappers for the popup-style controls ------------------

    def get_state(self) -> Optional[Dict[str, Any]]:
        return self.send({"type": "GET_STATE"})

    def toggle_labels(self, enabled: bool) -> Optional[Dict[str, Any]]:
        return self.send({"type": "TOGGLE_LABELS", "enabled": enabled})

    def hide_ai_results(self) -> Optional[int]:
        response = self.send({"type": "HIDE_AI_RESULTS"})
        if not response or "hiddenCount" not in response:
            return None
        return int(response["hiddenCount"])

    def show_all_results(self) -> Optional[Dict[str, Any]]:
        return self.send({"type": "SHOW_ALL_RESULTS"})
