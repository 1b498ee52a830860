# grephuman/page.py
"""
Host document access.

The annotation engine never touches markup directly. It talks to a
ResultProvider, which knows how to enumerate result nodes, read their
text and write badges, markers and visibility.

SearchPage is the BeautifulSoup-backed provider for Google result pages.
It also plays the part of the browser's MutationObserver: every structural
change made through it (results merged in, badges added or removed) is
reported to observers when it lands under the results container.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, Protocol
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from grephuman.config import DEFAULT_CONFIG
from grephuman.models import BADGE_CONFIG, MutationRecord

log = logging.getLogger(__name__)

BADGE_CLASS = "grephuman-badge"
STYLE_ELEMENT_ID = "grephuman-styles"
AI_ATTR = "data-grephuman-ai"
HIDDEN_ATTR = "data-grephuman-hidden"

_BADGE_BASE_STYLE = (
    "all: initial !important; display: inline-block !important; "
    "padding: 2px 8px !important; border-radius: 4px !important; "
    "font-size: 11px !important; font-weight: 600 !important; "
    "margin-left: 8px !important; "
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif !important; "
    "box-shadow: 0 1px 3px rgba(0,0,0,0.2) !important; color: white !important; "
    "vertical-align: middle !important; line-height: normal !important; "
    "direction: ltr !important; unicode-bidi: isolate !important; "
    "writing-mode: horizontal-tb !important; transform: none !important; "
    "position: relative !important; cursor: default !important;"
)

# Keeps page-level CSS transforms (RTL layouts, rotations) off the badges.
_BADGE_STYLESHEET = (
    f".{BADGE_CLASS} {{ all: initial !important; display: inline-block !important; "
    "vertical-align: middle !important; direction: ltr !important; "
    "unicode-bidi: isolate !important; writing-mode: horizontal-tb !important; "
    "transform: none !important; rotate: none !important; scale: none !important; }"
)

MutationCallback = Callable[[List[MutationRecord]], None]


class ResultProvider(Protocol):
    """Capabilities the annotation engine needs from a host document."""

    def is_search_results(self) -> bool: ...

    def results(self) -> list: ...

    def title_text(self, node: Any) -> Optional[str]: ...

    def snippet_text(self, node: Any) -> str: ...

    def full_text(self, node: Any) -> str: ...

    def has_badge(self, node: Any) -> bool: ...

    def attach_badge(self, node: Any, verdict: str, tooltip: Optional[str]) -> None: ...

    def remove_badges(self) -> int: ...

    def set_ai_flag(self, node: Any, flagged: bool) -> None: ...

    def is_ai_flagged(self, node: Any) -> bool: ...

    def hide(self, node: Any) -> None: ...

    def unhide(self, node: Any) -> None: ...

    def hidden_nodes(self) -> list: ...


# ---------- inline style helpers ----------


def _parse_style(style: str) -> list[tuple[str, str]]:
    out: list[tuple[str, str]] = []
    for decl in style.split(";"):
        if ":" not in decl:
            continue
        prop, value = decl.split(":", 1)
        out.append((prop.strip().lower(), value.strip()))
    return out


def set_style_property(tag: Tag, prop: str, value: Optional[str]) -> None:
    """Set (or with value=None, clear) one inline style property, keeping the rest."""
    decls = [(p, v) for p, v in _parse_style(tag.get("style", "")) if p != prop]
    if value is not None:
        decls.append((prop, value))
    if decls:
        tag["style"] = "; ".join(f"{p}: {v}" for p, v in decls) + ";"
    elif tag.has_attr("style"):
        del tag["style"]


def get_style_property(tag: Tag, prop: str) -> Optional[str]:
    for p, v in _parse_style(tag.get("style", "")):
        if p == prop:
            return v
    return None


def is_search_url(
    url: Optional[str], hosts: Iterable[str], paths: Iterable[str]
) -> bool:
    """Hostname contains a search-engine fragment and the path is a results view."""
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    hostname = (parsed.hostname or "").lower()
    path = parsed.path or ""
    return any(h in hostname for h in hosts) and any(path.startswith(p) for p in paths)


class SearchPage:
    """A parsed search-results document plus the URL it was served from."""

    def __init__(
        self,
        soup: BeautifulSoup,
        url: Optional[str] = None,
        config: Optional[dict[str, Any]] = None,
    ) -> None:
        self.soup = soup
        self.url = url
        cfg = config or DEFAULT_CONFIG
        self.result_selector: str = cfg.get("result_selector", DEFAULT_CONFIG["result_selector"])
        self.container_selector: str = cfg.get(
            "container_selector", DEFAULT_CONFIG["container_selector"]
        )
        self.snippet_selector: str = cfg.get(
            "snippet_selector", DEFAULT_CONFIG["snippet_selector"]
        )
        self.search_hosts: list[str] = list(cfg.get("search_hosts", DEFAULT_CONFIG["search_hosts"]))
        self.search_paths: list[str] = list(cfg.get("search_paths", DEFAULT_CONFIG["search_paths"]))
        self._observers: list[MutationCallback] = []

    @classmethod
    def from_html(
        cls,
        html: str,
        url: Optional[str] = None,
        config: Optional[dict[str, Any]] = None,
    ) -> "SearchPage":
        return cls(BeautifulSoup(html, "html.parser"), url=url, config=config)

    def to_html(self) -> str:
        return str(self.soup)

    # ---- Page recognition & enumeration -------------------------------------

    def is_search_results(self) -> bool:
        return is_search_url(self.url, self.search_hosts, self.search_paths)

    def container(self) -> Optional[Tag]:
        return self.soup.select_one(self.container_selector)

    def results(self) -> list[Tag]:
        """Result nodes in document order."""
        return list(self.soup.select(self.result_selector))

    # ---- Reading ------------------------------------------------------------

    def _title(self, node: Tag) -> Optional[Tag]:
        return node.find("h3")

    def title_text(self, node: Tag) -> Optional[str]:
        title = self._title(node)
        if title is None:
            return None
        return title.get_text()

    def snippet_text(self, node: Tag) -> str:
        snippet = node.select_one(self.snippet_selector)
        return snippet.get_text() if snippet is not None else ""

    def full_text(self, node: Tag) -> str:
        return node.get_text()

    # ---- Badges -------------------------------------------------------------

    def has_badge(self, node: Tag) -> bool:
        return node.select_one(f".{BADGE_CLASS}") is not None

    def make_badge(self, verdict: str, tooltip: Optional[str]) -> Tag:
        style = BADGE_CONFIG[verdict]
        badge = self.soup.new_tag("span")
        badge["class"] = [BADGE_CLASS]
        badge["data-grephuman-kind"] = verdict
        badge["style"] = f"{_BADGE_BASE_STYLE} background: {style.background} !important;"
        badge["title"] = tooltip or style.default_title
        badge.string = style.label
        return badge

    def attach_badge(self, node: Tag, verdict: str, tooltip: Optional[str]) -> None:
        title = self._title(node)
        if title is None:
            log.debug("No title element to carry a badge; skipping node.")
            return
        badge = self.make_badge(verdict, tooltip)
        title.append(badge)
        self._notify("added", [badge])

    def remove_badges(self) -> int:
        badges = list(self.soup.select(f".{BADGE_CLASS}"))
        observed = [b for b in badges if self._in_container(b)]
        for badge in badges:
            badge.decompose()
        if observed:
            self._notify("removed", observed, check=False)
        return len(badges)

    def inject_badge_styles(self) -> bool:
        """Add the badge stylesheet once. Returns False if it was already present."""
        if self.soup.find(id=STYLE_ELEMENT_ID) is not None:
            return False
        style = self.soup.new_tag("style", id=STYLE_ELEMENT_ID)
        style.string = _BADGE_STYLESHEET
        parent = self.soup.head or self.soup.find("html") or self.soup
        parent.append(style)
        return True

    # ---- Markers & visibility -----------------------------------------------

    def set_ai_flag(self, node: Tag, flagged: bool) -> None:
        node[AI_ATTR] = "true" if flagged else "false"

    def is_ai_flagged(self, node: Tag) -> bool:
        return node.get(AI_ATTR) == "true"

    def hide(self, node: Tag) -> None:
        set_style_property(node, "display", "none")
        node[HIDDEN_ATTR] = "true"

    def unhide(self, node: Tag) -> None:
        set_style_property(node, "display", None)
        if node.has_attr(HIDDEN_ATTR):
            del node[HIDDEN_ATTR]

    def is_hidden(self, node: Tag) -> bool:
        return get_style_property(node, "display") == "none"

    def hidden_nodes(self) -> list[Tag]:
        return list(self.soup.select(f'[{HIDDEN_ATTR}="true"]'))

    # ---- Host-side mutation (the page loading more results) -----------------

    def insert_results(self, html: str) -> list[Tag]:
        """
        Merge result markup into the results container, as a page does when it
        loads more results. Observers get a single batch for the whole insert.
        """
        target = self._insert_target()
        if target is None:
            log.warning("No results container on page; cannot merge results.")
            return []
        fragment = BeautifulSoup(html, "html.parser")
        added: list[Tag] = []
        for child in list(fragment.contents):
            moved = child.extract()
            target.append(moved)
            if isinstance(moved, Tag):
                added.append(moved)
        if added:
            self._notify("added", added)
        return added

    def _insert_target(self) -> Optional[Tag]:
        # First selector in the list wins, not first element in the document.
        for selector in self.container_selector.split(","):
            found = self.soup.select_one(selector.strip())
            if found is not None:
                return found
        return None

    def remove_result(self, node: Tag) -> None:
        observed = self._in_container(node)
        node.extract()
        if observed:
            self._notify("removed", [node], check=False)

    # ---- Observation --------------------------------------------------------

    def observe(self, callback: MutationCallback) -> bool:
        """
        Report structural changes under the results container to callback.
        Returns False (and registers nothing) when the page has no container.
        """
        if self.container() is None:
            return False
        if callback not in self._observers:
            self._observers.append(callback)
        return True

    def disconnect(self, callback: MutationCallback) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _in_container(self, node: Tag) -> bool:
        container = self.container()
        if container is None:
            return False
        return node is container or any(p is container for p in node.parents)

    def _notify(self, kind: str, nodes: list[Tag], check: bool = True) -> None:
        if not self._observers:
            return
        if check:
            nodes = [n for n in nodes if self._in_container(n)]
            if not nodes:
                return
        record = MutationRecord(kind=kind, nodes=nodes)  # type: ignore[arg-type]
        for callback in list(self._observers):
            callback([record])
