from __future__ import annotations

import pytest

from grephuman.page import SearchPage

SEARCH_URL = "https://www.google.com/search?q=python+tips"

SLOP_SNIPPET = (
    "In today's fast-paced digital landscape, let's dive into this game changer! 🚀🔥✅"
)
OLD_SNIPPET = "Mar 3, 2020 — plain factual recap"
NEW_SNIPPET = "Mar 3, 2024 — plain factual recap"
UNDATED_SNIPPET = "A plain factual recap of the quarterly numbers"


def _result(title: str | None, snippet: str, cls: str = "g") -> str:
    heading = f"<a href=\"https://example.org/\"><h3>{title}</h3></a>\n" if title else ""
    return (
        f'<div class="{cls}">\n'
        f"{heading}"
        f'<cite>https://example.org</cite>\n'
        f'<div class="VwiC3b">{snippet}</div>\n'
        "</div>\n"
    )


def _page(results: str, container: bool = True) -> str:
    body = f'<div id="search"><div id="rso">\n{results}</div></div>' if container else results
    return f"<html><head><title>results</title></head><body>{body}</body></html>"


@pytest.fixture
def result_html():
    return _result


@pytest.fixture
def page_html():
    return _page


@pytest.fixture
def make_page():
    def factory(*results: str, url: str = SEARCH_URL, container: bool = True) -> SearchPage:
        return SearchPage.from_html(_page("".join(results), container), url=url)

    return factory
