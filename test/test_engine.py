from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

import pytest

from grephuman.engine import AnnotationEngine
from grephuman.models import EngineState

from conftest import NEW_SNIPPET, OLD_SNIPPET, SLOP_SNIPPET, UNDATED_SNIPPET

TODAY = date(2026, 10, 19)


# --- in-memory provider ------------------------------------------------------


@dataclass
class FakeNode:
    title: Optional[str]
    snippet: str = ""
    badge: Optional[tuple] = None
    ai: Optional[bool] = None
    hidden: bool = False
    broken: bool = False


class FakeProvider:
    """Synthetic result nodes, no markup involved."""

    def __init__(self, nodes: list[FakeNode], search: bool = True):
        self.nodes = nodes
        self.search = search

    def is_search_results(self):
        return self.search

    def results(self):
        return list(self.nodes)

    def title_text(self, node):
        return node.title

    def snippet_text(self, node):
        if node.broken:
            raise RuntimeError("detached node")
        return node.snippet

    def full_text(self, node):
        return f"{node.title or ''}\n{node.snippet}"

    def has_badge(self, node):
        return node.badge is not None

    def attach_badge(self, node, verdict, tooltip):
        node.badge = (verdict, tooltip)

    def remove_badges(self):
        count = 0
        for node in self.nodes:
            if node.badge is not None:
                node.badge = None
                count += 1
        return count

    def set_ai_flag(self, node, flagged):
        node.ai = flagged

    def is_ai_flagged(self, node):
        return node.ai is True

    def hide(self, node):
        node.hidden = True

    def unhide(self, node):
        node.hidden = False

    def hidden_nodes(self):
        return [n for n in self.nodes if n.hidden]


def _nodes() -> list[FakeNode]:
    return [
        FakeNode("Ten tools you need", SLOP_SNIPPET),
        FakeNode("Quarterly report", OLD_SNIPPET),
        FakeNode("Quarterly report", NEW_SNIPPET),
        FakeNode("Quarterly report", UNDATED_SNIPPET),
    ]


@pytest.fixture
def provider():
    return FakeProvider(_nodes())


@pytest.fixture
def engine(provider):
    return AnnotationEngine(provider, today=lambda: TODAY)


# --- label_all ---------------------------------------------------------------


def test_label_all_classifies_each_node(engine, provider):
    outcomes = engine.label_all()
    assert [o.verdict for o in outcomes] == ["slop", "not-ai", "maybe-ai", "maybe-ai"]
    assert [n.badge[0] for n in provider.nodes] == ["slop", "not-ai", "maybe-ai", "maybe-ai"]
    assert [n.ai for n in provider.nodes] == [True, False, True, True]


def test_label_all_tooltips(engine, provider):
    engine.label_all()
    slop, old, new, undated = (n.badge[1] for n in provider.nodes)
    assert slop.startswith("AI slop score: ")
    assert old == "Published Mar 3, 2020 - Before ChatGPT (Nov 30, 2022)"
    assert new == "Published Mar 3, 2024 - After ChatGPT launch"
    assert undated is None


def test_label_all_is_idempotent(engine, provider):
    first = engine.label_all()
    badges = [n.badge for n in provider.nodes]
    second = engine.label_all()
    assert len(first) == 4
    assert second == []
    assert [n.badge for n in provider.nodes] == badges
    assert len(engine.outcomes) == 4


def test_label_all_picks_up_new_nodes_only(engine, provider):
    engine.label_all()
    provider.nodes.append(FakeNode("Another report", OLD_SNIPPET))
    outcomes = engine.label_all()
    assert len(outcomes) == 1
    assert outcomes[0].verdict == "not-ai"


def test_slop_overrides_old_date(provider):
    provider.nodes[:] = [FakeNode("Ten tools", f"{SLOP_SNIPPET} Mar 3, 2010")]
    engine = AnnotationEngine(provider, today=lambda: TODAY)
    (outcome,) = engine.label_all()
    assert outcome.verdict == "slop"
    assert outcome.score >= 75
    assert outcome.date_text == "Mar 3, 2010"


def test_relative_dates_use_engine_today():
    provider = FakeProvider([FakeNode("Forum thread", "Posted 3 years ago by a user")])
    engine = AnnotationEngine(provider, today=lambda: date(2024, 1, 10))
    (outcome,) = engine.label_all()
    assert outcome.published == date(2021, 1, 10)
    assert outcome.verdict == "not-ai"


def test_node_without_title_is_skipped(provider):
    provider.nodes.insert(1, FakeNode(None, OLD_SNIPPET))
    engine = AnnotationEngine(provider, today=lambda: TODAY)
    outcomes = engine.label_all()
    assert len(outcomes) == 4
    assert provider.nodes[1].badge is None
    assert provider.nodes[1].ai is None


def test_failing_node_does_not_abort_batch(provider):
    provider.nodes[0].broken = True
    engine = AnnotationEngine(provider, today=lambda: TODAY)
    outcomes = engine.label_all()
    assert len(outcomes) == 3
    assert provider.nodes[0].badge is None
    assert all(n.badge is not None for n in provider.nodes[1:])


def test_label_all_noop_when_disabled(provider):
    engine = AnnotationEngine(provider, state=EngineState(labels_enabled=False))
    assert engine.label_all() == []
    assert all(n.badge is None for n in provider.nodes)


def test_label_all_noop_off_search_page():
    provider = FakeProvider(_nodes(), search=False)
    engine = AnnotationEngine(provider)
    assert engine.label_all() == []
    assert all(n.badge is None for n in provider.nodes)


# --- hide / show -------------------------------------------------------------


def test_hide_flagged_hides_slop_and_maybe(engine, provider):
    engine.label_all()
    assert engine.hide_flagged() == 3
    assert engine.state.hidden_count == 3
    assert [n.hidden for n in provider.nodes] == [True, False, True, True]


def test_hide_flagged_does_not_double_count(engine):
    engine.label_all()
    counts = [engine.hide_flagged() for _ in range(3)]
    assert counts == [3, 3, 3]
    assert engine.state.hidden_count == 3


def test_show_all_restores_everything(engine, provider):
    engine.label_all()
    engine.hide_flagged()
    engine.hide_flagged()
    engine.show_all()
    assert not any(n.hidden for n in provider.nodes)
    assert engine.state.hidden_count == 0


def test_hide_before_labeling_hides_nothing(engine):
    assert engine.hide_flagged() == 0


# --- badges & enable toggle ----------------------------------------------------


def test_remove_all_badges_keeps_markers_and_visibility(engine, provider):
    engine.label_all()
    engine.hide_flagged()
    assert engine.remove_all_badges() == 4
    assert all(n.badge is None for n in provider.nodes)
    assert [n.ai for n in provider.nodes] == [True, False, True, True]
    assert provider.nodes[0].hidden
    assert engine.outcomes == []


def test_disable_removes_badges_and_unhides(engine, provider):
    engine.label_all()
    engine.hide_flagged()
    engine.set_enabled(False)
    assert not engine.state.labels_enabled
    assert all(n.badge is None for n in provider.nodes)
    assert not any(n.hidden for n in provider.nodes)
    assert engine.state.hidden_count == 0
    # Labeling stays off until re-enabled.
    assert engine.label_all() == []


def test_enable_relabels(engine, provider):
    engine.label_all()
    engine.set_enabled(False)
    engine.set_enabled(True)
    assert engine.state.labels_enabled
    assert all(n.badge is not None for n in provider.nodes)
    assert len(engine.outcomes) == 4


def test_snapshot(engine):
    engine.label_all()
    engine.hide_flagged()
    assert engine.snapshot() == {
        "labelsEnabled": True,
        "hiddenCount": 3,
        "isGoogleSearch": True,
    }


def test_ancient_relative_date_is_labeled_not_ai():
    provider = FakeProvider([FakeNode("Pyramids", "The pyramid was built 4500 years ago")])
    engine = AnnotationEngine(provider, today=lambda: TODAY)
    (outcome,) = engine.label_all()
    assert outcome.verdict == "not-ai"
    assert outcome.published == date.min
    assert provider.nodes[0].badge == (
        "not-ai",
        "Published 4500 years ago - Before ChatGPT (Nov 30, 2022)",
    )
    assert provider.nodes[0].ai is False
