# Entrypoint for the grephuman package.
# This file makes the public API available to programmers.

from __future__ import annotations

from grephuman.__about__ import __version__
from grephuman.bridge import MessageBridge
from grephuman.classifier import GPT_LAUNCH_DATE, classify
from grephuman.dates import extract_date, parse_date
from grephuman.engine import AnnotationEngine
from grephuman.models import (
    Classification,
    EngineState,
    ExtractedDate,
    LabelOutcome,
    Verdict,
)
from grephuman.page import ResultProvider, SearchPage
from grephuman.session import PageSession
from grephuman.slop import SLOP_THRESHOLD, detect_slop
from grephuman.watcher import ChangeWatcher, Debouncer

# The __all__ variable defines the public API of the package.
# When a user writes `from grephuman import *`, only these names will be imported.
__all__ = [
    "AnnotationEngine",
    "ChangeWatcher",
    "Classification",
    "Debouncer",
    "EngineState",
    "ExtractedDate",
    "GPT_LAUNCH_DATE",
    "LabelOutcome",
    "MessageBridge",
    "PageSession",
    "ResultProvider",
    "SLOP_THRESHOLD",
    "SearchPage",
    "Verdict",
    "classify",
    "detect_slop",
    "extract_date",
    "parse_date",
    "__version__",
]
