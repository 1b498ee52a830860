# grephuman/cli.py
# Defines the command-line interface using argparse.

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from pathlib import Path
from typing import IO, Any, Sequence

from grephuman import __version__
from grephuman.config import load_config
from grephuman.dates import extract_date
from grephuman.errors import GrepHumanError, InputError
from grephuman.page import SearchPage
from grephuman.session import PageSession
from grephuman.settings import SettingsStore
from grephuman.slop import SLOP_THRESHOLD, detect_slop
from grephuman.ui import (
    render_date,
    render_label_header,
    render_outcomes_section,
    render_score,
    render_settings,
    render_summary_line,
)

log = logging.getLogger(__name__)

DEFAULT_PAGE_URL = "https://www.google.com/search"

EXIT_NOT_SEARCH_PAGE = 3


def _configure_logging(verbose: bool) -> None:
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _read_text(path: str) -> str:
    p = Path(path)
    if not p.exists():
        log.error("Error: The file specified could not be found: %s", path)
        raise InputError(f"File not found: {path}")
    with p.open("r", encoding="utf-8") as f:
        return f.read()


def _json_default(o: Any) -> Any:
    # Minimal, safe encoder for dataclasses and dates.
    if isinstance(o, (datetime, date)):
        return o.isoformat()
    if is_dataclass(o):
        return asdict(o)  # type: ignore[arg-type]
    return str(o)


def _outer_results_markup(html: str, config: dict[str, Any]) -> str:
    """Markup of the outermost result nodes of another saved results page."""
    other = SearchPage.from_html(html, config=config)
    nodes = other.results()
    chosen = [
        n for n in nodes if not any(p is m for m in nodes for p in n.parents)
    ]
    return "".join(str(n) for n in chosen)


async def _settle(session: PageSession) -> None:
    # Each pass adds badges, which schedules one more (empty) pass.
    debouncer = session.watcher.debouncer
    while debouncer.pending:
        await asyncio.sleep(debouncer.delay)


async def _run_label(args: argparse.Namespace, config: dict[str, Any], stdout: IO[str]) -> int:
    html = _read_text(args.file)
    more = [_read_text(p) for p in (args.more or [])]

    page = SearchPage.from_html(html, url=args.url, config=config)
    session = PageSession(page, config)
    render_label_header(args.file, args.url, file=stdout)

    if not session.start():
        print("Not a search results page; nothing labeled.", file=stdout)
        return EXIT_NOT_SEARCH_PAGE

    try:
        for extra in more:
            page.insert_results(_outer_results_markup(extra, config))
        await _settle(session)

        if args.hide:
            session.handle_message({"type": "HIDE_AI_RESULTS"})
        state = session.handle_message({"type": "GET_STATE"})
    finally:
        session.stop()

    outcomes = session.engine.outcomes
    render_outcomes_section(outcomes, file=stdout)
    render_summary_line(outcomes, state, file=stdout)

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(page.to_html(), encoding="utf-8")
        print(f"Annotated page written to {args.output}", file=stdout)

    if args.json_output:
        out_path = Path(args.json_output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        report = {"url": args.url, "state": state, "results": outcomes}
        with out_path.open("w", encoding="utf-8") as f:
            json.dump(report, f, default=_json_default, indent=2, ensure_ascii=False)
        print(f"Label report written to {args.json_output}", file=stdout)
    return 0


def _run_settings(args: argparse.Namespace, config: dict[str, Any], stdout: IO[str]) -> int:
    if args.settings_dir:
        config["settings"]["directory"] = args.settings_dir
    store = SettingsStore(config)
    try:
        if args.settings_cmd == "init":
            written = store.install("install")
            if written:
                print("Default settings written.", file=stdout)
            else:
                print("Settings already present; left unchanged.", file=stdout)
        elif args.settings_cmd == "reset":
            store.reset()
            print("Settings reset to defaults.", file=stdout)
        render_settings(store.load(), store.directory, file=stdout)
    finally:
        store.close()
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Label search results as human-written, maybe AI, or AI slop.",
        prog="grephuman",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging output to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- label ---
    label_parser = subparsers.add_parser(
        "label", help="Label the results of a saved search results page."
    )
    label_parser.add_argument("file", help="Saved HTML of a search results page.")
    label_parser.add_argument(
        "--url",
        default=DEFAULT_PAGE_URL,
        help="URL the page was served from (default: %(default)s).",
    )
    label_parser.add_argument(
        "--more",
        metavar="FILEPATH",
        action="append",
        help="Another saved results page whose results are merged in after the "
        "first pass, as if loaded by scrolling. Repeatable.",
    )
    label_parser.add_argument(
        "--hide", action="store_true", help="Hide results flagged as AI."
    )
    label_parser.add_argument(
        "--output", metavar="FILEPATH", help="Write the annotated HTML here."
    )
    label_parser.add_argument(
        "--json",
        dest="json_output",
        metavar="FILEPATH",
        help="Write the per-result report as JSON here.",
    )

    # --- score ---
    score_parser = subparsers.add_parser("score", help="Score text for AI slop.")
    score_parser.add_argument("text", help="Text to score, or '-' to read stdin.")

    # --- date ---
    date_parser = subparsers.add_parser(
        "date", help="Extract a publication date from text."
    )
    date_parser.add_argument("text", help="Text to search for a date.")
    date_parser.add_argument(
        "--today",
        metavar="YYYY-MM-DD",
        type=date.fromisoformat,
        default=None,
        help="Reference date for relative phrases (default: today).",
    )

    # --- settings ---
    settings_parser = subparsers.add_parser(
        "settings", help="Show or initialize the persisted settings."
    )
    settings_parser.add_argument(
        "--dir",
        dest="settings_dir",
        metavar="PATH",
        default=None,
        help="Settings directory (defaults to the per-user data directory).",
    )
    settings_parser.add_argument(
        "settings_cmd", choices=["show", "init", "reset"], nargs="?", default="show"
    )
    return parser


async def async_main(
    argv: Sequence[str] | None = None, stdout: IO[str] | None = None
) -> int:
    """Async entry point for the command-line interface."""
    stdout = stdout or sys.stdout
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    config = load_config()

    try:
        if args.command == "label":
            return await _run_label(args, config, stdout)

        if args.command == "score":
            text = sys.stdin.read() if args.text == "-" else args.text
            render_score(detect_slop(text), SLOP_THRESHOLD, file=stdout)
            return 0

        if args.command == "date":
            render_date(extract_date(args.text, today=args.today), file=stdout)
            return 0

        if args.command == "settings":
            return _run_settings(args, config, stdout)
    except GrepHumanError as e:
        print(f"Error: {e}", file=stdout)
        return 1

    # Should not reach
    print("Unknown command", file=stdout)
    return 2


def main(argv: Sequence[str] | None = None) -> int:
    """Synchronous wrapper for the CLI entry point."""
    return asyncio.run(async_main(argv))


if __name__ == "__main__":
    sys.exit(main())
