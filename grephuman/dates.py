# grephuman/dates.py
"""
Publication date extraction from search-result text.

Patterns are tried in a fixed order and the first match wins:

1. French relative phrases   ("il y a 3 ans", "il y a 2 mois")
2. English relative phrases  ("3 years ago", "2 months ago", "5 days ago")
3. Absolute dates            ("Mar 3, 2020", "3 mars 2020", "June 2019")

Only English and French month names are understood.
"""
from __future__ import annotations

import logging
import re
from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from grephuman.models import ExtractedDate

log = logging.getLogger(__name__)

# Month tokens, full and short forms, English and French. Lookup is by
# prefix in either direction, in this order.
MONTHS: dict[str, int] = {
    "jan": 1, "january": 1, "janv": 1,
    "feb": 2, "february": 2, "févr": 2, "fevr": 2,
    "mar": 3, "march": 3, "mars": 3,
    "apr": 4, "april": 4, "avr": 4,
    "may": 5, "mai": 5,
    "jun": 6, "june": 6, "juin": 6,
    "jul": 7, "july": 7, "juil": 7,
    "aug": 8, "august": 8, "août": 8, "aout": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12, "déc": 12,
}  # fmt: skip

_MONTH_TOKENS = (
    "jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec"
    "|janv|févr|mars|avr|mai|juin|juil|août|sept|déc"
)

_FRENCH_RELATIVE_RE = re.compile(r"il y a (\d+)\s+(ans?|mois)", re.IGNORECASE)
_ENGLISH_RELATIVE_RE = re.compile(
    r"(\d+)\s+(years?|months?|days?)\s+ago", re.IGNORECASE
)
# Optional day, month token (plus any trailing letters and a dot),
# optional day, comma, four-digit year.
_ABSOLUTE_BODY = (
    r"(\d{1,2})?\s*(" + _MONTH_TOKENS + r")[a-zéû]*\.?\s*(\d{1,2})?,?\s*(\d{4})"
)
_ABSOLUTE_DATE_RE = re.compile(r"\b" + _ABSOLUTE_BODY + r"\b", re.IGNORECASE)
_LOOSE_DATE_RE = re.compile(_ABSOLUTE_BODY, re.IGNORECASE)


def month_number(token: str) -> Optional[int]:
    """Resolve a month token ("Mar", "sept.", "juil") to 1-12, or None."""
    key = token.lower().replace(".", "")
    if not key:
        return None
    for name, number in MONTHS.items():
        if key.startswith(name) or name.startswith(key):
            return number
    return None


def _resolve(match: re.Match) -> Optional[date]:
    day_text = match.group(1) or match.group(3)
    day = int(day_text) if day_text else 0
    month = month_number(match.group(2))
    year = int(match.group(4))
    if month is None:
        return None
    try:
        return date(year, month, day or 1)
    except ValueError:
        log.debug("Discarding impossible date %r", match.group(0))
        return None


def parse_date(text: str | None) -> Optional[date]:
    """
    Parse a standalone absolute date such as "Mar 3, 2020" or "3 mars 2020".
    Accepts ISO dates ("2020-03-03") as well. Returns None when nothing
    date-like is found.
    """
    if not text:
        return None
    stripped = text.strip()
    try:
        return date.fromisoformat(stripped)
    except ValueError:
        pass
    match = _LOOSE_DATE_RE.search(stripped)
    if not match:
        return None
    return _resolve(match)


def _ago(today: date, delta: relativedelta) -> date:
    """today - delta, clamped to date.min when the result predates year 1."""
    try:
        return today - delta
    except (ValueError, OverflowError):
        log.debug("Relative date before %s; clamping.", date.min)
        return date.min


def _french_relative(text: str, today: date) -> Optional[ExtractedDate]:
    match = _FRENCH_RELATIVE_RE.search(text)
    if not match:
        return None
    amount = int(match.group(1))
    unit = match.group(2).lower()
    if unit.startswith("an"):
        delta = relativedelta(years=amount)
    else:
        delta = relativedelta(months=amount)
    return ExtractedDate(date=_ago(today, delta), text=match.group(0))


def _english_relative(text: str, today: date) -> Optional[ExtractedDate]:
    match = _ENGLISH_RELATIVE_RE.search(text)
    if not match:
        return None
    amount = int(match.group(1))
    unit = match.group(2).lower()
    if unit.startswith("year"):
        delta = relativedelta(years=amount)
    elif unit.startswith("month"):
        delta = relativedelta(months=amount)
    else:
        delta = relativedelta(days=amount)
    return ExtractedDate(date=_ago(today, delta), text=match.group(0))


def _absolute(text: str) -> Optional[ExtractedDate]:
    match = _ABSOLUTE_DATE_RE.search(text)
    if not match:
        return None
    resolved = _resolve(match)
    if resolved is None:
        return None
    # The leading word boundary can sit before whitespace
    return ExtractedDate(date=resolved, text=match.group(0).strip())


def extract_date(text: str | None, today: date | None = None) -> Optional[ExtractedDate]:
    """
    Best-guess publication date for a search result.

    Args:
        text: The full text content of the result.
        today: Reference date for relative phrases. Defaults to the date at
            call time, so repeated calls on later days can disagree.

    Returns:
        The resolved date and the exact substring it came from, or None when
        no date is present. None means "unknown", not "recent".
    """
    if not text:
        return None
    if today is None:
        today = date.today()

    for extractor in (_french_relative, _english_relative):
        found = extractor(text, today)
        if found is not None:
            return found
    return _absolute(text)
