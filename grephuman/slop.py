# Lexical "AI slop" scoring: phrase clichés plus emoji and exclamation signals.

from __future__ import annotations

import re

# Below this many characters there is too little signal to score.
MIN_TEXT_LENGTH = 40

# Scores at or above this are labeled as slop.
SLOP_THRESHOLD = 30

# ChatGPT-style filler phrases, matched as lowercase literal substrings.
SLOP_PHRASES = [
    "in today's digital landscape",
    "in today's fast-paced",
    "in today's world",
    "in the ever-evolving",
    "in this comprehensive guide",
    "dive into",
    "let's dive",
    "deep dive",
    "delve into",
    "let's delve",
    "it's worth noting",
    "it's important to note",
    "navigating the",
    "navigate the complexities",
    "unlock the power",
    "unlock the potential",
    "unleash the power",
    "harness the power",
    "the power of",
    "game.changer",
    "game changer",
    "a must-have",
    "revolutionize",
    "elevate your",
    "supercharge your",
    "streamline your",
    "seamlessly",
    "robust and scalable",
    "cutting-edge",
    "leverage the",
    "leveraging",
    "look no further",
    "buckle up",
    "without further ado",
    "comprehensive overview",
    "at the end of the day",
    "the bottom line",
    "in conclusion",
    "to sum up",
    "tapestry",
    "paradigm",
    "synergy",
    "holistic approach",
    "foster a",
    "foster an",
    "multifaceted",
    "pivotal role",
    "in the realm of",
    "landscape of",
    "embark on",
    "let's explore",
    "are you looking for",
    "whether you're a",
    "empower you",
    "empowering",
    "step-by-step guide",
    "everything you need to know",
    "here's the thing",
    "here's the deal",
    "the secret sauce",
    "not just any",
    "ready to take your",
    "take it to the next level",
    "next level",
    "level up your",
    "your journey",
    "stands out from the crowd",
    "stay ahead of the curve",
    "in this article",
    "in this blog post",
    "welcome to our",
]

PHRASE_POINTS = 12
PHRASE_CAP = 60

_EMOJI_RE = re.compile(
    r"[\U0001F300-\U0001FAFF\u2600-\u27BF\uFE00-\uFE0F"
    r"\U0001F900-\U0001F9FF\u200D\u2702-\u27B0]"
)

# "<emoji> Title: ..." style bullets. Word characters are ASCII only.
_EMOJI_BULLET_RE = re.compile(r"[\U0001F300-\U0001FAFF\u2600-\u27BF]\s*[A-Za-z0-9_]+.*?:")

HYPE_EMOJIS = frozenset("🚀✅🔥💡🎯⭐💪🏆🌟💥✨🎉")


def count_phrase_hits(lower: str) -> int:
    """Number of distinct slop phrases present in already case-folded text."""
    return sum(1 for phrase in SLOP_PHRASES if phrase in lower)


def _per_hundred(count: int, length: int) -> float:
    return count / (length / 100)


def detect_slop(text: str | None) -> int:
    """
    Score text for AI slop patterns.

    Returns an integer in [0, 100]: 0 reads as human, 100 as pure slop.
    The phrase, emoji density, emoji bullet, exclamation and hype-emoji
    signals are summed and the total is clamped.
    """
    if not text or len(text) < MIN_TEXT_LENGTH:
        return 0

    lower = text.lower()
    length = len(text)
    score = 0

    score += min(count_phrase_hits(lower) * PHRASE_POINTS, PHRASE_CAP)

    emoji_ratio = _per_hundred(len(_EMOJI_RE.findall(text)), length)
    if emoji_ratio > 2:
        score += 30
    elif emoji_ratio > 1:
        score += 20
    elif emoji_ratio > 0.5:
        score += 10

    if len(_EMOJI_BULLET_RE.findall(text)) >= 2:
        score += 15

    if _per_hundred(text.count("!"), length) > 1.5:
        score += 10

    if sum(1 for ch in text if ch in HYPE_EMOJIS) >= 3:
        score += 15

    return min(score, 100)


def is_slop(score: int) -> bool:
    return score >= SLOP_THRESHOLD
