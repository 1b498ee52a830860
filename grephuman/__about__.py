"""Metadata for grephuman."""

__all__ = [
    "__title__",
    "__version__",
    "__description__",
    "__credits__",
    "__requires_python__",
]

__title__ = "grephuman"
__version__ = "0.1.0"
__description__ = (
    "Labels search results as human-written, maybe AI, or AI slop using "
    "phrase heuristics and publication dates."
)
__credits__ = [{"name": "grephuman contributors"}]
__requires_python__ = ">=3.9"
