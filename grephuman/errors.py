# Exceptions raised by the command-line and configuration surfaces.
# The page session itself never raises into the host page.

from __future__ import annotations


class GrepHumanError(Exception):
    """Base class for grephuman errors."""


class ConfigError(GrepHumanError):
    """Configuration value could not be understood."""


class InputError(GrepHumanError):
    """An input document could not be read."""
