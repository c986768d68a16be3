"""Exception types raised by the comparison pipeline."""

from __future__ import annotations


class DrCompareError(Exception):
    """Base class for all pipeline errors."""

    pass


class ConfigurationError(DrCompareError, ValueError):
    """Raised when an enumeration is empty, has duplicate labels, or an option is invalid."""

    pass


class DuplicateKeyError(DrCompareError, ValueError):
    """Raised when more than one row exists for a pivot key."""

    pass


class MissingGroupKeyError(DrCompareError, KeyError):
    """Raised when an observation has no matching total rank."""

    def __str__(self) -> str:
        # KeyError repr-quotes its message; keep it readable.
        return str(self.args[0]) if self.args else ""


__all__ = ["DrCompareError", "ConfigurationError", "DuplicateKeyError", "MissingGroupKeyError"]
