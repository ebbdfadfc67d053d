"""Exception types raised by numlpy."""
from __future__ import annotations


class InvalidConfigurationError(ValueError):
    """Raised before any work starts when a learner or generator is misconfigured."""


class DimensionMismatchError(ValueError):
    """Raised when two vectors (or a vector and a matrix) have incompatible sizes."""


def check_same_length(x, y, what: str = "vectors") -> None:
    if len(x) != len(y):
        raise DimensionMismatchError(
            f"Cannot compare unequally sized {what} ({len(x)} != {len(y)})"
        )
