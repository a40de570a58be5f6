"""Exceptions raised by the analytics engine."""

from __future__ import annotations


class InvalidContractError(ValueError):
    """Raised when a contract request cannot be analysed.

    Raised before any numeric work, so no partial result exists.
    """
