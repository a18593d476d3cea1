"""Error kinds raised by the simulation core."""

from __future__ import annotations


class ConciergeError(Exception):
    """Base exception for simulation precondition failures."""


class NotFoundError(ConciergeError):
    """Raised when a guest uid, room number, or request index does not exist."""


class InvalidStateError(ConciergeError):
    """Raised when an operation is issued against state that forbids it."""
