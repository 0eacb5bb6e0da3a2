"""Error taxonomy for backend calls made by the polling engine."""

from __future__ import annotations


class DigestWatchError(Exception):
    """Base class for digest-watch errors."""


class TransportFailure(DigestWatchError):
    """The backend could not be reached (network error or timeout)."""


class DecodeFailure(DigestWatchError):
    """The backend answered with a body that could not be decoded."""
