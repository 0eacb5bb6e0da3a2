"""Unread digest count, refreshed on the polling cadence."""

from __future__ import annotations

import logging

from .client import DigestBackend
from .logging_utils import get_logger, watch_event


logger = get_logger("unread")


class UnreadCounter:
    def __init__(self, backend: DigestBackend):
        self.backend = backend
        self.count = 0
        self.closed = False

    async def refresh(self) -> int:
        """Fetch the unread count; keep the previous value on failure."""
        try:
            result = await self.backend.fetch_unread_count()
        except Exception as exc:  # noqa: BLE001
            watch_event(logger, "unread_refresh_failed", logging.DEBUG, error=f"{type(exc).__name__}: {exc}")
            return self.count

        if self.closed or not result.success:
            return self.count
        if result.count != self.count:
            watch_event(logger, "unread_count_changed", count=result.count, previous=self.count)
        self.count = result.count
        return self.count

    def close(self) -> None:
        self.closed = True
