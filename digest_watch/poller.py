"""
New-digest detection.

DigestPoller remembers the id of the newest digest it has seen. The first
successful fetch after start-up only records that id (digests that existed
before the app opened are not "new"); later fetches announce a digest
whenever the newest id changes.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Callable

from .client import DigestBackend
from .config import DEFAULT_BODY, DEFAULT_TITLE
from .logging_utils import get_logger, watch_event
from .types import Digest, NotificationPayload


logger = get_logger("poller")


@dataclass
class PollerMemory:
    """What the poller knows between ticks. Not persisted."""

    last_seen_digest_id: Any = None
    initialized: bool = False


class DigestPoller:
    """Fetches the digest list and emits a payload for each new digest.

    Attributes:
        backend: Source of the newest-first digest list
        on_new_digest: Called with the payload when a new digest is detected
        memory: Last seen id and cold-start flag
        closed: Set by close(); results arriving afterwards are dropped
    """

    def __init__(
        self,
        backend: DigestBackend,
        on_new_digest: Callable[[NotificationPayload], None],
        default_title: str = DEFAULT_TITLE,
        body: str = DEFAULT_BODY,
    ):
        self.backend = backend
        self.on_new_digest = on_new_digest
        self.default_title = default_title
        self.body = body
        self.memory = PollerMemory()
        self.closed = False

    async def check(self) -> NotificationPayload | None:
        """Run one check against the backend.

        Failures of any kind leave memory untouched and are not raised;
        the next tick simply tries again.

        Returns:
            The emitted payload, or None when nothing new was announced.
        """
        if self.closed:
            return None
        try:
            result = await self.backend.fetch_digests()
        except Exception as exc:  # noqa: BLE001
            watch_event(logger, "digest_check_failed", logging.DEBUG, error=f"{type(exc).__name__}: {exc}")
            return None

        if self.closed:
            watch_event(logger, "late_digest_list_dropped", logging.DEBUG)
            return None
        if not result.success or not result.digests:
            return None

        latest = result.digests[0]
        if not self.memory.initialized:
            self.memory.initialized = True
            self.memory.last_seen_digest_id = latest.id
            watch_event(logger, "baseline_recorded", digest_id=latest.id)
            return None

        if latest.id == self.memory.last_seen_digest_id:
            return None

        self.memory.last_seen_digest_id = latest.id
        payload = self._payload_for(latest)
        watch_event(logger, "new_digest", digest_id=latest.id)
        self.on_new_digest(payload)
        return payload

    def acknowledge(self, digest: Digest) -> NotificationPayload:
        """Record a digest known to be new and build its payload.

        Used for digests handed over directly (e.g. a freshly generated test
        digest) so the next periodic check does not announce it again.
        """
        self.memory.initialized = True
        self.memory.last_seen_digest_id = digest.id
        return self._payload_for(digest)

    def close(self) -> None:
        self.closed = True

    def _payload_for(self, digest: Digest) -> NotificationPayload:
        return NotificationPayload(
            title=digest.title or self.default_title,
            body=self.body,
            digest_id=digest.id,
        )
