"""
The digest watch service.

DigestWatchService is the one object the UI layer holds. It owns the
poller memory, the banner state and the unread count, and runs the
repeating tick that drives them:

    service = DigestWatchService(backend, cfg)
    await service.start()      # first tick runs immediately
    ...
    service.on_history_focus() # user opened the digest list
    await service.stop()

Each tick starts the digest check and the unread refresh as independent
tasks and does not wait for them, so a slow backend can have several
fetches in flight. Whatever completes after stop() is discarded.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from .client import DigestBackend
from .config import AppConfig
from .logging_utils import get_logger, watch_event
from .notification import NotificationCenter
from .poller import DigestPoller
from .types import Digest, NotificationPayload, NotificationState
from .unread import UnreadCounter


logger = get_logger("service")


class DigestWatchService:
    """Polling, banner and unread-count state behind one handle.

    Attributes:
        backend: Backend collaborator shared by all components
        cfg: Application configuration (poll interval, banner timeout)
        notifications: Single-slot banner state
        poller: New-digest detection
        unread: Unread digest counter
    """

    def __init__(self, backend: DigestBackend, cfg: AppConfig | None = None):
        self.backend = backend
        self.cfg = cfg or AppConfig()
        self.notifications = NotificationCenter()
        self.poller = DigestPoller(
            backend,
            on_new_digest=self._show,
            default_title=self.cfg.poll.default_title,
            body=self.cfg.poll.body,
        )
        self.unread = UnreadCounter(backend)
        self._loop_task: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()
        self._dismiss_timer: asyncio.TimerHandle | None = None

    # State exposed to the UI layer

    @property
    def notification(self) -> NotificationState:
        return self.notifications.state

    @property
    def unread_count(self) -> int:
        return self.unread.count

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    # Lifecycle

    async def start(self) -> None:
        """Begin ticking: once now, then every poll interval."""
        if self.running:
            return
        if self.poller.closed:
            raise RuntimeError("DigestWatchService cannot be restarted after stop()")
        self._loop_task = asyncio.create_task(self._run())
        watch_event(logger, "watch_started", interval_seconds=self.cfg.poll.interval_seconds)
        # Let the first tick dispatch before returning
        await asyncio.sleep(0)

    async def stop(self) -> None:
        """Stop ticking and ignore any fetch still in flight."""
        self.poller.close()
        self.unread.close()
        self._cancel_dismiss_timer()
        if self._loop_task is not None:
            self._loop_task.cancel()
            try:
                await self._loop_task
            except asyncio.CancelledError:
                pass
            self._loop_task = None
        watch_event(logger, "watch_stopped", inflight=len(self._inflight))

    def tick(self) -> list[asyncio.Task]:
        """Start one digest check and one unread refresh without awaiting them."""
        tasks = [
            asyncio.create_task(self.poller.check()),
            asyncio.create_task(self.unread.refresh()),
        ]
        for task in tasks:
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
        return tasks

    async def _run(self) -> None:
        interval = self.cfg.poll.interval_seconds
        while True:
            self.tick()
            await asyncio.sleep(interval)

    # Actions

    def dismiss(self) -> None:
        self._cancel_dismiss_timer()
        self.notifications.dismiss()

    def open_notification(self) -> Any:
        """Acknowledge the banner by tapping it.

        Returns:
            The digest id to navigate to, or None if nothing was showing.
        """
        payload = self.notifications.payload if self.notifications.visible else None
        self.dismiss()
        return payload.digest_id if payload is not None else None

    def on_history_focus(self) -> asyncio.Task | None:
        """Viewing the digest history acknowledges the banner and refreshes the count."""
        self.dismiss()
        return self.refresh_unread_count()

    def refresh_unread_count(self) -> asyncio.Task | None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return None
        task = asyncio.create_task(self.unread.refresh())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def generate_test_digest(self) -> Digest | None:
        """Ask the backend for a test digest and announce it right away.

        The digest is recorded as seen so the next periodic check does not
        announce it a second time. Once the service is stopped nothing is
        requested or shown and None is returned.
        """
        if self.poller.closed:
            return None
        try:
            result = await self.backend.generate_test_digest()
        except Exception as exc:  # noqa: BLE001
            watch_event(logger, "test_digest_failed", logging.WARNING, error=f"{type(exc).__name__}: {exc}")
            return None
        if self.poller.closed:
            return None
        if not result.success or result.digest is None:
            watch_event(logger, "test_digest_rejected", logging.WARNING)
            return None

        payload = self.poller.acknowledge(result.digest)
        self._show(payload)
        watch_event(logger, "test_digest_announced", digest_id=result.digest.id)
        return result.digest

    # Internals

    def _show(self, payload: NotificationPayload) -> None:
        self.notifications.show(payload)
        self._arm_dismiss_timer(payload)

    def _arm_dismiss_timer(self, payload: NotificationPayload) -> None:
        self._cancel_dismiss_timer()
        delay = self.cfg.banner.auto_dismiss_seconds
        if delay is None:
            return
        loop = asyncio.get_running_loop()
        self._dismiss_timer = loop.call_later(delay, self.notifications.dismiss_if_current, payload)

    def _cancel_dismiss_timer(self) -> None:
        if self._dismiss_timer is not None:
            self._dismiss_timer.cancel()
            self._dismiss_timer = None
