"""
Single-slot in-app banner state.

The banner is either hidden or showing exactly one payload. A new payload
replaces whatever is showing (there is no queue), and dismissing clears
the payload so a later transition can never resurface a stale one.
"""

from __future__ import annotations

import logging
from typing import Callable

from .logging_utils import get_logger, watch_event
from .types import HIDDEN, NotificationPayload, NotificationState


Listener = Callable[[NotificationState], None]

logger = get_logger("notification")


class NotificationCenter:
    """Holds the current NotificationState and notifies listeners on change.

    Every transition assigns a new frozen NotificationState, so readers
    always see a consistent (visible, payload) pair.
    """

    def __init__(self) -> None:
        self._state: NotificationState = HIDDEN
        self._listeners: list[Listener] = []

    @property
    def state(self) -> NotificationState:
        return self._state

    @property
    def visible(self) -> bool:
        return self._state.visible

    @property
    def payload(self) -> NotificationPayload | None:
        return self._state.payload

    def show(self, payload: NotificationPayload) -> NotificationState:
        """Show payload, replacing any banner already visible."""
        replaced = self._state.payload
        self._set(NotificationState(visible=True, payload=payload))
        watch_event(logger, "banner_shown", logging.DEBUG, digest_id=payload.digest_id, replaced=replaced is not None)
        return self._state

    def dismiss(self) -> NotificationState:
        if self._state.visible or self._state.payload is not None:
            self._set(HIDDEN)
        return self._state

    def dismiss_if_current(self, payload: NotificationPayload) -> bool:
        """Dismiss only while payload is the one on screen.

        Used by auto-dismiss timers so an old timer never hides a newer
        banner. Compared by identity: two detections of equal content are
        still distinct banners.
        """
        if self._state.visible and self._state.payload is payload:
            self._set(HIDDEN)
            return True
        return False

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, state: NotificationState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
