"""Tests for the single-slot banner state."""

from __future__ import annotations

from digest_watch.notification import NotificationCenter
from digest_watch.types import NotificationPayload, NotificationState


def _payload(digest_id, title="Digest"):
    return NotificationPayload(title=title, body="body", digest_id=digest_id)


def test_initial_state_is_hidden():
    center = NotificationCenter()
    assert center.state == NotificationState(visible=False, payload=None)


def test_second_show_overwrites_first():
    center = NotificationCenter()
    first, second = _payload(1, "first"), _payload(2, "second")

    center.show(first)
    center.show(second)

    assert center.state == NotificationState(visible=True, payload=second)


def test_dismiss_hides_and_clears_payload():
    center = NotificationCenter()
    center.show(_payload(1))

    center.dismiss()

    assert not center.visible
    assert center.payload is None


def test_dismiss_when_hidden_is_noop():
    center = NotificationCenter()
    seen = []
    center.subscribe(seen.append)

    center.dismiss()

    assert seen == []


def test_dismiss_if_current_ignores_replaced_payload():
    center = NotificationCenter()
    old, new = _payload(1), _payload(2)
    center.show(old)
    center.show(new)

    assert center.dismiss_if_current(old) is False
    assert center.payload is new
    assert center.dismiss_if_current(new) is True
    assert not center.visible


def test_dismiss_if_current_uses_identity():
    center = NotificationCenter()
    center.show(_payload(1))

    assert center.dismiss_if_current(_payload(1)) is False
    assert center.visible


def test_listeners_receive_each_transition():
    center = NotificationCenter()
    seen = []
    unsubscribe = center.subscribe(seen.append)

    center.show(_payload(1))
    center.dismiss()
    unsubscribe()
    center.show(_payload(2))

    assert [state.visible for state in seen] == [True, False]
