"""Tests for the unread digest counter."""

from __future__ import annotations

import asyncio

from digest_watch.errors import DecodeFailure, TransportFailure
from digest_watch.types import UnreadCountResult
from digest_watch.unread import UnreadCounter


def test_refresh_replaces_count(backend):
    counter = UnreadCounter(backend)
    backend.count_response = UnreadCountResult(success=True, count=3)
    assert asyncio.run(counter.refresh()) == 3

    backend.count_response = UnreadCountResult(success=True, count=1)
    assert asyncio.run(counter.refresh()) == 1
    assert counter.count == 1


def test_failures_keep_previous_count(backend):
    counter = UnreadCounter(backend)
    backend.count_response = UnreadCountResult(success=True, count=4)
    asyncio.run(counter.refresh())

    for failure in [
        TransportFailure("offline"),
        DecodeFailure("garbage"),
        UnreadCountResult(success=False, count=99),
        ValueError("count is not an integer"),
    ]:
        backend.count_response = failure
        assert asyncio.run(counter.refresh()) == 4

    assert counter.count == 4


def test_closed_counter_ignores_results(backend):
    counter = UnreadCounter(backend)
    counter.close()
    backend.count_response = UnreadCountResult(success=True, count=8)

    assert asyncio.run(counter.refresh()) == 0
