"""Shared fakes for the backend collaborator."""

from __future__ import annotations

import asyncio

import pytest

from digest_watch.types import (
    Digest,
    DigestListResult,
    GeneratedDigestResult,
    UnreadCountResult,
)


class FakeBackend:
    """In-memory DigestBackend.

    Each ``*_response`` attribute is returned as-is, or raised when it is
    an exception. Setting ``digests_gate`` or ``generated_gate`` makes
    the matching call wait on it.
    """

    def __init__(self) -> None:
        self.digests_response: object = DigestListResult(success=True, digests=[])
        self.count_response: object = UnreadCountResult(success=True, count=0)
        self.generated_response: object = GeneratedDigestResult(success=False)
        self.digests_gate: asyncio.Event | None = None
        self.generated_gate: asyncio.Event | None = None
        self.digest_calls = 0
        self.count_calls = 0
        self.generate_calls = 0

    def serve(self, *ids, titles: dict | None = None) -> None:
        titles = titles or {}
        self.digests_response = DigestListResult(
            success=True,
            digests=[Digest(id=digest_id, title=titles.get(digest_id, "")) for digest_id in ids],
        )

    async def fetch_digests(self):
        self.digest_calls += 1
        response = self.digests_response
        if self.digests_gate is not None:
            await self.digests_gate.wait()
        if isinstance(response, BaseException):
            raise response
        return response

    async def fetch_unread_count(self):
        self.count_calls += 1
        if isinstance(self.count_response, BaseException):
            raise self.count_response
        return self.count_response

    async def generate_test_digest(self):
        self.generate_calls += 1
        if self.generated_gate is not None:
            await self.generated_gate.wait()
        if isinstance(self.generated_response, BaseException):
            raise self.generated_response
        return self.generated_response


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()
