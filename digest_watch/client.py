"""
HTTP client for the chat backend's digest endpoints.

This module is the thin REST layer the polling engine talks to. It
implements the DigestBackend protocol with httpx:
- GET  /api/digests               -> DigestListResult
- GET  /api/digests/unread/count  -> UnreadCountResult
- POST /api/digest/test           -> GeneratedDigestResult

Non-2xx responses are reported as ``success=False``. Network problems
raise TransportFailure and malformed bodies raise DecodeFailure; the
poller and the unread counter decide what to do with them.
"""

from __future__ import annotations

import json
from typing import Any, Protocol

import httpx

from .config import ApiConfig, get_api_token
from .errors import DecodeFailure, TransportFailure
from .types import (
    Digest,
    DigestListResult,
    DigestSource,
    GeneratedDigestResult,
    UnreadCountResult,
)


class DigestBackend(Protocol):
    """Calls the polling engine needs from the backend."""

    async def fetch_digests(self) -> DigestListResult: ...

    async def fetch_unread_count(self) -> UnreadCountResult: ...

    async def generate_test_digest(self) -> GeneratedDigestResult: ...


class DigestApiClient:
    """DigestBackend backed by the chat app's REST API.

    Attributes:
        cfg: API settings (base URL, timeout, proxy behavior)
        token: Bearer token sent with every request, if any
    """

    def __init__(
        self,
        cfg: ApiConfig,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cfg = cfg
        self.token = token if token is not None else get_api_token(cfg)
        headers = {"User-Agent": cfg.user_agent, "Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        self._client = httpx.AsyncClient(
            base_url=cfg.base_url,
            timeout=cfg.timeout_seconds,
            headers=headers,
            trust_env=cfg.trust_env,
            transport=transport,
        )

    async def __aenter__(self) -> DigestApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_digests(self) -> DigestListResult:
        ok, data = await self._request("GET", "/api/digests")
        if not ok:
            return DigestListResult(success=False)
        raw_digests = data.get("digests") or []
        if not isinstance(raw_digests, list):
            raise DecodeFailure("'digests' is not a list")
        return DigestListResult(success=True, digests=[decode_digest(item) for item in raw_digests])

    async def fetch_unread_count(self) -> UnreadCountResult:
        ok, data = await self._request("GET", "/api/digests/unread/count")
        if not ok:
            return UnreadCountResult(success=False)
        count = data.get("count", 0)
        if isinstance(count, bool) or not isinstance(count, int):
            raise DecodeFailure(f"unread count is not an integer: {count!r}")
        return UnreadCountResult(success=True, count=count)

    async def generate_test_digest(self) -> GeneratedDigestResult:
        ok, data = await self._request("POST", "/api/digest/test")
        if not ok or data.get("digest") is None:
            return GeneratedDigestResult(success=False)
        return GeneratedDigestResult(success=True, digest=decode_digest(data["digest"]))

    async def _request(self, method: str, path: str) -> tuple[bool, dict[str, Any]]:
        """Send one request and decode the JSON body.

        Returns:
            (ok, body) where ok is False for non-2xx answers or bodies that
            say ``"success": false``.
        """
        try:
            resp = await self._client.request(method, path)
        except httpx.HTTPError as exc:
            raise TransportFailure(f"{type(exc).__name__}: {exc}") from exc

        if not resp.is_success:
            return False, {}
        try:
            data = resp.json()
        except ValueError as exc:
            raise DecodeFailure(f"invalid JSON from {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise DecodeFailure(f"expected a JSON object from {path}")
        return data.get("success", True) is not False, data


def decode_digest(raw: Any) -> Digest:
    """Build a Digest from its wire form.

    ``topics`` and ``sources`` are stored JSON-encoded by the backend; both
    the encoded string and an already-decoded list are accepted.
    """
    if not isinstance(raw, dict) or "id" not in raw:
        raise DecodeFailure(f"digest without id: {raw!r}")
    topics = _decode_json_list(raw.get("topics"), "topics")
    sources = _decode_json_list(raw.get("sources"), "sources")
    return Digest(
        id=raw["id"],
        title=raw.get("title") or "",
        content=raw.get("content") or "",
        topics=[str(topic) for topic in topics],
        sources=[_decode_source(item) for item in sources],
        created_at=raw.get("created_at"),
        is_read=bool(raw.get("is_read")),
        is_bookmarked=bool(raw.get("is_bookmarked")),
    )


def _decode_json_list(value: Any, field_name: str) -> list[Any]:
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            raise DecodeFailure(f"{field_name} is not valid JSON: {exc}") from exc
    if not isinstance(value, list):
        raise DecodeFailure(f"{field_name} is not a list")
    return value


def _decode_source(item: Any) -> DigestSource:
    if isinstance(item, str):
        return DigestSource(url=item)
    if isinstance(item, dict):
        return DigestSource(title=item.get("title"), url=item.get("url"))
    raise DecodeFailure(f"unexpected source entry: {item!r}")
