"""
Core data types for digest-watch.

This module defines the data structures shared by the polling engine and
the content parser:
- Digest: One AI-generated news digest as returned by the backend
- NotificationPayload / NotificationState: The single-slot banner
- DigestListResult, UnreadCountResult, GeneratedDigestResult: Backend call results
- Block and Span variants: Parser output
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class DigestSource:
    """A reference cited by a digest. Either field may be missing."""

    title: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class Digest:
    """Represents one digest record owned by the backend.

    Attributes:
        id: Backend identifier, compared only for equality
        title: Digest headline (may be empty)
        content: Markdown-like body text
        topics: Ordered topic labels
        sources: Ordered source references
        created_at: ISO 8601 creation timestamp, if reported
        is_read: Whether the user already opened this digest
        is_bookmarked: Whether the user bookmarked this digest
    """

    id: Any
    title: str = ""
    content: str = ""
    topics: list[str] = field(default_factory=list)
    sources: list[DigestSource] = field(default_factory=list)
    created_at: str | None = None
    is_read: bool = False
    is_bookmarked: bool = False


@dataclass(frozen=True)
class NotificationPayload:
    title: str
    body: str
    digest_id: Any = None


@dataclass(frozen=True)
class NotificationState:
    """Banner state, replaced as a whole on every transition."""

    visible: bool = False
    payload: NotificationPayload | None = None


HIDDEN = NotificationState()


@dataclass
class DigestListResult:
    success: bool
    digests: list[Digest] = field(default_factory=list)


@dataclass
class UnreadCountResult:
    success: bool
    count: int = 0


@dataclass
class GeneratedDigestResult:
    success: bool
    digest: Digest | None = None


# Inline spans


@dataclass(frozen=True)
class Plain:
    text: str


@dataclass(frozen=True)
class Bold:
    text: str


Span = Union[Plain, Bold]


# Blocks


@dataclass(frozen=True)
class Heading:
    level: int
    spans: tuple[Span, ...]


@dataclass(frozen=True)
class Paragraph:
    spans: tuple[Span, ...]


@dataclass(frozen=True)
class ListBlock:
    items: tuple[tuple[Span, ...], ...]


@dataclass(frozen=True)
class Spacer:
    pass


Block = Union[Heading, Paragraph, ListBlock, Spacer]
