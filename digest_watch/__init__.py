"""
Digest Watch - polling, notification and rendering core for daily digests.

This package watches a chat backend for newly generated AI news digests,
keeps a single in-app banner and the unread count up to date, and parses
digest text into blocks for display.

Example:
    $ digest-watch watch --base-url http://localhost:3001
"""

__all__ = [
    "__version__",
    "DigestApiClient",
    "DigestPoller",
    "DigestWatchService",
    "NotificationCenter",
    "UnreadCounter",
    "format_spans",
    "parse",
]
__version__ = "0.1.0"

from .client import DigestApiClient
from .inline import format_spans
from .notification import NotificationCenter
from .parser import parse
from .poller import DigestPoller
from .service import DigestWatchService
from .unread import UnreadCounter
