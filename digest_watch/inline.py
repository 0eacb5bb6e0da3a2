"""
Inline emphasis formatting for digest text.

Only one inline construct is recognized: ``**bold**``. Everything else,
including a lone or unterminated ``**``, is kept as plain text.
"""

from __future__ import annotations

import re

from .types import Bold, Plain, Span


BOLD_RE = re.compile(r"\*\*(.+?)\*\*")  # Matches "**text**", shortest run first


def format_spans(text: str) -> list[Span]:
    """Split text into plain and bold spans, left to right.

    Args:
        text: One line (or any string) of digest content

    Returns:
        Ordered spans whose concatenated text equals the input with the
        bold markers removed. Empty input gives an empty list; input
        without bold markers gives a single Plain span.

    Examples:
        >>> format_spans("a **b** c")
        [Plain(text='a '), Bold(text='b'), Plain(text=' c')]
    """
    if not text:
        return []

    spans: list[Span] = []
    last_index = 0
    for match in BOLD_RE.finditer(text):
        if match.start() > last_index:
            spans.append(Plain(text[last_index:match.start()]))
        spans.append(Bold(match.group(1)))
        last_index = match.end()

    if last_index < len(text):
        spans.append(Plain(text[last_index:]))
    return spans
