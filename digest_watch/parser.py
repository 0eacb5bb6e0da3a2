"""
Block parser for markdown-like digest content.

Digest bodies come from an LLM prompted to use "##" headings, bullet
points and bold text. This module classifies each line into one of a
small set of blocks:
- "# ", "## ", "### " prefixes become headings (longest prefix wins)
- "- ", "* " and "1. " prefixes become items of a list block
- blank lines become spacers
- anything else becomes a paragraph

It is a line classifier, not a markdown grammar; unknown syntax degrades
to paragraphs.
"""

from __future__ import annotations

import re

from .inline import format_spans
from .types import Block, Heading, ListBlock, Paragraph, Spacer


HEADING_PREFIXES = (("### ", 3), ("## ", 2), ("# ", 1))  # Longest first
BULLET_RE = re.compile(r"^[-*]\s+")     # Matches "- item" / "* item"
NUMBERED_RE = re.compile(r"^\d+\.\s")   # Matches "1. item"
NUMBER_MARKER_RE = re.compile(r"^\d+\.\s+")


def parse(text: str | None) -> list[Block]:
    """Parse digest content into an ordered list of blocks.

    Consecutive list lines are collected into a single ListBlock; any
    other line kind closes the pending list first.

    Args:
        text: The digest body. None or "" yields no blocks.

    Returns:
        A list of Heading, Paragraph, ListBlock and Spacer blocks.
    """
    if not text:
        return []

    blocks: list[Block] = []
    list_items: list[str] = []  # Accumulator for the pending list

    def flush() -> None:
        """Emit the pending list, if any, and reset the accumulator."""
        if not list_items:
            return
        blocks.append(ListBlock(tuple(tuple(format_spans(item)) for item in list_items)))
        list_items.clear()

    for line in text.split("\n"):
        trimmed = line.strip()

        if not trimmed:
            flush()
            blocks.append(Spacer())
            continue

        heading = _match_heading(trimmed)
        if heading is not None:
            flush()
            level, rest = heading
            blocks.append(Heading(level, tuple(format_spans(rest))))
            continue

        if _is_list_item(trimmed):
            list_items.append(_strip_list_marker(trimmed))
            continue

        flush()
        blocks.append(Paragraph(tuple(format_spans(trimmed))))

    # Close a list that runs to the end of the text
    flush()
    return blocks


def _match_heading(line: str) -> tuple[int, str] | None:
    for prefix, level in HEADING_PREFIXES:
        if line.startswith(prefix):
            return level, line[len(prefix):]
    return None


def _is_list_item(line: str) -> bool:
    return line.startswith("- ") or line.startswith("* ") or bool(NUMBERED_RE.match(line))


def _strip_list_marker(line: str) -> str:
    """Remove the bullet marker, then a numeric marker.

    Examples:
        >>> _strip_list_marker("- item")
        'item'
        >>> _strip_list_marker("12. item")
        'item'
    """
    return NUMBER_MARKER_RE.sub("", BULLET_RE.sub("", line, count=1), count=1)
