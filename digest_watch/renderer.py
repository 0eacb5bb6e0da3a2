"""
Rendering of parsed digest blocks.

Two targets are supported:
- render_rich: a rich Text for terminal display (bold spans styled bold,
  headings emphasized, list items bulleted)
- render_markdown: normalized markdown text, useful for exports and tests
"""

from __future__ import annotations

from rich.console import Group
from rich.text import Text

from .types import Block, Bold, Heading, ListBlock, Paragraph, Spacer, Span


HEADING_STYLES = {1: "bold underline", 2: "bold", 3: "bold italic"}
BULLET = "•"


def render_rich(blocks: list[Block], accent: str = "cyan") -> Group:
    """Build a rich renderable group from parsed blocks."""
    lines: list[Text] = []
    for block in blocks:
        if isinstance(block, Spacer):
            lines.append(Text(""))
        elif isinstance(block, Heading):
            line = _spans_to_text(block.spans)
            line.stylize(HEADING_STYLES.get(block.level, "bold"))
            lines.append(line)
        elif isinstance(block, ListBlock):
            for item in block.items:
                line = Text(f"  {BULLET} ", style=accent)
                line.append_text(_spans_to_text(item))
                lines.append(line)
        elif isinstance(block, Paragraph):
            lines.append(_spans_to_text(block.spans))
    return Group(*lines)


def render_markdown(blocks: list[Block]) -> str:
    """Render blocks back to markdown. Numbered lists come out as bullets."""
    out: list[str] = []
    for block in blocks:
        if isinstance(block, Spacer):
            out.append("")
        elif isinstance(block, Heading):
            out.append(f"{'#' * block.level} {_spans_to_markdown(block.spans)}")
        elif isinstance(block, ListBlock):
            out.extend(f"- {_spans_to_markdown(item)}" for item in block.items)
        elif isinstance(block, Paragraph):
            out.append(_spans_to_markdown(block.spans))
    return "\n".join(out)


def _spans_to_text(spans: tuple[Span, ...]) -> Text:
    text = Text()
    for span in spans:
        text.append(span.text, style="bold" if isinstance(span, Bold) else None)
    return text


def _spans_to_markdown(spans: tuple[Span, ...]) -> str:
    return "".join(f"**{span.text}**" if isinstance(span, Bold) else span.text for span in spans)
