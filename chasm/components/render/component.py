"""
Render component - front-matter markdown document builder.

Turns a title, a timestamp and an ordered block sequence into a markdown
document prefixed with a TOML front-matter header:

    +++
    title = "<title>"
    date = 2024-06-15T12:00:00Z
    +++
    ## Heading
    Paragraph text

Invariants:
- Output is a pure function of the input (byte-identical on repeat calls)
- One line per block, in sequence order
- Block text is emitted verbatim (no markdown escaping)
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import UTC, datetime

from chasm.domain.blocks import (
    ContentBlock,
    HeaderBlock,
    ImageBlock,
    LinkBlock,
    ParagraphBlock,
)

from .models import RenderDocumentInput, RenderDocumentOutput

FRONT_MATTER_DELIMITER = "+++"
SUMMARY_MARKER = "<!-- more -->"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
TOML_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def format_timestamp(timestamp: datetime) -> str:
    """Format as ISO-8601 UTC with second precision. Naive values are taken as UTC."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


def escape_toml_string(value: str) -> str:
    """Escape a value for use inside a TOML basic string."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    # Remaining control characters are not allowed unescaped in basic strings
    return TOML_CONTROL_CHARS.sub(lambda m: f"\\u{ord(m.group()):04X}", escaped)


def render_front_matter(title: str | None, timestamp: datetime) -> str:
    return (
        f"{FRONT_MATTER_DELIMITER}\n"
        f'title = "{escape_toml_string(title or "")}"\n'
        f"date = {format_timestamp(timestamp)}\n"
        f"{FRONT_MATTER_DELIMITER}\n"
    )


def render_block(block: ContentBlock) -> str:
    """Render a single block as one newline-terminated markdown line."""
    if isinstance(block, HeaderBlock):
        return f"## {block.text}\n"
    elif isinstance(block, ParagraphBlock):
        return f"{block.text}\n"
    elif isinstance(block, ImageBlock):
        return f"![]({block.filename})\n"
    elif isinstance(block, LinkBlock):
        return f"[{block.title}]({block.url})\n"
    else:
        raise TypeError(f"Unknown block type: {type(block)}")


def render_document(
    title: str | None,
    timestamp: datetime,
    blocks: Sequence[ContentBlock],
    *,
    summary_marker: bool = False,
) -> bytes:
    """Render a complete document and return it UTF-8 encoded."""
    parts = [render_front_matter(title, timestamp)]
    parts.extend(render_block(block) for block in blocks)
    if summary_marker:
        parts.append(f"\n{SUMMARY_MARKER}\n")
    return "".join(parts).encode("utf-8")


# --- Component Entry Point ---


def run(inp: RenderDocumentInput) -> RenderDocumentOutput:
    data = render_document(
        inp.title,
        inp.timestamp,
        inp.blocks,
        summary_marker=inp.summary_marker,
    )
    return RenderDocumentOutput(data=data)
