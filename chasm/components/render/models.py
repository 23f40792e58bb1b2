"""
Render component input/output models.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from chasm.domain.blocks import ContentBlock


@dataclass(frozen=True)
class RenderDocumentInput:
    """Input for rendering a post into a front-matter markdown document."""

    timestamp: datetime
    blocks: Sequence[ContentBlock]
    title: str | None = None
    summary_marker: bool = False


@dataclass(frozen=True)
class RenderDocumentOutput:
    data: bytes
