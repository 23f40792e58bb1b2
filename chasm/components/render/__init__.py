"""Render component - front-matter markdown document builder."""

from .component import (
    FRONT_MATTER_DELIMITER,
    SUMMARY_MARKER,
    escape_toml_string,
    format_timestamp,
    render_block,
    render_document,
    render_front_matter,
    run,
)
from .models import RenderDocumentInput, RenderDocumentOutput

__all__ = [
    # Entry points
    "run",
    "render_document",
    # Helpers
    "escape_toml_string",
    "format_timestamp",
    "render_block",
    "render_front_matter",
    # Constants
    "FRONT_MATTER_DELIMITER",
    "SUMMARY_MARKER",
    # Models
    "RenderDocumentInput",
    "RenderDocumentOutput",
]
