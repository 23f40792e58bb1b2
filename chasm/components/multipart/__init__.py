"""Multipart component - upload field demultiplexer."""

from .component import (
    FILE_FIELD,
    SCALAR_FIELDS,
    decode_scalar,
    demux,
    drain_field,
    iter_multipart_fields,
    run,
)
from .models import DemuxInput, DemuxOutput, MultipartField

__all__ = [
    # Entry points
    "run",
    "demux",
    # Helpers
    "decode_scalar",
    "drain_field",
    "iter_multipart_fields",
    # Constants
    "FILE_FIELD",
    "SCALAR_FIELDS",
    # Models
    "DemuxInput",
    "DemuxOutput",
    "MultipartField",
]
