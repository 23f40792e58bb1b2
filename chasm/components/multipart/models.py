"""
Multipart component input/output models.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from chasm.domain.entities import UploadRequest


@dataclass(frozen=True)
class MultipartField:
    """
    One named field of a multipart upload.

    ``chunks`` is the field's own byte sub-stream; it is drained completely
    before the next field is read.
    """

    name: str
    chunks: Iterable[bytes]
    filename: str | None = None


@dataclass(frozen=True)
class DemuxInput:
    fields: Iterable[MultipartField]


@dataclass(frozen=True)
class DemuxOutput:
    request: UploadRequest
