"""
Multipart component - upload field demultiplexer.

Separates a multipart upload into named scalar text fields and the single
binary ``file`` field.

Invariants:
- Fields are consumed in arrival order, one at a time, each drained in full
- Duplicate names: last value wins
- Unknown names are drained and ignored
- Any unreadable or non-UTF-8 scalar field aborts the whole upload
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import closing, nullcontext
from typing import Any

from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from chasm.domain.entities import UploadRequest, UploadScalars
from chasm.domain.errors import MalformedFieldError

from .models import DemuxInput, DemuxOutput, MultipartField

logger = logging.getLogger(__name__)

FILE_FIELD = "file"
BODY_FIELD = "body"
DISPOSITION_HEADER = "content-disposition"

# Wire field name -> UploadScalars attribute
SCALAR_FIELDS: dict[str, str] = {
    "access_token": "access_token",
    "repo": "repo",
    "postfolder": "postfolder",
    "base_path": "base_path",
    "local_path": "base_path",
}


def drain_field(field: MultipartField) -> bytes:
    """Read a field's sub-stream to the end and release it."""
    chunks = field.chunks
    scope: Any = closing(chunks) if hasattr(chunks, "close") else nullcontext(chunks)
    buffer = bytearray()
    try:
        with scope:
            for chunk in chunks:
                buffer.extend(chunk)
    except Exception as e:
        raise MalformedFieldError(field.name, reason=f"read failed: {e}") from e
    return bytes(buffer)


def decode_scalar(name: str, data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedFieldError(name) from e


def demux(fields: Iterable[MultipartField]) -> UploadRequest:
    """
    Classify upload fields into an UploadRequest.

    Raises:
        MalformedFieldError: A field could not be read or decoded.
    """
    scalars: dict[str, str] = {}
    filename: str | None = None
    payload: bytes | None = None

    for field in fields:
        data = drain_field(field)

        if field.name == FILE_FIELD:
            filename = field.filename or ""
            payload = data
        elif field.name in SCALAR_FIELDS:
            scalars[SCALAR_FIELDS[field.name]] = decode_scalar(field.name, data)
        else:
            logger.debug("Ignoring unrecognized upload field %r", field.name)

    return UploadRequest(
        scalars=UploadScalars(**scalars),
        filename=filename,
        payload=payload,
    )


def iter_multipart_fields(content_type: str, body: Iterable[bytes]) -> Iterator[MultipartField]:
    """
    Parse a raw multipart/form-data body into MultipartFields in arrival order.

    Names, filenames and values stay bytes until they are decoded as strict
    UTF-8, so a non-UTF-8 scalar reaches ``decode_scalar`` intact.

    Raises:
        MalformedFieldError: Not multipart/form-data, a bad part header,
            or a body that is malformed or ends early.
    """
    mimetype, options = parse_options_header(content_type)
    boundary = options.get(b"boundary")
    if mimetype != b"multipart/form-data" or not boundary:
        raise MalformedFieldError(
            "content-type", reason="expected multipart/form-data with a boundary"
        )

    collector = _PartCollector()
    parser = MultipartParser(boundary, collector.callbacks())
    try:
        for chunk in body:
            if chunk:
                parser.write(chunk)
            yield from collector.take()
        parser.finalize()
    except MultipartParseError as e:
        raise MalformedFieldError(collector.current_name, reason=str(e)) from e

    yield from collector.take()
    if not collector.finished:
        raise MalformedFieldError(collector.current_name, reason="multipart body ended early")


def _header_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedFieldError(DISPOSITION_HEADER, reason="part header is not valid UTF-8") from e


class _PartCollector:
    """MultipartParser callbacks that gather each finished part into a MultipartField."""

    def __init__(self) -> None:
        self.finished = False
        self.current_name = BODY_FIELD
        self._completed: list[MultipartField] = []
        self._headers: dict[bytes, bytes] = {}
        self._header_field = bytearray()
        self._header_value = bytearray()
        self._filename: str | None = None
        self._data: list[bytes] = []

    def callbacks(self) -> dict[str, Any]:
        return {
            "on_part_begin": self.on_part_begin,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_headers_finished": self.on_headers_finished,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
            "on_end": self.on_end,
        }

    def take(self) -> list[MultipartField]:
        completed, self._completed = self._completed, []
        return completed

    def on_part_begin(self) -> None:
        self.current_name = BODY_FIELD
        self._headers = {}
        self._filename = None
        self._data = []

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field.extend(data[start:end])

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value.extend(data[start:end])

    def on_header_end(self) -> None:
        self._headers[bytes(self._header_field).lower()] = bytes(self._header_value)
        self._header_field.clear()
        self._header_value.clear()

    def on_headers_finished(self) -> None:
        disposition = self._headers.get(DISPOSITION_HEADER.encode("ascii"))
        if disposition is None:
            raise MalformedFieldError(DISPOSITION_HEADER, reason="part has no Content-Disposition")
        _, options = parse_options_header(disposition)
        if b"name" not in options:
            raise MalformedFieldError(DISPOSITION_HEADER, reason="part has no field name")
        self.current_name = _header_text(options[b"name"])
        filename = options.get(b"filename")
        self._filename = _header_text(filename) if filename is not None else None

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._data.append(data[start:end])

    def on_part_end(self) -> None:
        self._completed.append(
            MultipartField(name=self.current_name, chunks=self._data, filename=self._filename)
        )

    def on_end(self) -> None:
        self.finished = True


# --- Component Entry Point ---


def run(inp: DemuxInput) -> DemuxOutput:
    return DemuxOutput(request=demux(inp.fields))
