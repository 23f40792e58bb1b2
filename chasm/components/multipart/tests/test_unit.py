"""
Multipart component unit tests.

Tests for field classification, ordering and failure handling.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from chasm.components.multipart import (
    DemuxInput,
    MultipartField,
    demux,
    drain_field,
    iter_multipart_fields,
    run,
)
from chasm.domain.entities import UploadScalars
from chasm.domain.errors import MalformedFieldError

# --- Helpers ---


def text(name: str, value: str) -> MultipartField:
    return MultipartField(name=name, chunks=[value.encode("utf-8")])


def file_field(data: bytes, filename: str | None = "img.png") -> MultipartField:
    # Split into several chunks to exercise buffering
    chunks = [data[i : i + 3] for i in range(0, len(data), 3)]
    return MultipartField(name="file", chunks=chunks, filename=filename)


class BrokenStream:
    """Chunk iterator that fails part way through."""

    def __init__(self) -> None:
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        yield b"par"
        raise OSError("unexpected end of multipart body")

    def close(self) -> None:
        self.closed = True


# --- Tests ---


class TestDemux:
    def test_classifies_fields(self) -> None:
        payload = b"\x89PNG\r\n\x1a\nbinary"
        upload = demux(
            [
                text("repo", "r1"),
                text("access_token", "t1"),
                text("postfolder", "p1"),
                file_field(payload),
            ]
        )

        assert upload.filename == "img.png"
        assert upload.payload == payload
        assert upload.scalars == UploadScalars(repo="r1", access_token="t1", postfolder="p1")

    def test_duplicate_scalar_last_wins(self) -> None:
        upload = demux([text("repo", "a"), text("repo", "b")])
        assert upload.scalars.repo == "b"

    def test_duplicate_file_last_wins(self) -> None:
        upload = demux([file_field(b"first", "a.png"), file_field(b"second", "b.png")])
        assert upload.filename == "b.png"
        assert upload.payload == b"second"

    def test_local_path_alias(self) -> None:
        upload = demux([text("local_path", "/srv/site")])
        assert upload.scalars.base_path == "/srv/site"

    def test_base_path_name(self) -> None:
        upload = demux([text("base_path", "/srv/site")])
        assert upload.scalars.base_path == "/srv/site"

    def test_unknown_fields_ignored(self) -> None:
        upload = demux([text("color", "blue"), text("repo", "r1")])
        assert upload.scalars == UploadScalars(repo="r1")

    def test_no_file_field(self) -> None:
        upload = demux([text("repo", "r1")])
        assert upload.filename is None
        assert upload.payload is None

    def test_file_without_filename(self) -> None:
        upload = demux([file_field(b"data", filename=None)])
        assert upload.filename == ""
        assert upload.payload == b"data"

    def test_invalid_utf8_aborts(self) -> None:
        fields = [
            text("repo", "r1"),
            MultipartField(name="access_token", chunks=[b"\xff\xfe"]),
            file_field(b"data"),
        ]
        with pytest.raises(MalformedFieldError) as exc_info:
            demux(fields)
        assert exc_info.value.field == "access_token"

    def test_unknown_field_with_binary_content_is_not_decoded(self) -> None:
        upload = demux([MultipartField(name="extra", chunks=[b"\xff"]), text("repo", "r")])
        assert upload.scalars.repo == "r"

    def test_read_failure_aborts(self) -> None:
        stream = BrokenStream()
        with pytest.raises(MalformedFieldError) as exc_info:
            demux([MultipartField(name="postfolder", chunks=stream)])
        assert exc_info.value.field == "postfolder"
        assert stream.closed

    def test_fields_read_sequentially(self) -> None:
        events: list[str] = []

        def chunks(name: str) -> Iterator[bytes]:
            events.append(f"start {name}")
            yield name.encode()
            events.append(f"end {name}")

        def fields() -> Iterator[MultipartField]:
            for name in ("repo", "postfolder"):
                events.append(f"field {name}")
                yield MultipartField(name=name, chunks=chunks(name))

        demux(fields())

        assert events == [
            "field repo",
            "start repo",
            "end repo",
            "field postfolder",
            "start postfolder",
            "end postfolder",
        ]


def test_drain_field_joins_chunks() -> None:
    field = MultipartField(name="file", chunks=[b"ab", b"", b"cd"])
    assert drain_field(field) == b"abcd"


BOUNDARY = "chasmboundary"
CONTENT_TYPE = f"multipart/form-data; boundary={BOUNDARY}"


def multipart_body(*parts: tuple[str, bytes, str | None]) -> bytes:
    body = bytearray()
    for name, value, filename in parts:
        disposition = f'form-data; name="{name}"'
        if filename is not None:
            disposition += f'; filename="{filename}"'
        body += f"--{BOUNDARY}\r\nContent-Disposition: {disposition}\r\n\r\n".encode()
        body += value + b"\r\n"
    body += f"--{BOUNDARY}--\r\n".encode()
    return bytes(body)


class TestIterMultipartFields:
    def test_fields_in_arrival_order(self) -> None:
        body = multipart_body(
            ("repo", b"a", None),
            ("file", b"\x89PNG\r\n\x1a\n", "pic.png"),
            ("repo", b"b", None),
        )

        fields = list(iter_multipart_fields(CONTENT_TYPE, [body]))

        assert [(f.name, f.filename) for f in fields] == [
            ("repo", None),
            ("file", "pic.png"),
            ("repo", None),
        ]
        upload = demux(fields)
        assert upload.scalars.repo == "b"
        assert upload.filename == "pic.png"
        assert upload.payload == b"\x89PNG\r\n\x1a\n"

    def test_byte_at_a_time(self) -> None:
        body = multipart_body(("postfolder", b"p1", None), ("file", b"data", "a.png"))

        upload = demux(iter_multipart_fields(CONTENT_TYPE, [body[i : i + 1] for i in range(len(body))]))

        assert upload.scalars.postfolder == "p1"
        assert upload.payload == b"data"

    def test_invalid_utf8_scalar_kept_as_bytes(self) -> None:
        body = multipart_body(("repo", b"\xc3\x28", None), ("file", b"data", "a.png"))

        with pytest.raises(MalformedFieldError) as exc_info:
            demux(iter_multipart_fields(CONTENT_TYPE, [body]))
        assert exc_info.value.field == "repo"

    def test_non_utf8_field_name(self) -> None:
        body = (
            f"--{BOUNDARY}\r\n".encode()
            + b'Content-Disposition: form-data; name="\xff"\r\n\r\nx\r\n'
            + f"--{BOUNDARY}--\r\n".encode()
        )

        with pytest.raises(MalformedFieldError) as exc_info:
            list(iter_multipart_fields(CONTENT_TYPE, [body]))
        assert exc_info.value.field == "content-disposition"

    def test_part_without_disposition(self) -> None:
        body = f"--{BOUNDARY}\r\nContent-Type: text/plain\r\n\r\nx\r\n--{BOUNDARY}--\r\n".encode()

        with pytest.raises(MalformedFieldError) as exc_info:
            list(iter_multipart_fields(CONTENT_TYPE, [body]))
        assert exc_info.value.field == "content-disposition"

    def test_truncated_body(self) -> None:
        body = multipart_body(("repo", b"me/blog", None), ("file", b"data", "a.png"))
        truncated = body[: body.index(b"data") + 2]

        fields = iter_multipart_fields(CONTENT_TYPE, [truncated])

        assert next(fields).name == "repo"
        with pytest.raises(MalformedFieldError) as exc_info:
            next(fields)
        assert exc_info.value.field == "file"

    @pytest.mark.parametrize(
        "content_type",
        ["", "application/x-www-form-urlencoded", "multipart/form-data", "text/plain; boundary=x"],
    )
    def test_requires_multipart_content_type(self, content_type: str) -> None:
        with pytest.raises(MalformedFieldError) as exc_info:
            list(iter_multipart_fields(content_type, [b"repo=me%2Fblog"]))
        assert exc_info.value.field == "content-type"


def test_run_entry_point() -> None:
    out = run(DemuxInput(fields=[text("postfolder", "p")]))
    assert out.request.scalars.postfolder == "p"
