"""
Publish error taxonomy.

Every failure the publish pipeline can report is one of the subclasses of
PublishError below. Each carries a stable ``code`` and, where it applies,
the offending field or the wrapped cause so callers can branch on kind.
"""

from __future__ import annotations


class PublishError(Exception):
    """Base class for publish errors."""

    code = "PUBLISH_ERROR"
    field: str | None = None

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MissingFieldError(PublishError):
    """A required field was absent or empty."""

    code = "MISSING_FIELD"

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing required field: {field}")


class MalformedFieldError(PublishError):
    """A field could not be read or is not valid text."""

    code = "MALFORMED_FIELD"

    def __init__(self, field: str, reason: str = "not valid UTF-8 text") -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Malformed field '{field}': {reason}")


class RemoteCommitFailedError(PublishError):
    """The commit call to the remote content API did not succeed."""

    code = "REMOTE_COMMIT_FAILED"

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        self.reason = reason
        self.status_code = status_code
        if status_code is not None:
            message = f"Remote commit failed (HTTP {status_code}): {reason}"
        else:
            message = f"Remote commit failed: {reason}"
        super().__init__(message)


class RemoteResponseMalformedError(PublishError):
    """The remote content API answered with an unexpected body."""

    code = "REMOTE_RESPONSE_MALFORMED"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Remote response malformed: {detail}")


class LocalWriteFailedError(PublishError):
    """Creating directories or writing the file under the local root failed."""

    code = "LOCAL_WRITE_FAILED"

    def __init__(self, path: str, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Local write to {path} failed: {cause}")
