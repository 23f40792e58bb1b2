"""
Destinations component - where rendered content is stored.

Two destinations exist and the set is closed:
- RemoteDestination: commits through the content API of a hosted repository
- LocalDestination: writes below a directory on the local filesystem

Both perform exactly one externally visible write per store() call, never
retry, and never clean up after a partial failure.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from urllib.parse import quote

from pydantic import ValidationError

from chasm.domain.entities import (
    CommitResponse,
    CommitResult,
    GithubLocation,
    LocalLocation,
    RenderedDocument,
)
from chasm.domain.errors import (
    LocalWriteFailedError,
    MalformedFieldError,
    MissingFieldError,
    RemoteCommitFailedError,
    RemoteResponseMalformedError,
)

from .models import DEFAULT_API_URL, CommitContent
from .ports import CommitTransportPort, FileSystemPort, ResponseDecodeError, TransportError

logger = logging.getLogger(__name__)

REPOSITORY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


class RemoteDestination:
    """Commit content to a repository through its contents API."""

    def __init__(
        self,
        repository: str,
        credential: str,
        *,
        transport: CommitTransportPort,
        api_url: str = DEFAULT_API_URL,
    ) -> None:
        self.repository = repository
        self._credential = credential
        self._transport = transport
        self._api_url = api_url.rstrip("/")

    def contents_url(self, logical_path: str) -> str:
        return f"{self._api_url}/repos/{quote(self.repository)}/contents/{quote(logical_path)}"

    def store(self, document: RenderedDocument, *, message: str) -> CommitResult:
        """
        Create or update ``document.logical_path`` in the repository.

        Raises:
            RemoteCommitFailedError: Transport or HTTP failure.
            RemoteResponseMalformedError: Body did not match the contents API shape.
        """
        body = CommitContent.from_bytes(message, document.data, document.logical_path)
        url = self.contents_url(document.logical_path)
        logger.info("Committing %s to %s", document.logical_path, self.repository)

        try:
            raw = self._transport.put(url, self._credential, body.to_json())
        except TransportError as e:
            raise RemoteCommitFailedError(e.reason, status_code=e.status_code) from e
        except ResponseDecodeError as e:
            raise RemoteResponseMalformedError(e.reason) from e

        try:
            response = CommitResponse.model_validate(raw)
        except ValidationError as e:
            raise RemoteResponseMalformedError(
                f"expected content.download_url ({e.error_count()} validation errors)"
            ) from e

        return CommitResult(public_url=response.content.download_url)


class LocalDestination:
    """Write content to ``base_path/logical_path`` on the local filesystem."""

    def __init__(self, base_path: str | Path, *, filesystem: FileSystemPort) -> None:
        self.base_path = Path(base_path)
        self._filesystem = filesystem

    def target_path(self, logical_path: str) -> Path:
        """
        Resolve the file path for a logical path.

        Raises:
            ValueError: The result would escape base_path.
        """
        root = self.base_path.resolve()
        target = (root / logical_path).resolve()
        if not target.is_relative_to(root) or target == root:
            raise ValueError(f"Path escapes base path: {logical_path}")
        return target

    def store(self, document: RenderedDocument, *, message: str) -> CommitResult:
        """
        Write the document, replacing any existing file.

        Raises:
            LocalWriteFailedError: Path escape, directory creation or write failure.
        """
        try:
            target = self.target_path(document.logical_path)
        except ValueError as e:
            raise LocalWriteFailedError(document.logical_path, e) from e

        try:
            self._filesystem.create_all_dirs(target.parent)
            self._filesystem.write_file(target, document.data)
        except OSError as e:
            raise LocalWriteFailedError(str(target), e) from e

        logger.info("%s: wrote %s", message, target)
        return CommitResult(public_url=None)


Destination = RemoteDestination | LocalDestination


def validate_repository(repository: str) -> None:
    """Require an owner/name identifier so it cannot change the API request target."""
    if not REPOSITORY_PATTERN.match(repository) or any(
        part in (".", "..") for part in repository.split("/")
    ):
        raise MalformedFieldError("repo", reason="expected an owner/name repository identifier")


def resolve_destination(
    location: GithubLocation | LocalLocation,
    *,
    transport: CommitTransportPort,
    filesystem: FileSystemPort,
    api_url: str = DEFAULT_API_URL,
) -> Destination:
    """
    Build the destination for a publish location.

    Raises:
        MissingFieldError: A field the location needs is empty.
        MalformedFieldError: The repository is not an owner/name identifier.
    """
    if isinstance(location, GithubLocation):
        if not location.repo:
            raise MissingFieldError("repo")
        if not location.access_token:
            raise MissingFieldError("access_token")
        validate_repository(location.repo)
        return RemoteDestination(
            location.repo,
            location.access_token,
            transport=transport,
            api_url=api_url,
        )
    elif isinstance(location, LocalLocation):
        if not location.path:
            raise MissingFieldError("path")
        return LocalDestination(location.path, filesystem=filesystem)
    else:
        raise TypeError(f"Unknown location type: {type(location)}")
