"""Publish component models - frozen dataclass inputs and outputs."""

from collections.abc import Iterable
from dataclasses import dataclass

from chasm.components.multipart.models import MultipartField
from chasm.domain.entities import CommitResult, PostRequest
from chasm.domain.errors import PublishError


@dataclass(frozen=True)
class PublishSettings:
    """Values the publish pipeline takes from configuration."""

    api_url: str = "https://api.github.com"
    content_root: str = "content"
    document_commit_message: str = "Add post"
    image_commit_message: str = "Add image"
    summary_marker: bool = False


@dataclass(frozen=True)
class PublishDocumentInput:
    """Input for publishing a rendered post."""

    request: PostRequest


@dataclass(frozen=True)
class PublishDocumentOutput:
    """Output for publishing a rendered post."""

    request: PostRequest
    result: CommitResult | None
    error: PublishError | None
    success: bool
    logical_path: str | None = None


@dataclass(frozen=True)
class PublishImageInput:
    """Input for publishing an uploaded image from multipart fields."""

    fields: Iterable[MultipartField]


@dataclass(frozen=True)
class PublishImageOutput:
    """Output for publishing an uploaded image."""

    filename: str | None
    result: CommitResult | None
    error: PublishError | None
    success: bool
    logical_path: str | None = None
