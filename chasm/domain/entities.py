from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from chasm.domain.blocks import ContentBlock

# --- Publish locations ---


class GithubLocation(BaseModel):
    """Remote content repository addressed through the contents API."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Github"] = "Github"
    repo: str
    access_token: str


class LocalLocation(BaseModel):
    """Directory on the local filesystem acting as the content root's parent."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Local"] = "Local"
    path: str


PublishLocation = Annotated[GithubLocation | LocalLocation, Field(discriminator="type")]


# --- Requests ---


class PostRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime
    postfolder: str
    title: str | None = None
    content: list[ContentBlock] = Field(default_factory=list)
    location: PublishLocation


@dataclass(frozen=True)
class UploadScalars:
    """Text fields collected from a multipart upload. All optional on the wire."""

    access_token: str | None = None
    repo: str | None = None
    postfolder: str | None = None
    base_path: str | None = None


@dataclass(frozen=True)
class UploadRequest:
    scalars: UploadScalars
    filename: str | None = None
    payload: bytes | None = None


# --- Store inputs/outputs ---


@dataclass(frozen=True)
class RenderedDocument:
    """Bytes to store plus their path under the destination root."""

    data: bytes
    logical_path: str


@dataclass(frozen=True)
class CommitResult:
    public_url: str | None = None


# --- Remote API response shape ---


class CommitResponseContent(BaseModel):
    download_url: str


class CommitResponse(BaseModel):
    content: CommitResponseContent
