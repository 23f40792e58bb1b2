"""
Content block variants.

A post body is a flat, ordered sequence of blocks. The set of block types is
closed; the wire representation is tagged by ``type``.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class HeaderBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["Header"] = "Header"
    text: str


class ParagraphBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["Paragraph"] = "Paragraph"
    text: str


class ImageBlock(BaseModel):
    """Reference to a previously uploaded file by its logical name."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Image"] = "Image"
    filename: str


class LinkBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["Link"] = "Link"
    title: str
    url: str


ContentBlock = Annotated[
    HeaderBlock | ParagraphBlock | ImageBlock | LinkBlock,
    Field(discriminator="type"),
]
