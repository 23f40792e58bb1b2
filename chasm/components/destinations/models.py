"""
Destinations component models.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class CommitContent:
    """Body of a create-or-update contents call."""

    message: str
    content: str
    path: str

    @classmethod
    def from_bytes(cls, message: str, data: bytes, path: str) -> CommitContent:
        return cls(
            message=message,
            content=base64.b64encode(data).decode("ascii"),
            path=path,
        )

    def to_json(self) -> dict[str, str]:
        return {"message": self.message, "content": self.content, "path": self.path}
