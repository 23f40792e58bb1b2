"""
Commit transport port.

The remote destination talks to the content API through this interface
only. Implementations perform exactly one HTTP exchange per call and hold no
retry state.
"""

from __future__ import annotations

from typing import Any, Protocol


class CommitTransportPort(Protocol):
    def put(self, url: str, bearer_token: str, json_body: dict[str, Any]) -> Any:
        """
        Issue a create-or-update request and return the decoded JSON body.

        Raises:
            TransportError: Connection failure or non-2xx status.
            ResponseDecodeError: 2xx status whose body is not JSON.
        """
        ...


class TransportError(Exception):
    """The request did not complete successfully at the network/HTTP layer."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason)


class ResponseDecodeError(Exception):
    """The request succeeded but the body could not be decoded."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
