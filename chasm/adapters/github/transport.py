"""
HTTP commit transport for the GitHub contents API.

One PUT per call. Connection pooling, if any, is httpx's concern; this
adapter keeps no retry state.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from chasm.ports.transport import ResponseDecodeError, TransportError

logger = logging.getLogger(__name__)


class HttpxCommitTransport:
    """CommitTransportPort implementation using httpx."""

    def __init__(
        self,
        *,
        user_agent: str,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._user_agent = user_agent
        self._client = client or httpx.Client(timeout=timeout)

    def put(self, url: str, bearer_token: str, json_body: dict[str, Any]) -> Any:
        headers = {
            "User-Agent": self._user_agent,
            "Authorization": f"Bearer {bearer_token}",
            "Accept": "application/vnd.github+json",
        }

        try:
            response = self._client.put(url, json=json_body, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            logger.warning("PUT %s failed: %s", url, e)
            raise TransportError(f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise TransportError(_error_reason(response), status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ResponseDecodeError(f"Response body is not JSON: {e}") from e

    def close(self) -> None:
        self._client.close()


def _error_reason(response: httpx.Response) -> str:
    """Prefer the API's own error message when the body carries one."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or "request failed"

    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return response.reason_phrase or "request failed"
