"""MusicThread API client for fetching a thread and its links.

Only the public "get thread" endpoint is used:
    GET {base_url}/api/v0/thread/{thread_key}

The base URL can be overridden with the MUSICTHREAD_API_URL environment
variable or the ``[api] base_url`` config setting. One attempt per call; there
are no retries and httpx's default timeout applies.
"""

import logging
import os

import httpx

from .errors import UpstreamRejected, UpstreamUnreachable

logger = logging.getLogger(__name__)

API_BASE_URL = os.environ.get("MUSICTHREAD_API_URL", "https://musicthread.app")

ACCEPT_HEADER = "application/json;charset=UTF-8"


class MusicThreadClient:
    """Client for MusicThread's public JSON API."""

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self._client = httpx.Client(
            headers={"Accept": ACCEPT_HEADER},
            follow_redirects=True,
            transport=transport,
        )

    def thread_url(self, thread_key: str) -> str:
        return f"{self.base_url}/api/v0/thread/{thread_key}"

    def fetch_thread(self, thread_key: str) -> dict:
        """Fetch the raw "get thread" payload for ``thread_key``.

        Raises:
            UpstreamUnreachable: the URL could not be built, the request failed
                or the body was not JSON.
            UpstreamRejected: MusicThread answered with status >= 400.
        """
        url = self.thread_url(thread_key)
        logger.debug("Fetching %s", url)

        try:
            response = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UpstreamUnreachable(f"Request to {url} failed: {e!r}") from e

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.info(
                "MusicThread rejected thread %s with HTTP %d",
                thread_key,
                response.status_code,
            )
            raise UpstreamRejected(response.status_code, message)

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamUnreachable(
                f"Response from {url} is not valid JSON: {e}"
            ) from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str | None:
        """Extract ``{"error": "..."}`` from an error body, if there is one."""
        try:
            data = response.json()
        except ValueError:
            return None
        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, str) and error:
                return error
        return None

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
