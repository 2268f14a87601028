"""HTTP fetching for sitemaps and documentation pages."""

import logging
from typing import Protocol

import httpx

from docsync.config import Settings
from docsync.exceptions import FetchError

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Anything that can turn a URL into response text."""

    def fetch_text(self, url: str) -> str: ...


class HttpFetcher:
    """Blocking fetcher backed by httpx.

    Failures are never retried: any network error or non-success status
    raises FetchError and aborts the run.
    """

    def __init__(
        self,
        user_agent: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.user_agent = user_agent
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpFetcher":
        return cls(settings.user_agent, settings.request_timeout_seconds)

    def _get_client(self) -> httpx.Client:
        """Lazy load httpx client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            )
        return self._client

    def fetch_text(self, url: str) -> str:
        """Fetch a URL and return its body as text.

        Raises:
            FetchError: On network failure or a non-2xx response.
        """
        logger.debug(f"GET {url}")
        try:
            response = self._get_client().get(url)
        except httpx.HTTPError as e:
            raise FetchError(url, str(e)) from e

        if not response.is_success:
            raise FetchError(url, f"HTTP {response.status_code}", status_code=response.status_code)
        return response.text

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
