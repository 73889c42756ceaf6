"""Album cover art fetching with caching."""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)


class CoverFetcher:
    """Cover art downloader with a per-instance URL cache.

    Cover art is optional, so every failure is logged and turned into
    ``None`` instead of an exception.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize an empty cover cache.

        Args:
            timeout: Request timeout in seconds.
            http_client: Optional httpx client; one is created lazily if
                not provided.
        """
        self._timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None
        self._cache: dict[str, bytes] = {}

    def _get_http_client(self) -> httpx.Client:
        """Get or create the HTTP client for artwork downloads."""
        if self._http_client is None:
            self._http_client = httpx.Client(timeout=self._timeout)
        return self._http_client

    def fetch(self, url: str | None) -> bytes | None:
        """Fetch cover art from URL with caching.

        Args:
            url: Cover art URL.

        Returns:
            Cover image bytes or None if unavailable.
        """
        if not url:
            return None

        if url in self._cache:
            logger.debug("Cover cache hit: %s", url)
            return self._cache[url]

        try:
            response = self._get_http_client().get(url, follow_redirects=True)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Failed to fetch cover from %s: %s", url, e)
            return None

        data = response.content
        if not data:
            logger.warning("Empty cover response from %s", url)
            return None
        self._cache[url] = data
        logger.debug("Fetched and cached cover: %s (%d bytes)", url, len(data))
        return data

    def clear(self) -> None:
        """Clear the cover art cache."""
        self._cache.clear()

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def __len__(self) -> int:
        """Get the number of cached cover images."""
        return len(self._cache)
