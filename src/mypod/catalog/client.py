"""iTunes Search API client."""

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError as PydanticValidationError

from mypod.catalog.matching import matches_artist
from mypod.catalog.models import CatalogRecord
from mypod.config import CatalogConfig
from mypod.exceptions import TransportError

logger = logging.getLogger(__name__)


class CatalogProtocol(Protocol):
    """Protocol for catalog clients.

    This protocol enables dependency injection and testing.
    Implement this protocol to create fake catalogs for testing.
    """

    def search_songs(self, term: str) -> list[CatalogRecord]:
        """Fetch song records whose artist matches the search term."""
        ...


class ItunesClient:
    """Production iTunes Search API client.

    Performs one blocking GET per search term and filters the results down
    to records whose artist name matches the term exactly (after
    normalization). Implements CatalogProtocol.
    """

    def __init__(
        self,
        config: CatalogConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional catalog configuration. Uses defaults if not provided.
            http_client: Optional httpx client. Creates one if not provided;
                a client passed in is not closed by this instance.
        """
        self._config = config or CatalogConfig()
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=self._config.timeout)

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "ItunesClient":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def search_songs(self, term: str) -> list[CatalogRecord]:
        """Search songs by artist term.

        Args:
            term: Artist search term, e.g. "the+war+on+drugs".

        Returns:
            Records whose normalized artistName equals the normalized term,
            in the order the catalog returned them.

        Raises:
            TransportError: On timeout, network failure, non-200 status or
                an unparseable response body.
        """
        params = {
            "term": term,
            "entity": "song",
            "attribute": "artistTerm",
            "limit": self._config.limit,
        }
        logger.debug("Searching catalog: %s", term)
        try:
            response = self._http.get(
                self._config.base_url,
                params=params,
                timeout=self._config.timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning("Catalog request timed out for '%s'", term)
            raise TransportError(f"Catalog request timed out: {term}") from e
        except httpx.HTTPError as e:
            logger.warning("Catalog request failed for '%s': %s", term, e)
            raise TransportError(f"Catalog request failed: {e}") from e

        if response.status_code != 200:
            raise TransportError(
                f"Catalog returned HTTP {response.status_code} for '{term}'"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"Catalog returned invalid JSON for '{term}'") from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            logger.debug("No results array in catalog response for '%s'", term)
            return []

        # Filter before validating: other artists' records are never parsed
        matched = [
            self._parse_record(raw, term)
            for raw in results
            if not isinstance(raw, dict) or matches_artist(term, _artist_name(raw))
        ]

        logger.debug(
            "Catalog returned %d results for '%s' (%d matched artist)",
            len(results),
            term,
            len(matched),
        )
        return matched

    def _parse_record(self, raw: Any, term: str) -> CatalogRecord:
        """Validate a single raw result."""
        try:
            return CatalogRecord.model_validate(raw)
        except PydanticValidationError as e:
            raise TransportError(f"Malformed catalog record for '{term}': {e}") from e


def _artist_name(raw: dict[str, Any]) -> str | None:
    name = raw.get("artistName")
    return name if isinstance(name, str) else None
