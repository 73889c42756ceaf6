"""Tests for ItunesClient."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest
from conftest import raw_record

from mypod.catalog.client import ItunesClient
from mypod.config import CatalogConfig
from mypod.exceptions import TransportError


def make_client(
    handler: Callable[[httpx.Request], httpx.Response],
    config: CatalogConfig | None = None,
) -> ItunesClient:
    """Create a client whose requests are served by ``handler``."""
    return ItunesClient(
        config=config,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def json_handler(
    payload: Any, status_code: int = 200, seen: list[httpx.Request] | None = None
) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload)

    return handler


class TestSearchRequest:
    """Tests for the outgoing search request."""

    def test_sends_search_parameters(self) -> None:
        seen: list[httpx.Request] = []
        client = make_client(json_handler({"results": []}, seen=seen))

        client.search_songs("the+war+on+drugs")

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "GET"
        assert request.url.host == "itunes.apple.com"
        assert request.url.path == "/search"
        assert request.url.params["term"] == "the+war+on+drugs"
        assert request.url.params["entity"] == "song"
        assert request.url.params["attribute"] == "artistTerm"
        assert request.url.params["limit"] == "20"

    def test_uses_configured_endpoint_and_limit(self) -> None:
        seen: list[httpx.Request] = []
        config = CatalogConfig(base_url="https://catalog.test/find", limit=5)
        client = make_client(json_handler({"results": []}, seen=seen), config)

        client.search_songs("geese")

        assert seen[0].url.host == "catalog.test"
        assert seen[0].url.params["limit"] == "5"


class TestSearchFiltering:
    """Tests for filtering results by artist name."""

    def test_keeps_only_matching_artist(self) -> None:
        payload = {
            "resultCount": 3,
            "results": [
                raw_record(artist_name="Refused", track_id=1),
                raw_record(artist_name="Refused Tribute Band", track_id=2),
                raw_record(artist_name=None, track_id=3),
            ],
        }
        client = make_client(json_handler(payload))

        records = client.search_songs("refused")

        assert [r.track_id for r in records] == [1]

    def test_skips_malformed_record_of_other_artist(self) -> None:
        payload = {
            "results": [
                raw_record(artist_name="Thrice Tribute", trackCount="many"),
                raw_record(artist_name="Thrice", track_id=500),
            ]
        }
        client = make_client(json_handler(payload))

        records = client.search_songs("thrice")

        assert [r.track_id for r in records] == [500]

    def test_matches_plus_term_against_spaced_name(self) -> None:
        payload = {"results": [raw_record(artist_name="The War On Drugs")]}
        client = make_client(json_handler(payload))

        records = client.search_songs("the+war+on+drugs")

        assert len(records) == 1
        assert records[0].artist_name == "The War On Drugs"

    @pytest.mark.parametrize(
        "payload",
        [{}, {"results": None}, {"results": "nope"}, []],
        ids=["missing", "null", "not_a_list", "top_level_list"],
    )
    def test_missing_results_is_empty(self, payload: Any) -> None:
        client = make_client(json_handler(payload))
        assert client.search_songs("thrice") == []


class TestSearchErrors:
    """Tests for transport failures."""

    def test_non_200_raises(self) -> None:
        client = make_client(json_handler({"errorMessage": "busy"}, status_code=503))

        with pytest.raises(TransportError, match="503"):
            client.search_songs("thrice")

    def test_timeout_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)

        with pytest.raises(TransportError, match="timed out") as exc_info:
            client.search_songs("thrice")
        assert isinstance(exc_info.value.__cause__, httpx.TimeoutException)

    def test_network_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(TransportError):
            client.search_songs("thrice")

    def test_invalid_json_raises(self) -> None:
        client = make_client(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(TransportError, match="invalid JSON"):
            client.search_songs("thrice")

    def test_malformed_record_raises(self) -> None:
        payload = {"results": [raw_record(track_id="not-a-number")]}
        client = make_client(json_handler(payload))

        with pytest.raises(TransportError, match="Malformed"):
            client.search_songs("thrice")


class TestClientLifecycle:
    def test_does_not_close_injected_client(self) -> None:
        http_client = httpx.Client(
            transport=httpx.MockTransport(json_handler({"results": []}))
        )
        with ItunesClient(http_client=http_client) as client:
            client.search_songs("thrice")

        assert not http_client.is_closed
        http_client.close()
