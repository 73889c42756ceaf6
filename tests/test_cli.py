"""Tests for the mypod CLI."""

import json
import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner
from conftest import FakeCatalog, raw_record

from mypod.catalog.models import CatalogRecord
from mypod.cli import main
from mypod.config import CatalogConfig
from mypod.exceptions import TransportError

RECORDS = {
    "thrice": [
        CatalogRecord.model_validate(raw_record(track_id=500)),
        CatalogRecord.model_validate(
            raw_record(track_id=501, track_name="Atlantic", trackTimeMillis=288000)
        ),
    ],
}


class StubItunesClient(FakeCatalog):
    """Stands in for ItunesClient, serving canned records."""

    def __init__(self, config: CatalogConfig | None = None) -> None:
        super().__init__(RECORDS)

    def __enter__(self) -> "StubItunesClient":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class FailingItunesClient(StubItunesClient):
    def search_songs(self, term: str) -> list[CatalogRecord]:
        raise TransportError(f"Catalog request timed out: {term}")


@pytest.fixture(autouse=True)
def _isolate(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Isolate from the environment, the network and global logging state."""
    for key in list(os.environ.keys()):
        if key.startswith("MYPOD_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MYPOD_SEARCH_TERMS", '["thrice"]')
    monkeypatch.setenv("MYPOD_FETCH_COVERS", "false")
    monkeypatch.setattr("mypod.library.ItunesClient", StubItunesClient)
    monkeypatch.setattr("mypod.cli.ItunesClient", StubItunesClient)

    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def root(tmp_path: Path) -> Path:
    return tmp_path / "library"


def invoke(root: Path, *args: str):
    return CliRunner().invoke(main, ["--root", str(root), *args])


class TestInitCommand:
    """Tests for `mypod init`."""

    def test_populates_library(self, root: Path) -> None:
        result = invoke(root, "init")

        assert result.exit_code == 0, result.output
        assert "1 artists, 1 albums, 2 songs" in result.output
        assert "Created playlist Library" in result.output
        assert "Created playlist Favorites" in result.output
        assert (root / "mypod.db").exists()

    def test_second_run_is_skipped(self, root: Path) -> None:
        invoke(root, "init")

        result = invoke(root, "init")

        assert result.exit_code == 0, result.output
        assert "ingestion skipped" in result.output
        assert "Created playlist" not in result.output

    def test_failure_exits_with_error(
        self, root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("mypod.library.ItunesClient", FailingItunesClient)

        result = invoke(root, "init")

        assert result.exit_code == 1
        assert "Failed to ingest search term 'thrice'" in result.output


class TestSearchCommand:
    """Tests for `mypod search`."""

    def test_table_output(self, root: Path) -> None:
        result = invoke(root, "search", "thrice")

        assert result.exit_code == 0, result.output
        assert "Atlantic" in result.output

    def test_json_output(self, root: Path) -> None:
        result = invoke(root, "search", "thrice", "--json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [r["trackId"] for r in data] == [500, 501]

    def test_no_results(self, root: Path) -> None:
        result = invoke(root, "search", "nobody")

        assert result.exit_code == 0
        assert "No records matched 'nobody'" in result.output


class TestListCommands:
    """Tests for `mypod playlists` and `mypod songs`."""

    def test_playlists_empty(self, root: Path) -> None:
        result = invoke(root, "playlists")

        assert result.exit_code == 0, result.output
        assert "No playlists" in result.output

    def test_playlists_after_init(self, root: Path) -> None:
        invoke(root, "init")

        result = invoke(root, "playlists")

        assert result.exit_code == 0, result.output
        assert "Library" in result.output
        assert "Favorites" in result.output

    def test_songs_by_genre(self, root: Path) -> None:
        invoke(root, "init")

        result = invoke(root, "songs", "--genre", "rock")

        assert result.exit_code == 0, result.output
        assert "Songs (2)" in result.output
        assert "4:48" in result.output

    def test_songs_in_playlist(self, root: Path) -> None:
        invoke(root, "init")

        favorites = invoke(root, "songs", "--playlist", "2")
        library = invoke(root, "songs", "--playlist", "1")

        assert "Songs (0)" in favorites.output
        assert "Songs (2)" in library.output


class TestConfiguration:
    def test_invalid_settings_reported(
        self, root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MYPOD_CATALOG_LIMIT", "0")

        result = invoke(root, "playlists")

        assert result.exit_code == 1
        assert "Configuration error" in result.output
