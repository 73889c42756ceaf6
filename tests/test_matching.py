"""Tests for artist-name matching."""

import pytest

from mypod.catalog.matching import matches_artist, normalize_name


class TestNormalizeName:
    """Tests for normalize_name."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("the+war+on+drugs", "the war on drugs"),
            ("The   War On Drugs", "the war on drugs"),
            ("  Thrice  ", "thrice"),
            ("run++the + jewels", "run the jewels"),
            ("16+Horsepower", "16 horsepower"),
            ("Viagra\tBoys\n", "viagra boys"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalizes(self, raw: str | None, expected: str) -> None:
        assert normalize_name(raw) == expected

    def test_url_term_equals_display_name(self) -> None:
        """Plus-separated terms and spaced names normalize identically."""
        assert normalize_name("the+war+on+drugs") == normalize_name(
            "The   War On Drugs"
        )


class TestMatchesArtist:
    """Tests for matches_artist."""

    def test_exact_artist_matches(self) -> None:
        assert matches_artist("refused", "Refused")

    def test_tribute_band_excluded(self) -> None:
        """Loose catalog matches with extra words are excluded."""
        assert not matches_artist("refused", "Refused Tribute Band")

    def test_missing_artist_name_excluded(self) -> None:
        assert not matches_artist("refused", None)

    def test_plus_term_matches_spaced_name(self) -> None:
        assert matches_artist("salvatore+ganacci", "Salvatore Ganacci")
