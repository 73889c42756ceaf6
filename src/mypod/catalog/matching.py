"""Artist-name matching for catalog search results.

The iTunes search endpoint matches on artist terms loosely, so results
for "refused" include tribute bands and side projects. Only records whose
normalized artist name equals the normalized search term are kept.
"""

import re

# Runs of '+' (URL-style spaces) and whitespace collapse to a single space
_SEPARATOR_RE = re.compile(r"[+\s]+")


def normalize_name(name: str | None) -> str:
    """Normalize an artist name or search term for comparison.

    Lowercases, collapses runs of ``+`` and whitespace to a single space
    and trims the result.

    Args:
        name: Artist name or search term. ``None`` normalizes to "".

    Returns:
        Normalized string.

    Examples:
        >>> normalize_name("the+war+on+drugs")
        'the war on drugs'
        >>> normalize_name("  The   War On Drugs ")
        'the war on drugs'
    """
    if name is None:
        return ""
    return _SEPARATOR_RE.sub(" ", name.lower()).strip()


def matches_artist(term: str, artist_name: str | None) -> bool:
    """Check whether a result's artist name matches the search term exactly.

    Records without an artist name never match.
    """
    if artist_name is None:
        return False
    return normalize_name(term) == normalize_name(artist_name)
