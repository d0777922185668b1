#!/usr/bin/env python3
"""
Top Genre Extraction

The artist_genres column holds a printed Python list such as
"['pop', 'dance pop']" (or "[]" when Spotify has no genres for the artist).
The dashboard only needs one label per track, so the first listed genre is
used as the track's primary genre.

Caveat: the string is split naively on commas. A genre name containing a
comma, nested quotes or malformed brackets will be mis-parsed and the first
comma-separated token wins. Every view buckets on this exact label, so the
behavior is kept as-is rather than swapped for a real literal parser.
"""

from typing import Optional

from trackdash.pipeline.config import UNKNOWN_GENRE

EMPTY_LIST_MARKER = "[]"
QUOTE_CHARS = ("'", '"')


def _strip_quote(piece: str) -> str:
    """Remove one leading and one trailing quote character."""
    if piece[:1] in QUOTE_CHARS:
        piece = piece[1:]
    if piece[-1:] in QUOTE_CHARS:
        piece = piece[:-1]
    return piece


def parse_genres_top(genres_str: Optional[str]) -> str:
    """
    Extract the primary genre label from a stringified genre list.

    Args:
        genres_str: Raw artist_genres value, e.g. "['pop','dance pop']"

    Returns:
        First non-empty genre, or "Unknown" if none can be found

    Examples:
        >>> parse_genres_top("['pop', 'dance pop']")
        'pop'
        >>> parse_genres_top("[]")
        'Unknown'
    """
    if genres_str is None:
        return UNKNOWN_GENRE

    s = str(genres_str).strip()
    if not s or s == EMPTY_LIST_MARKER:
        return UNKNOWN_GENRE

    if s.startswith("["):
        s = s[1:]
    if s.endswith("]"):
        s = s[:-1]
    inner = s.strip()
    if not inner:
        return UNKNOWN_GENRE

    parts = [_strip_quote(p.strip()) for p in inner.split(",")]
    parts = [p for p in parts if p]

    return parts[0] if parts else UNKNOWN_GENRE
