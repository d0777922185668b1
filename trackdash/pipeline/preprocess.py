#!/usr/bin/env python3
"""Row normalization for raw CSV track records.

Raw rows arrive as mappings of column name to text (or None when the cell or
column is absent). Everything is converted here, once, into a frozen
TrackRecord. Untyped values never travel past this module.

Coercion never raises: unparseable numbers fall back to 0, unparseable
optional values (duration, release year) become None.
"""

import logging
import math
from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from trackdash.pipeline.config import UNKNOWN_ALBUM_TYPE, YEAR_MIN
from trackdash.pipeline.genres import parse_genres_top

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackRecord:
    """One fully typed track of the canonical dataset."""

    track_id: str
    track_name: str
    track_number: float
    track_popularity: float
    explicit: bool
    artist_name: str
    artist_popularity: float
    artist_followers: int
    artist_genres: str
    album_release_date: str
    album_total_tracks: float
    album_type: str
    track_duration_ms: Optional[float] = None
    track_duration_min: Optional[float] = None

    # Derived once in normalize_row
    release_year: Optional[int] = None
    followers_log: float = 0.0
    duration_min: Optional[float] = None
    genre_top: str = "Unknown"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


TRACK_COLUMNS: List[str] = [f.name for f in fields(TrackRecord)]


def is_absent(value: Any) -> bool:
    """True for None and float NaN (pandas' marker for an empty cell)."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def to_number(value: Any, fallback: float = 0.0) -> float:
    """Parse value as a finite float, returning fallback otherwise."""
    if isinstance(value, bool):
        return float(value)
    if is_absent(value):
        return fallback
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return fallback
    return number if math.isfinite(number) else fallback


def to_optional_number(value: Any) -> Optional[float]:
    """Like to_number, but None instead of a fallback."""
    number = to_number(value, math.nan)
    return None if math.isnan(number) else number


def to_bool(value: Any) -> bool:
    """Booleans pass through, strings compare to "true", the rest by truthiness."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() == "true"
    if is_absent(value):
        return False
    return bool(value)


def to_text(value: Any, fallback: str = "") -> str:
    if is_absent(value):
        return fallback
    return str(value)


def parse_release_year(date_str: Any, current_year: Optional[int] = None) -> Optional[int]:
    """Parse the release year from a YYYY-MM-DD style string.

    Args:
        date_str: Raw album_release_date value
        current_year: Reference year for the upper bound (defaults to today)

    Returns:
        Year in [1900, current_year + 1], or None when missing or out of range
    """
    if not isinstance(date_str, str) or len(date_str) < 4:
        return None

    if current_year is None:
        current_year = datetime.now().year

    try:
        year = int(date_str[:4])
    except ValueError:
        return None

    if YEAR_MIN <= year <= current_year + 1:
        return year
    return None


def derive_duration_min(duration_min: Optional[float], duration_ms: Optional[float]) -> Optional[float]:
    """Prefer the explicit minutes column, otherwise convert milliseconds."""
    if duration_min is not None:
        return duration_min
    if duration_ms is not None:
        return duration_ms / 60000
    return None


def normalize_row(raw: Mapping[str, Any], current_year: Optional[int] = None) -> TrackRecord:
    """Convert one raw CSV row into a TrackRecord.

    Never raises on bad cell values; each field falls back instead.
    The input mapping is not modified.
    """
    followers = int(max(to_number(raw.get("artist_followers"), 0.0), 0.0))

    duration_ms = to_optional_number(raw.get("track_duration_ms"))
    duration_col = to_optional_number(raw.get("track_duration_min"))

    release_date = to_text(raw.get("album_release_date"))
    release_year = parse_release_year(release_date, current_year)
    if release_year is None and release_date:
        logger.debug(f"Rejected release date {release_date!r} for {raw.get('track_id')}")

    album_type = to_text(raw.get("album_type")).strip().lower() or UNKNOWN_ALBUM_TYPE
    artist_genres = to_text(raw.get("artist_genres"))

    return TrackRecord(
        track_id=to_text(raw.get("track_id")).strip(),
        track_name=to_text(raw.get("track_name")),
        track_number=to_number(raw.get("track_number")),
        track_popularity=to_number(raw.get("track_popularity")),
        explicit=to_bool(raw.get("explicit")),
        artist_name=to_text(raw.get("artist_name")),
        artist_popularity=to_number(raw.get("artist_popularity")),
        artist_followers=followers,
        artist_genres=artist_genres,
        album_release_date=release_date,
        album_total_tracks=to_number(raw.get("album_total_tracks")),
        album_type=album_type,
        track_duration_ms=duration_ms,
        track_duration_min=duration_col,
        release_year=release_year,
        followers_log=math.log10(followers + 1),
        duration_min=derive_duration_min(duration_col, duration_ms),
        genre_top=parse_genres_top(artist_genres),
    )


def preprocess_tracks(
    rows: Iterable[Mapping[str, Any]],
    current_year: Optional[int] = None,
) -> List[TrackRecord]:
    """Normalize every raw row, keeping input order."""
    if current_year is None:
        current_year = datetime.now().year
    return [normalize_row(r, current_year) for r in rows]


def records_to_dataframe(records: Iterable[TrackRecord]) -> pd.DataFrame:
    """Build a DataFrame with one column per TrackRecord field."""
    return pd.DataFrame([r.to_dict() for r in records], columns=TRACK_COLUMNS)
