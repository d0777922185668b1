#!/usr/bin/env python3
"""Top-K genre aggregation and bucketing.

Genres have a long tail, so every view reduces them to the K most frequent
labels plus a catch-all "Other". Counting uses collections.Counter, whose
ordering breaks ties by first encounter, so the same input always yields the
same top set.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set, Tuple, Union

import pandas as pd

from trackdash.pipeline.config import OTHER_GENRE, TOP_K_GENRES, UNKNOWN_ALBUM_TYPE, UNKNOWN_GENRE
from trackdash.pipeline.preprocess import TrackRecord

GenreSource = Union[pd.DataFrame, Iterable[TrackRecord], Iterable[str]]


def _genre_labels(data: GenreSource) -> Iterable[str]:
    if isinstance(data, pd.DataFrame):
        return data["genre_top"].fillna(UNKNOWN_GENRE).tolist()
    return (
        (d.genre_top or UNKNOWN_GENRE) if isinstance(d, TrackRecord) else d
        for d in data
    )


def top_k_genres(data: GenreSource, k: int = TOP_K_GENRES) -> Set[str]:
    """Return the k most frequent top-genre labels.

    Args:
        data: TrackRecords, a DataFrame with a genre_top column, or labels
        k: Number of labels to keep

    Returns:
        Set of at most k labels
    """
    counts = Counter(_genre_labels(data))
    return {label for label, _ in counts.most_common(k)}


def bucket_genre(label: str, top: Set[str]) -> str:
    """Map a label to itself if it is in the top set, else "Other"."""
    return label if label in top else OTHER_GENRE


def genre_sort_key(genre: str) -> Tuple[int, str]:
    """Alphabetical, with "Other" always last."""
    return (1 if genre == OTHER_GENRE else 0, genre)


@dataclass(frozen=True)
class YearGenreMatrix:
    """Counts of tracks per (bucketed genre, release year)."""

    years: List[int]
    genres: List[str]
    counts: Dict[Tuple[str, int], int]
    top: Set[str] = field(default_factory=set)

    @property
    def max_count(self) -> int:
        return max(self.counts.values(), default=0) or 1

    def count(self, genre: str, year: int) -> int:
        return self.counts.get((genre, year), 0)

    def to_grid(self) -> List[List[int]]:
        """Rows follow self.genres, columns follow self.years."""
        return [[self.count(g, y) for y in self.years] for g in self.genres]

    @property
    def total(self) -> int:
        return sum(self.counts.values())


def heatmap_context(records: Iterable[TrackRecord]) -> List[TrackRecord]:
    """Records that can be placed on the year axis."""
    return [r for r in records if r.release_year is not None]


def build_year_genre_matrix(records: Iterable[TrackRecord], k: int = TOP_K_GENRES) -> YearGenreMatrix:
    """Aggregate records into the heatmap's year x genre count matrix.

    The top-k set is computed across all years.
    """
    dated = heatmap_context(records)
    top = top_k_genres(dated, k)

    counts: Counter = Counter(
        (bucket_genre(r.genre_top, top), r.release_year) for r in dated
    )

    years = sorted({r.release_year for r in dated})
    genres = sorted({g for g, _ in counts}, key=genre_sort_key)

    return YearGenreMatrix(years=years, genres=genres, counts=dict(counts), top=top)


def count_by_album_type(records: Iterable[TrackRecord]) -> pd.Series:
    """Track counts per album type, most frequent first."""
    labels = [r.album_type or UNKNOWN_ALBUM_TYPE for r in records]
    return pd.Series(Counter(labels), dtype="int64").sort_values(ascending=False, kind="stable")
