#!/usr/bin/env python3
"""Cross-view selection state.

The dashboard keeps a single SelectionState in one mutable slot and replaces
it through the pure transitions below:

- select_cell: heatmap click, toggles a (year, genre) pair
- hover: scatter highlight, last write wins

Year and genre always move together. Views derive their subset with
filter_records and their emphasis with is_highlighted.
"""

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Set

from trackdash.pipeline.aggregate import bucket_genre, heatmap_context, top_k_genres
from trackdash.pipeline.config import TOP_K_GENRES
from trackdash.pipeline.preprocess import TrackRecord


@dataclass(frozen=True)
class SelectionState:
    selected_year: Optional[int] = None
    selected_genre: Optional[str] = None
    hovered_id: Optional[str] = None


INITIAL_STATE = SelectionState()


def select_cell(state: SelectionState, year: Optional[int], genre: Optional[str]) -> SelectionState:
    """Select a (year, genre) cell, or clear it if it is already selected."""
    if year == state.selected_year and genre == state.selected_genre:
        return replace(state, selected_year=None, selected_genre=None)
    return replace(state, selected_year=year, selected_genre=genre)


def hover(state: SelectionState, track_id: Optional[str]) -> SelectionState:
    return replace(state, hovered_id=track_id or None)


def clear_selection(state: SelectionState) -> SelectionState:
    return replace(state, selected_year=None, selected_genre=None)


def has_cell_selection(state: SelectionState) -> bool:
    return state.selected_year is not None and state.selected_genre is not None


def is_selected_cell(state: SelectionState, year: int, genre: str) -> bool:
    return has_cell_selection(state) and year == state.selected_year and genre == state.selected_genre


def is_highlighted(state: SelectionState, track_id: str) -> bool:
    return state.hovered_id is not None and track_id == state.hovered_id


def shared_top_genres(records: Iterable[TrackRecord], k: int = TOP_K_GENRES) -> Set[str]:
    """Top-k genres over the heatmap's context (tracks with a release year)."""
    return top_k_genres(heatmap_context(records), k)


def filter_records(
    records: Iterable[TrackRecord],
    state: SelectionState,
    top: Optional[Set[str]] = None,
    k: int = TOP_K_GENRES,
) -> List[TrackRecord]:
    """Apply the year and genre selection to a record sequence.

    Args:
        records: Canonical dataset (or a pre-filtered subset)
        state: Current selection
        top: Top-genre set used for bucketing; computed with
            shared_top_genres when omitted
        k: Bucket size when top is computed here

    Returns:
        Records matching the selection, in input order
    """
    rows = list(records)

    if state.selected_genre is not None and top is None:
        top = shared_top_genres(rows, k)

    if state.selected_year is not None:
        rows = [r for r in rows if r.release_year == state.selected_year]

    if state.selected_genre is not None:
        rows = [r for r in rows if bucket_genre(r.genre_top, top) == state.selected_genre]

    return rows
