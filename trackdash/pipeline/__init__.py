"""Track Dashboard Pipeline

Core modules for loading, normalizing, merging and aggregating track
metadata, plus the selection state shared by the dashboard views.

The interactive dashboard lives in:
  streamlit run trackdash/interactive_dashboard.py
"""

from .genres import parse_genres_top
from .preprocess import TrackRecord, normalize_row, preprocess_tracks
from .merge import merge_rows, build_dataset
from .aggregate import top_k_genres, build_year_genre_matrix
from .selection import SelectionState, select_cell, hover, filter_records
from .loader import DataLoadError, LoadResult, LoadStatus, load_dashboard_data

__all__ = [
    'parse_genres_top',
    'TrackRecord',
    'normalize_row',
    'preprocess_tracks',
    'merge_rows',
    'build_dataset',
    'top_k_genres',
    'build_year_genre_matrix',
    'SelectionState',
    'select_cell',
    'hover',
    'filter_records',
    'DataLoadError',
    'LoadResult',
    'LoadStatus',
    'load_dashboard_data',
]
