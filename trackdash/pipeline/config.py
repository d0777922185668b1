#!/usr/bin/env python3
"""Centralized configuration for the track metadata dashboard.

This module provides a single source of truth for all configuration settings
used by the data pipeline (trackdash/pipeline) and the Streamlit dashboard
(trackdash/interactive_dashboard.py).

Source paths and the log level can be overridden through environment
variables (or a .env file in the working directory).
"""

import os
from typing import List, Tuple

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# DATA SOURCES
# =============================================================================

# Source A wins on conflicting fields, source B fills the gaps
DEFAULT_SOURCE_A = "data/track_data_final.csv"
DEFAULT_SOURCE_B = "data/spotify_data clean.csv"

SOURCE_A_PATH: str = os.getenv("TRACKDASH_SOURCE_A", DEFAULT_SOURCE_A)
SOURCE_B_PATH: str = os.getenv("TRACKDASH_SOURCE_B", DEFAULT_SOURCE_B)

LOG_LEVEL: str = os.getenv("TRACKDASH_LOG_LEVEL", "INFO")

# Merge key shared by both sources
KEY_COLUMN = "track_id"

# Columns expected in both CSV files (all read as text)
REQUIRED_COLUMNS: List[str] = [
    "track_id",
    "track_name",
    "track_number",
    "track_popularity",
    "explicit",
    "artist_name",
    "artist_popularity",
    "artist_followers",
    "artist_genres",
    "album_release_date",
    "album_total_tracks",
    "album_type",
    "track_duration_ms",
    "track_duration_min",
]


# =============================================================================
# NORMALIZATION
# =============================================================================

# Earliest accepted release year; the upper bound is current year + 1
YEAR_MIN: int = 1900

UNKNOWN_GENRE = "Unknown"
UNKNOWN_ALBUM_TYPE = "unknown"


# =============================================================================
# AGGREGATION & VIEWS
# =============================================================================

# Shared by heatmap, scatter and parallel coordinates so "Other" is consistent
TOP_K_GENRES: int = 10
OTHER_GENRE = "Other"

# Per-view caps
SCATTER_MAX_POINTS: int = 2500
PARALLEL_MAX_LINES: int = 200

# Parallel coordinates axes, left to right
PARALLEL_DIMENSIONS: Tuple[str, ...] = (
    "track_popularity",
    "artist_popularity",
    "followers_log",
    "duration_min",
    "album_total_tracks",
)

# Transition timing for emphasis changes (milliseconds)
TRANSITION_MS: int = 420
