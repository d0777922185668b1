"""Shared fixtures for building raw rows and normalized tracks."""

import pytest

from trackdash.pipeline.preprocess import normalize_row

CURRENT_YEAR = 2026


def raw_row(**overrides):
    row = {
        "track_id": "t1",
        "track_name": "Song",
        "track_number": "1",
        "track_popularity": "50",
        "explicit": "False",
        "artist_name": "Artist",
        "artist_popularity": "60",
        "artist_followers": "1000",
        "artist_genres": "['pop', 'dance pop']",
        "album_release_date": "2020-01-01",
        "album_total_tracks": "10",
        "album_type": "album",
        "track_duration_ms": "180000",
        "track_duration_min": None,
    }
    row.update(overrides)
    return row


def track(**overrides):
    return normalize_row(raw_row(**overrides), current_year=CURRENT_YEAR)


@pytest.fixture
def make_raw():
    return raw_row


@pytest.fixture
def make_track():
    return track
