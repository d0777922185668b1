import math

import pytest

from trackdash.pipeline.preprocess import (
    TRACK_COLUMNS,
    normalize_row,
    parse_release_year,
    preprocess_tracks,
    records_to_dataframe,
    to_bool,
    to_number,
    to_optional_number,
)

from tests.conftest import CURRENT_YEAR


@pytest.mark.parametrize("value", ["abc", "", None, "nan", "inf", float("nan"), "12abc"])
def test_non_numeric_popularity_is_zero(make_raw, value):
    record = normalize_row(make_raw(track_popularity=value), current_year=CURRENT_YEAR)
    assert record.track_popularity == 0


@pytest.mark.parametrize(
    "followers, expected",
    [("999", 999), ("0", 0), ("-5", 0), ("abc", 0), (None, 0), ("12.7", 12), ("1e3", 1000)],
)
def test_followers_log(make_raw, followers, expected):
    record = normalize_row(make_raw(artist_followers=followers), current_year=CURRENT_YEAR)
    assert record.artist_followers == expected
    assert record.followers_log == pytest.approx(math.log10(expected + 1))


@pytest.mark.parametrize(
    "date, expected",
    [
        ("2021-05-01", 2021),
        ("2021", 2021),
        ("99", None),
        ("1899-01-01", None),
        ("1900-01-01", 1900),
        ("2999-01-01", None),
        ("2027-03-01", 2027),
        ("2028-03-01", None),
        ("abcd-01-01", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_release_year(date, expected):
    assert parse_release_year(date, current_year=CURRENT_YEAR) == expected


def test_parse_release_year_defaults_to_today():
    assert parse_release_year("2021-05-01") == 2021
    assert parse_release_year("2999-01-01") is None


def test_duration_prefers_minutes_column(make_raw):
    record = normalize_row(make_raw(track_duration_min="3.5", track_duration_ms="60000"))
    assert record.duration_min == 3.5
    assert record.track_duration_ms == 60000


def test_duration_falls_back_to_milliseconds(make_raw):
    record = normalize_row(make_raw(track_duration_min="n/a", track_duration_ms="180000"))
    assert record.duration_min == pytest.approx(3.0)
    assert record.track_duration_min is None


def test_duration_absent(make_raw):
    record = normalize_row(make_raw(track_duration_min=None, track_duration_ms=None))
    assert record.duration_min is None
    assert record.track_duration_ms is None


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, True),
        (False, False),
        ("TRUE", True),
        ("true", True),
        ("False", False),
        ("yes", False),
        (" true", False),
        ("true ", False),
        (1, True),
        (0, False),
        (None, False),
    ],
)
def test_to_bool(value, expected):
    assert to_bool(value) is expected


def test_to_number():
    assert to_number(" 42 ") == 42
    assert to_number("x", fallback=-1) == -1
    assert to_number(True) == 1
    assert to_optional_number("x") is None
    assert to_optional_number("2.5") == 2.5


def test_normalize_row_types_and_derived_fields(make_raw):
    raw = make_raw(explicit="true", album_type=" Single ", artist_genres="['Hip-Hop', 'rap']")
    record = normalize_row(raw, current_year=CURRENT_YEAR)

    assert record.track_id == "t1"
    assert record.explicit is True
    assert record.album_type == "single"
    assert record.genre_top == "Hip-Hop"
    assert record.release_year == 2020
    assert record.track_number == 1
    assert record.album_total_tracks == 10
    assert record.artist_popularity == 60


def test_normalize_row_missing_everything():
    record = normalize_row({}, current_year=CURRENT_YEAR)

    assert record.track_id == ""
    assert record.track_popularity == 0
    assert record.artist_followers == 0
    assert record.followers_log == 0
    assert record.release_year is None
    assert record.duration_min is None
    assert record.genre_top == "Unknown"
    assert record.album_type == "unknown"
    assert record.explicit is False


def test_normalize_row_does_not_mutate_input(make_raw):
    raw = make_raw()
    before = dict(raw)
    normalize_row(raw)
    assert raw == before


def test_track_record_is_frozen(make_track):
    record = make_track()
    with pytest.raises(AttributeError):
        record.track_popularity = 99


def test_preprocess_keeps_order(make_raw):
    rows = [make_raw(track_id=f"t{i}") for i in range(5)]
    assert [r.track_id for r in preprocess_tracks(rows)] == [f"t{i}" for i in range(5)]


def test_records_to_dataframe(make_track):
    df = records_to_dataframe([make_track(), make_track(track_id="t2")])
    assert list(df.columns) == TRACK_COLUMNS
    assert len(df) == 2

    empty = records_to_dataframe([])
    assert list(empty.columns) == TRACK_COLUMNS
    assert empty.empty
