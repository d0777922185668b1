import math

import pytest

from trackdash.pipeline.merge import build_dataset, clean_raw_row, merge_rows

from tests.conftest import CURRENT_YEAR


def test_a_overrides_b_and_keeps_b_only_fields():
    a = [{"track_id": "id1", "popularity": 80}]
    b = [{"track_id": "id1", "popularity": 50, "name": "X"}]

    merged = merge_rows(a, b)

    assert merged["id1"] == {"track_id": "id1", "popularity": 80, "name": "X"}


def test_key_only_in_b_survives_unchanged():
    b_row = {"track_id": "id2", "popularity": 10, "name": "Y"}
    merged = merge_rows([{"track_id": "id1", "popularity": 80}], [b_row])

    assert merged["id2"] == b_row
    assert set(merged) == {"id1", "id2"}


def test_key_only_in_a_is_inserted():
    merged = merge_rows([{"track_id": "id3", "name": "Z"}], [])
    assert merged == {"id3": {"track_id": "id3", "name": "Z"}}


def test_inputs_are_not_mutated():
    a = [{"track_id": "id1", "popularity": 80}]
    b = [{"track_id": "id1", "popularity": 50, "name": "X"}]

    merge_rows(a, b)

    assert a == [{"track_id": "id1", "popularity": 80}]
    assert b == [{"track_id": "id1", "popularity": 50, "name": "X"}]


def test_rows_without_key_are_skipped():
    merged = merge_rows([{"name": "no id"}, {"track_id": "  "}], [{"track_id": None}])
    assert merged == {}


def test_duplicate_keys_in_a_collapse():
    a = [{"track_id": "id1", "popularity": 1}, {"track_id": "id1", "popularity": 2}]
    merged = merge_rows(a, [])
    assert merged["id1"]["popularity"] == 2


def test_clean_raw_row_drops_absent_values():
    row = {"a": "1", "b": None, "c": float("nan"), "d": ""}
    assert clean_raw_row(row) == {"a": "1", "d": ""}


def test_build_dataset_end_to_end():
    a = [{"track_id": "t1", "artist_followers": "999", "track_name": "From A"}]
    b = [
        {
            "track_id": "t1",
            "artist_popularity": "40",
            "artist_followers": None,
            "track_name": "From B",
        },
        {"track_id": "t2", "track_popularity": "70"},
    ]

    records = {r.track_id: r for r in build_dataset(a, b, current_year=CURRENT_YEAR)}

    t1 = records["t1"]
    assert t1.artist_followers == 999
    assert t1.followers_log == pytest.approx(math.log10(999 + 1))
    assert t1.artist_popularity == 40
    assert t1.track_name == "From A"

    assert records["t2"].track_popularity == 70
    assert len(records) == 2


def test_build_dataset_ids_are_unique(make_raw):
    a = [make_raw(track_id="t1"), make_raw(track_id="t2")]
    b = [make_raw(track_id="t2"), make_raw(track_id="t3"), make_raw(track_id="t1")]

    ids = [r.track_id for r in build_dataset(a, b)]

    assert sorted(ids) == ["t1", "t2", "t3"]
