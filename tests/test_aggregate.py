import pandas as pd

from trackdash.pipeline.aggregate import (
    bucket_genre,
    build_year_genre_matrix,
    count_by_album_type,
    top_k_genres,
)


def test_top_k_basic():
    assert top_k_genres(["a", "a", "a", "b", "b", "c"], k=2) == {"a", "b"}


def test_top_k_ties_follow_encounter_order():
    assert top_k_genres(["b", "a", "a", "b", "c"], k=1) == {"b"}
    assert top_k_genres(["c", "a", "b"], k=2) == {"c", "a"}


def test_top_k_accepts_records_and_dataframes(make_track):
    records = [make_track(track_id=str(i), artist_genres=g) for i, g in enumerate(["['x']", "['x']", "['y']"])]
    assert top_k_genres(records, k=1) == {"x"}

    df = pd.DataFrame({"genre_top": ["x", None, None]})
    assert top_k_genres(df, k=1) == {"Unknown"}


def test_top_k_larger_than_distinct():
    assert top_k_genres(["a", "b"], k=10) == {"a", "b"}
    assert top_k_genres([], k=10) == set()


def test_bucket_genre():
    top = {"pop", "rock"}
    assert bucket_genre("pop", top) == "pop"
    assert bucket_genre("polka", top) == "Other"


def test_year_genre_matrix(make_track):
    records = [
        make_track(track_id="1", artist_genres="['pop']", album_release_date="2020-01-01"),
        make_track(track_id="2", artist_genres="['pop']", album_release_date="2020-06-01"),
        make_track(track_id="3", artist_genres="['rock']", album_release_date="2019-01-01"),
        make_track(track_id="4", artist_genres="['jazz']", album_release_date="2021-01-01"),
        make_track(track_id="5", artist_genres="['ska']", album_release_date="1800-01-01"),
    ]

    matrix = build_year_genre_matrix(records, k=2)

    assert matrix.years == [2019, 2020, 2021]
    assert matrix.genres == ["pop", "rock", "Other"]
    assert matrix.top == {"pop", "rock"}
    assert matrix.count("pop", 2020) == 2
    assert matrix.count("Other", 2021) == 1
    assert matrix.count("rock", 2021) == 0
    assert matrix.max_count == 2
    assert matrix.total == 4
    assert matrix.to_grid() == [[0, 2, 0], [1, 0, 0], [0, 0, 1]]


def test_year_genre_matrix_empty():
    matrix = build_year_genre_matrix([])
    assert matrix.years == []
    assert matrix.genres == []
    assert matrix.max_count == 1


def test_count_by_album_type(make_track):
    records = [
        make_track(track_id="1", album_type="single"),
        make_track(track_id="2", album_type="album"),
        make_track(track_id="3", album_type="single"),
    ]
    counts = count_by_album_type(records)
    assert counts.index.tolist() == ["single", "album"]
    assert counts["single"] == 2
