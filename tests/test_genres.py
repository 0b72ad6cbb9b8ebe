"""Genre taxonomy behaviour tests."""

from __future__ import annotations

import pytest

from app.db_models import TitleRecord
from app.errors import UnrecognizedGenreError
from app.genres import (
    GENRE_LABELS,
    GENRES,
    OTHER_GENRE,
    GenreSet,
    genres_of,
    primary_genre,
    resolve_genre,
)


def test_taxonomy_has_fixed_priority_order() -> None:
    assert len(GENRES) == 31
    assert GENRE_LABELS[0] == "Action"
    assert GENRE_LABELS[-1] == "Thriller"
    assert GENRE_LABELS.index("Drama") < GENRE_LABELS.index("Horror")


def test_every_genre_maps_to_a_title_column() -> None:
    """Each taxonomy entry must point at the stored indicator column."""

    for genre in GENRES:
        assert TitleRecord.genre_column(genre).property.columns[0].name == genre.column


def test_primary_genre_picks_first_in_taxonomy_order() -> None:
    genres = GenreSet.from_labels(["Thriller", "Horror", "Drama"])

    assert primary_genre(genres) == "Drama"
    assert genres_of(genres) == ("Drama", "Horror", "Thriller")


def test_primary_genre_without_indicators_is_other() -> None:
    assert primary_genre(GenreSet()) == OTHER_GENRE
    assert genres_of(GenreSet()) == ()


def test_from_flags_counts_only_set_indicators() -> None:
    flags: list[object] = [0] * len(GENRES)
    flags[GENRE_LABELS.index("Kids' TV")] = 1
    flags[GENRE_LABELS.index("Fantasy")] = None
    flags[GENRE_LABELS.index("Musicals")] = True

    genres = GenreSet.from_flags(flags)

    assert genres.labels == ("Kids' TV", "Musicals")
    assert "Kids' TV" in genres
    assert "Fantasy" not in genres
    assert len(genres) == 2


def test_from_flags_rejects_wrong_width() -> None:
    with pytest.raises(ValueError):
        GenreSet.from_flags([1, 0, 1])


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Horror", "Horror"),
        ("horror movies", "Horror"),
        ("HORROR", "Horror"),
        ("Comedies", "Comedy"),
        ("drama", "Drama"),
        ("Dramas  Romantic   Movies", "Drama Romantic Movies"),
        ("kids' tv", "Kids' TV"),
        ("Thrillers", "Thriller"),
    ],
)
def test_resolve_genre_accepts_labels_and_aliases(raw: str, expected: str) -> None:
    assert resolve_genre(raw).label == expected


@pytest.mark.parametrize("raw", ["Western", "", "Other"])
def test_resolve_genre_rejects_unknown_labels(raw: str) -> None:
    with pytest.raises(UnrecognizedGenreError):
        resolve_genre(raw)


def test_membership_ignores_unknown_labels() -> None:
    assert "Western" not in GenreSet.from_labels(["Action"])
