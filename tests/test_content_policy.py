"""Kids-mode content policy tests."""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import select

from app.content_policy import (
    CONTENT_RATINGS,
    KIDS_MODE_DENYLIST,
    is_allowed_under_kids_mode,
    kids_mode_clause,
)
from app.db_models import TitleRecord


@pytest.mark.parametrize(
    "rating", ["PG-13", "TV-14", "TV-MA", "R", "NR", "TV-Y7-FV", "UR"]
)
def test_denylisted_ratings_are_blocked(rating: str) -> None:
    assert not is_allowed_under_kids_mode(rating)


@pytest.mark.parametrize("rating", ["G", "PG", "TV-Y", "TV-Y7", "TV-G", "TV-PG", None])
def test_other_ratings_are_allowed(rating: str | None) -> None:
    assert is_allowed_under_kids_mode(rating)


def test_denylist_only_names_known_ratings() -> None:
    assert KIDS_MODE_DENYLIST <= set(CONTENT_RATINGS)


def test_sql_clause_matches_predicate(database, seed, make_title) -> None:
    """The database filter and the in-memory predicate agree on every rating."""

    ratings: list[str | None] = [*CONTENT_RATINGS, None, "unrated-custom"]
    rows = [
        make_title(f"s{index}", rating=rating) for index, rating in enumerate(ratings)
    ]

    async def runner() -> set[str]:
        await seed(database, *rows)
        try:
            async with database.session_factory() as session:
                stmt = select(TitleRecord.show_id).where(
                    kids_mode_clause(TitleRecord.rating)
                )
                return set((await session.execute(stmt)).scalars().all())
        finally:
            await database.dispose()

    allowed = asyncio.run(runner())

    expected = {
        f"s{index}"
        for index, rating in enumerate(ratings)
        if is_allowed_under_kids_mode(rating)
    }
    assert allowed == expected
