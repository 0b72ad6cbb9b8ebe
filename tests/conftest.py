"""Pytest configuration and test helpers."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Awaitable, Callable, Iterable

import pytest

# Ensure the application package is importable when running tests without an
# editable install. This mirrors the expected runtime layout where ``app`` sits
# at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


from app.config import Settings  # noqa: E402
from app.database import Database  # noqa: E402
from app.db_models import TitleRecord  # noqa: E402
from app.genres import resolve_genre  # noqa: E402


def _make_title(
    show_id: str,
    title: str | None = None,
    *,
    rating: str | None = "G",
    genres: Iterable[str] = (),
    **fields: object,
) -> TitleRecord:
    """Return an unsaved catalog row with the given genre indicators set."""

    record = TitleRecord(
        show_id=show_id,
        title=title if title is not None else f"Title {show_id}",
        rating=rating,
        **fields,
    )
    for label in genres:
        setattr(record, resolve_genre(label).key, 1)
    return record


@pytest.fixture
def make_title() -> Callable[..., TitleRecord]:
    return _make_title


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def database(tmp_path) -> Database:
    """Database handle backed by a throwaway SQLite file.

    Tests create tables, seed and dispose inside a single ``asyncio.run`` so
    the engine never crosses event loops.
    """

    return Database(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")


@pytest.fixture
def seed() -> Callable[..., Awaitable[None]]:
    async def _seed(database: Database, *rows: object) -> None:
        await database.create_all()
        async with database.session_factory() as session:
            session.add_all(list(rows))
            await session.commit()

    return _seed
