"""Catalog search, single-title lookup and hydration."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Protocol, Sequence

from pydantic import ValidationError
from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..config import Settings
from ..content_policy import is_allowed_under_kids_mode, kids_mode_clause
from ..db_models import TitleRecord
from ..errors import TitleNotFoundError
from ..genres import GENRES, Genre, resolve_genre
from ..models import CatalogPage, TitleItem

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with ``random.Random.sample`` semantics, such as a seeded
    ``random.Random`` supplied by tests."""

    def sample(self, population: Sequence[int], k: int) -> list[int]: ...


class CatalogService:
    """Read-only access to the title catalog."""

    def __init__(
        self,
        settings: Settings,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self._settings = settings
        self._session_factory = session_factory

    async def query(
        self,
        *,
        search: str | None = None,
        genre: str | None = None,
        page: int = 1,
        page_size: int | None = None,
        kids_mode: bool = False,
    ) -> CatalogPage:
        """Filter, order and paginate the catalog.

        Titles are ordered by title text then id so that pages are stable.
        Pages past the end come back empty with the usual metadata. Rows that
        fail validation are logged and left out of the page.
        """

        if page_size is None:
            page_size = self._settings.default_page_size
        if page < 1:
            raise ValueError("page must be 1 or greater")
        if page_size < 1:
            raise ValueError("pageSize must be 1 or greater")

        genre_filter = resolve_genre(genre) if genre else None

        conditions: list[ColumnElement[bool]] = []
        if search:
            conditions.append(TitleRecord.title.icontains(search, autoescape=True))
        if genre_filter is not None:
            conditions.append(TitleRecord.genre_column(genre_filter) == 1)
        if kids_mode:
            conditions.append(kids_mode_clause(TitleRecord.rating))

        count_stmt = select(func.count()).select_from(TitleRecord).where(*conditions)
        page_stmt = (
            select(TitleRecord)
            .where(*conditions)
            .order_by(TitleRecord.title.asc(), TitleRecord.show_id.asc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        async with self._session_factory() as session:
            total_count = (await session.execute(count_stmt)).scalar_one()
            records = (await session.execute(page_stmt)).scalars().all()

        display_genre = genre_filter.label if genre_filter is not None else None
        items: list[TitleItem] = []
        for record in records:
            item = self._to_item(record, "catalog", display_genre=display_genre)
            if item is not None:
                items.append(item)
        return CatalogPage(
            items=items,
            total_count=total_count,
            total_pages=math.ceil(total_count / page_size),
            page=page,
            page_size=page_size,
        )

    async def get_by_id(self, show_id: str, *, kids_mode: bool = False) -> TitleItem:
        """Return a single title or raise :class:`TitleNotFoundError`."""

        async with self._session_factory() as session:
            record = await session.get(TitleRecord, show_id)
        if record is None:
            raise TitleNotFoundError(show_id)
        if kids_mode and not is_allowed_under_kids_mode(record.rating):
            raise TitleNotFoundError(show_id)
        item = self._to_item(record, "lookup")
        if item is None:
            raise TitleNotFoundError(show_id)
        return item

    async def list_genres(self) -> list[str]:
        """Return labels of genres set on at least one title, sorted."""

        columns = [func.max(TitleRecord.genre_column(genre)) for genre in GENRES]
        async with self._session_factory() as session:
            row = (await session.execute(select(*columns))).one()
        present = [genre.label for genre, value in zip(GENRES, row) if value == 1]
        return sorted(present, key=str.casefold)

    async def hydrate(
        self,
        show_ids: Sequence[str],
        *,
        kids_mode: bool = False,
        list_name: str = "catalog",
    ) -> list[TitleItem]:
        """Load titles for ``show_ids`` keeping the given order.

        Ids that are missing or unreadable are logged and skipped; ids hidden
        by kids mode are dropped. Nothing is substituted for either.
        """

        if not show_ids:
            return []
        async with self._session_factory() as session:
            stmt = select(TitleRecord).where(TitleRecord.show_id.in_(list(show_ids)))
            records = {
                record.show_id: record
                for record in (await session.execute(stmt)).scalars().all()
            }

        items: list[TitleItem] = []
        for show_id in show_ids:
            record = records.get(show_id)
            if record is None:
                logger.warning(
                    "Skipping %s candidate %s: title not found", list_name, show_id
                )
                continue
            if kids_mode and not is_allowed_under_kids_mode(record.rating):
                logger.debug(
                    "Dropping %s candidate %s: rating %s hidden in kids mode",
                    list_name,
                    show_id,
                    record.rating,
                )
                continue
            item = self._to_item(record, list_name)
            if item is not None:
                items.append(item)
        return items

    @staticmethod
    def _to_item(
        record: TitleRecord, list_name: str, *, display_genre: str | None = None
    ) -> TitleItem | None:
        try:
            return TitleItem.from_record(record, display_genre=display_genre)
        except ValidationError as exc:
            logger.warning(
                "Skipping %s title %s: stored row is invalid: %s",
                list_name,
                record.show_id,
                exc,
            )
            return None

    async def random_title_ids(
        self,
        count: int,
        *,
        rng: RandomSource,
        exclude: Iterable[str] = (),
        kids_mode: bool = False,
    ) -> list[str]:
        """Draw up to ``count`` distinct ids at random from the catalog.

        Kids mode is applied to the pool before drawing, so every returned id
        is eligible. Only the pool size is loaded; the random source picks
        offsets into the id-ordered pool and each pick is read on its own.
        """

        if count <= 0:
            return []
        conditions: list[ColumnElement[bool]] = []
        excluded = list(exclude)
        if excluded:
            conditions.append(TitleRecord.show_id.not_in(excluded))
        if kids_mode:
            conditions.append(kids_mode_clause(TitleRecord.rating))

        count_stmt = select(func.count()).select_from(TitleRecord).where(*conditions)
        async with self._session_factory() as session:
            pool_size = (await session.execute(count_stmt)).scalar_one()
            offsets = rng.sample(range(pool_size), min(count, pool_size))
            drawn: list[str] = []
            for offset in offsets:
                stmt = (
                    select(TitleRecord.show_id)
                    .where(*conditions)
                    .order_by(TitleRecord.show_id)
                    .offset(offset)
                    .limit(1)
                )
                drawn.append((await session.execute(stmt)).scalar_one())
        return drawn

    async def title_ids_in_genre(
        self,
        genre: str | Genre,
        *,
        limit: int,
        exclude: Iterable[str] = (),
        kids_mode: bool = False,
    ) -> list[str]:
        """Return up to ``limit`` ids of titles flagged with ``genre``."""

        if limit <= 0:
            return []
        genre_entry = genre if isinstance(genre, Genre) else resolve_genre(genre)
        stmt = (
            select(TitleRecord.show_id)
            .where(TitleRecord.genre_column(genre_entry) == 1)
            .order_by(TitleRecord.show_id)
            .limit(limit)
        )
        excluded = list(exclude)
        if excluded:
            stmt = stmt.where(TitleRecord.show_id.not_in(excluded))
        if kids_mode:
            stmt = stmt.where(kids_mode_clause(TitleRecord.rating))
        async with self._session_factory() as session:
            return list((await session.execute(stmt)).scalars().all())
