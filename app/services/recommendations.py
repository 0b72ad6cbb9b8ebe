"""Merge precomputed recommendation tables into hydrated title lists."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..config import Settings
from ..db_models import (
    BasicRecommendation,
    LocationRecommendation,
    NeighborRecord,
    StreamingRecommendation,
)
from ..genres import OTHER_GENRE
from ..models import TitleItem, UserRecommendations
from ..utils import map_user_key, unique_ids
from .catalog import CatalogService, RandomSource

logger = logging.getLogger(__name__)

UserRecommendationTable = (
    type[LocationRecommendation]
    | type[BasicRecommendation]
    | type[StreamingRecommendation]
)


class RecommendationService:
    """Assemble per-user and per-title recommendation lists.

    Every list is capped at ``RECOMMENDATION_LIST_SIZE``. Short lists are
    backfilled before hydration; titles that then fail to hydrate leave the
    list short rather than being replaced.
    """

    def __init__(
        self,
        settings: Settings,
        catalog: CatalogService,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        rng: RandomSource | None = None,
    ) -> None:
        self._settings = settings
        self._catalog = catalog
        self._session_factory = session_factory
        self._rng: RandomSource = rng or random.Random(settings.recommendation_seed)

    @property
    def list_size(self) -> int:
        return self._settings.recommendation_list_size

    def user_key(self, external_user_id: str) -> int:
        key = map_user_key(
            external_user_id,
            key_space=self._settings.user_key_space,
            prefix_length=self._settings.user_key_prefix_length,
        )
        logger.debug("Mapped user to recommendation key %s", key)
        return key

    async def recommendations_for_user(
        self,
        external_user_id: str,
        *,
        kids_mode: bool = False,
        rng: RandomSource | None = None,
    ) -> UserRecommendations:
        """Return the location, general and streaming lists for a user.

        The three lists are built independently and may share titles.
        """

        key = self.user_key(external_user_id)
        source = rng or self._rng
        # Lists are drawn in a fixed order so a seeded source repeats exactly.
        return UserRecommendations(
            location_based=await self._user_list(
                LocationRecommendation, key, kids_mode, source
            ),
            general=await self._user_list(BasicRecommendation, key, kids_mode, source),
            streaming_based=await self._user_list(
                StreamingRecommendation, key, kids_mode, source
            ),
        )

    async def _user_list(
        self,
        table: UserRecommendationTable,
        key: int,
        kids_mode: bool,
        rng: RandomSource,
    ) -> list[TitleItem]:
        async with self._session_factory() as session:
            row = await session.get(table, key)
        candidates = unique_ids(row.candidate_ids()) if row is not None else []

        shortfall = self.list_size - len(candidates)
        if shortfall > 0:
            candidates.extend(
                await self._catalog.random_title_ids(
                    shortfall,
                    rng=rng,
                    exclude=candidates,
                    kids_mode=kids_mode,
                )
            )
        return await self._catalog.hydrate(
            candidates[: self.list_size],
            kids_mode=kids_mode,
            list_name=table.__tablename__,
        )

    async def neighbors_for(
        self, show_id: str, *, kids_mode: bool = False
    ) -> list[TitleItem]:
        """Return titles similar to ``show_id``.

        Collaborative candidates come first, then content-based ones. Short
        lists are topped up with titles from the seed's primary genre.
        Raises :class:`~app.errors.TitleNotFoundError` when the seed itself
        is missing or hidden by kids mode.
        """

        seed = await self._catalog.get_by_id(show_id, kids_mode=kids_mode)

        async with self._session_factory() as session:
            row = await session.get(NeighborRecord, show_id)
        raw: list[str | None] = []
        if row is not None:
            raw = row.collaborative_ids() + row.content_ids()
        candidates = unique_ids(raw, exclude=[show_id])

        if len(candidates) < self.list_size and seed.genre != OTHER_GENRE:
            scanned = await self._catalog.title_ids_in_genre(
                seed.genre,
                limit=self._settings.neighbor_genre_scan_limit,
                exclude=[show_id],
                kids_mode=kids_mode,
            )
            self._extend_unique(candidates, scanned)

        return await self._catalog.hydrate(
            candidates[: self.list_size],
            kids_mode=kids_mode,
            list_name=NeighborRecord.__tablename__,
        )

    def _extend_unique(self, candidates: list[str], extra: Sequence[str]) -> None:
        for show_id in extra:
            if len(candidates) >= self.list_size:
                return
            if show_id not in candidates:
                candidates.append(show_id)
