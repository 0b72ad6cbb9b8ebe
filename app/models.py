"""Pydantic models describing catalog and recommendation payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .db_models import TitleRecord

UNKNOWN_TITLE = "Unknown Title"
MISSING_DESCRIPTION = "No description available"
UNKNOWN_DIRECTOR = "Unknown Director"


class TitleItem(BaseModel):
    """A hydrated catalog entry as returned to clients."""

    model_config = ConfigDict(populate_by_name=True)

    show_id: str = Field(alias="showId")
    type: str | None = None
    title: str = UNKNOWN_TITLE
    description: str = MISSING_DESCRIPTION
    image_url: str | None = Field(default=None, alias="imageUrl")
    release_year: int = Field(default=0, alias="releaseYear")
    director: str = UNKNOWN_DIRECTOR
    cast: str | None = None
    duration: str | None = None
    country: str | None = None
    rating: str | None = None
    genre: str
    genres: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(
        cls, record: TitleRecord, *, display_genre: str | None = None
    ) -> "TitleItem":
        """Build an item from a stored row.

        ``display_genre`` overrides the computed primary genre; the catalog
        listing passes the requested filter so multi-genre titles are shown
        under the genre the caller asked for.
        """

        genre_set = record.genre_set()
        return cls(
            show_id=record.show_id,
            type=record.type,
            title=record.title or UNKNOWN_TITLE,
            description=record.description or MISSING_DESCRIPTION,
            image_url=record.image_url,
            release_year=record.release_year or 0,
            director=record.director or UNKNOWN_DIRECTOR,
            cast=record.cast,
            duration=record.duration,
            country=record.country,
            rating=record.rating,
            genre=display_genre or genre_set.primary,
            genres=list(genre_set.labels),
        )


class CatalogPage(BaseModel):
    """One page of a filtered, ordered catalog listing."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[TitleItem] = Field(default_factory=list)
    total_count: int = Field(alias="totalCount")
    total_pages: int = Field(alias="totalPages")
    page: int
    page_size: int = Field(alias="pageSize")


class UserRecommendations(BaseModel):
    """The three independent per-user recommendation lists."""

    model_config = ConfigDict(populate_by_name=True)

    location_based: list[TitleItem] = Field(
        default_factory=list, alias="locationBased"
    )
    general: list[TitleItem] = Field(default_factory=list)
    streaming_based: list[TitleItem] = Field(
        default_factory=list, alias="streamingBased"
    )
