"""SQLAlchemy ORM models mirroring the externally populated catalog tables.

Column names follow the catalog export verbatim (including spaces and
apostrophes), so each mapped attribute names its column explicitly.
"""

from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import InstrumentedAttribute, Mapped, mapped_column

from .database import Base
from .genres import GENRES, Genre, GenreSet


class TitleRecord(Base):
    """A catalog entry with its metadata and genre indicator columns."""

    __tablename__ = "movies_titles"

    show_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    director: Mapped[str | None] = mapped_column(Text, nullable=True)
    cast: Mapped[str | None] = mapped_column("cast", Text, nullable=True)
    country: Mapped[str | None] = mapped_column(Text, nullable=True)
    release_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rating: Mapped[str | None] = mapped_column(String(16), nullable=True)
    duration: Mapped[str | None] = mapped_column(String(32), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column("imageUrl", Text, nullable=True)

    action: Mapped[int | None] = mapped_column("Action", Integer, default=0)
    adventure: Mapped[int | None] = mapped_column("Adventure", Integer, default=0)
    anime_series_international_tv_shows: Mapped[int | None] = mapped_column(
        "Anime Series International TV Shows", Integer, default=0
    )
    british_tv_shows_docuseries_international_tv_shows: Mapped[int | None] = mapped_column(
        "British TV Shows Docuseries International TV Shows", Integer, default=0
    )
    children: Mapped[int | None] = mapped_column("Children", Integer, default=0)
    comedies: Mapped[int | None] = mapped_column("Comedies", Integer, default=0)
    comedies_dramas_international_movies: Mapped[int | None] = mapped_column(
        "Comedies Dramas International Movies", Integer, default=0
    )
    comedies_romantic_movies: Mapped[int | None] = mapped_column(
        "Comedies Romantic Movies", Integer, default=0
    )
    crime_tv_shows_docuseries: Mapped[int | None] = mapped_column(
        "Crime TV Shows Docuseries", Integer, default=0
    )
    documentaries: Mapped[int | None] = mapped_column(
        "Documentaries", Integer, default=0
    )
    documentaries_international_movies: Mapped[int | None] = mapped_column(
        "Documentaries International Movies", Integer, default=0
    )
    docuseries: Mapped[int | None] = mapped_column("Docuseries", Integer, default=0)
    dramas: Mapped[int | None] = mapped_column("Dramas", Integer, default=0)
    dramas_international_movies: Mapped[int | None] = mapped_column(
        "Dramas International Movies", Integer, default=0
    )
    dramas_romantic_movies: Mapped[int | None] = mapped_column(
        "Dramas Romantic Movies", Integer, default=0
    )
    family_movies: Mapped[int | None] = mapped_column(
        "Family Movies", Integer, default=0
    )
    fantasy: Mapped[int | None] = mapped_column("Fantasy", Integer, default=0)
    horror_movies: Mapped[int | None] = mapped_column(
        "Horror Movies", Integer, default=0
    )
    international_movies_thrillers: Mapped[int | None] = mapped_column(
        "International Movies Thrillers", Integer, default=0
    )
    international_tv_shows_romantic_tv_shows_tv_dramas: Mapped[int | None] = mapped_column(
        "International TV Shows Romantic TV Shows TV Dramas", Integer, default=0
    )
    kids_tv: Mapped[int | None] = mapped_column("Kids' TV", Integer, default=0)
    language_tv_shows: Mapped[int | None] = mapped_column(
        "Language TV Shows", Integer, default=0
    )
    musicals: Mapped[int | None] = mapped_column("Musicals", Integer, default=0)
    nature_tv: Mapped[int | None] = mapped_column("Nature TV", Integer, default=0)
    reality_tv: Mapped[int | None] = mapped_column("Reality TV", Integer, default=0)
    spirituality: Mapped[int | None] = mapped_column(
        "Spirituality", Integer, default=0
    )
    tv_action: Mapped[int | None] = mapped_column("TV Action", Integer, default=0)
    tv_comedies: Mapped[int | None] = mapped_column("TV Comedies", Integer, default=0)
    tv_dramas: Mapped[int | None] = mapped_column("TV Dramas", Integer, default=0)
    talk_shows_tv_comedies: Mapped[int | None] = mapped_column(
        "Talk Shows TV Comedies", Integer, default=0
    )
    thrillers: Mapped[int | None] = mapped_column("Thrillers", Integer, default=0)

    @classmethod
    def genre_column(cls, genre: Genre) -> InstrumentedAttribute[int | None]:
        """Return the mapped indicator attribute for a taxonomy entry."""

        return getattr(cls, genre.key)

    def genre_set(self) -> GenreSet:
        return GenreSet.from_flags([getattr(self, genre.key) for genre in GENRES])


class _UserRecommendationColumns:
    """Shared layout of the three per-user recommendation tables."""

    user: Mapped[int] = mapped_column("User", Integer, primary_key=True)
    recommended_item_1: Mapped[str | None] = mapped_column(
        "Recommended_Item_1", String(32), nullable=True
    )
    recommended_item_2: Mapped[str | None] = mapped_column(
        "Recommended_Item_2", String(32), nullable=True
    )
    recommended_item_3: Mapped[str | None] = mapped_column(
        "Recommended_Item_3", String(32), nullable=True
    )
    recommended_item_4: Mapped[str | None] = mapped_column(
        "Recommended_Item_4", String(32), nullable=True
    )
    recommended_item_5: Mapped[str | None] = mapped_column(
        "Recommended_Item_5", String(32), nullable=True
    )

    def candidate_ids(self) -> list[str | None]:
        return [
            self.recommended_item_1,
            self.recommended_item_2,
            self.recommended_item_3,
            self.recommended_item_4,
            self.recommended_item_5,
        ]


class LocationRecommendation(_UserRecommendationColumns, Base):
    """Candidates derived from users in the same location."""

    __tablename__ = "location_recommended_shows_ids"


class BasicRecommendation(_UserRecommendationColumns, Base):
    """General-purpose per-user candidates."""

    __tablename__ = "basic_recommended_shows_ids"


class StreamingRecommendation(_UserRecommendationColumns, Base):
    """Candidates derived from the user's streaming subscriptions."""

    __tablename__ = "streaming_recommended_shows_ids"


class NeighborRecord(Base):
    """Similar-title candidates for a single seed title."""

    __tablename__ = "recommender1"

    show_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    original_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    collab1_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    collab2_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    collab3_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    content1_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    content2_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    content3_id: Mapped[str | None] = mapped_column(String(32), nullable=True)

    def collaborative_ids(self) -> list[str | None]:
        return [self.collab1_id, self.collab2_id, self.collab3_id]

    def content_ids(self) -> list[str | None]:
        return [self.content1_id, self.content2_id, self.content3_id]
