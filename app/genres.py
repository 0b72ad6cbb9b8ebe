"""Fixed genre taxonomy and the bitset used to hold a title's genres.

The order of :data:`GENRES` is the priority ranking used to pick a title's
primary genre. It is a global constant and never derived from catalog data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from .errors import UnrecognizedGenreError

OTHER_GENRE = "Other"


@dataclass(frozen=True)
class Genre:
    """A canonical genre label and the catalog column that stores it."""

    label: str
    column: str
    key: str
    aliases: tuple[str, ...] = ()


GENRES: tuple[Genre, ...] = (
    Genre("Action", "Action", "action"),
    Genre("Adventure", "Adventure", "adventure"),
    Genre(
        "Anime Series International TV Shows",
        "Anime Series International TV Shows",
        "anime_series_international_tv_shows",
        aliases=("Anime",),
    ),
    Genre(
        "British TV Shows Docuseries International TV Shows",
        "British TV Shows Docuseries International TV Shows",
        "british_tv_shows_docuseries_international_tv_shows",
    ),
    Genre("Children", "Children", "children"),
    Genre("Comedy", "Comedies", "comedies"),
    Genre(
        "Comedy Dramas International Movies",
        "Comedies Dramas International Movies",
        "comedies_dramas_international_movies",
    ),
    Genre(
        "Comedy Romantic Movies",
        "Comedies Romantic Movies",
        "comedies_romantic_movies",
    ),
    Genre(
        "Crime TV Shows Docuseries",
        "Crime TV Shows Docuseries",
        "crime_tv_shows_docuseries",
    ),
    Genre("Documentaries", "Documentaries", "documentaries"),
    Genre(
        "Documentaries International Movies",
        "Documentaries International Movies",
        "documentaries_international_movies",
    ),
    Genre("Docuseries", "Docuseries", "docuseries"),
    Genre("Drama", "Dramas", "dramas"),
    Genre(
        "Drama International Movies",
        "Dramas International Movies",
        "dramas_international_movies",
    ),
    Genre(
        "Drama Romantic Movies",
        "Dramas Romantic Movies",
        "dramas_romantic_movies",
    ),
    Genre("Family Movies", "Family Movies", "family_movies", aliases=("Family",)),
    Genre("Fantasy", "Fantasy", "fantasy"),
    Genre("Horror", "Horror Movies", "horror_movies"),
    Genre(
        "International Movies Thrillers",
        "International Movies Thrillers",
        "international_movies_thrillers",
    ),
    Genre(
        "International TV Shows Romantic TV Shows TV Dramas",
        "International TV Shows Romantic TV Shows TV Dramas",
        "international_tv_shows_romantic_tv_shows_tv_dramas",
    ),
    Genre("Kids' TV", "Kids' TV", "kids_tv", aliases=("Kids TV",)),
    Genre("Language TV Shows", "Language TV Shows", "language_tv_shows"),
    Genre("Musicals", "Musicals", "musicals", aliases=("Musical",)),
    Genre("Nature TV", "Nature TV", "nature_tv"),
    Genre("Reality TV", "Reality TV", "reality_tv"),
    Genre("Spirituality", "Spirituality", "spirituality"),
    Genre("TV Action", "TV Action", "tv_action"),
    Genre("TV Comedies", "TV Comedies", "tv_comedies"),
    Genre("TV Dramas", "TV Dramas", "tv_dramas"),
    Genre(
        "Talk Shows TV Comedies",
        "Talk Shows TV Comedies",
        "talk_shows_tv_comedies",
    ),
    Genre("Thriller", "Thrillers", "thrillers"),
)

GENRE_LABELS: tuple[str, ...] = tuple(genre.label for genre in GENRES)

_POSITIONS: dict[str, int] = {genre.label: index for index, genre in enumerate(GENRES)}


def _normalize(label: str) -> str:
    return " ".join(label.split()).casefold()


def _build_lookup() -> dict[str, Genre]:
    lookup: dict[str, Genre] = {}
    for genre in GENRES:
        for name in (genre.label, genre.column, *genre.aliases):
            normalized = _normalize(name)
            existing = lookup.get(normalized)
            if existing is not None and existing is not genre:
                raise RuntimeError(f"Genre alias {name!r} is ambiguous")
            lookup[normalized] = genre
    return lookup


_LOOKUP = _build_lookup()


def resolve_genre(label: str) -> Genre:
    """Return the taxonomy entry for a label, column name or alias.

    Matching ignores case and repeated whitespace. Unknown labels raise
    :class:`UnrecognizedGenreError`.
    """

    genre = _LOOKUP.get(_normalize(label or ""))
    if genre is None:
        raise UnrecognizedGenreError(label)
    return genre


@dataclass(frozen=True)
class GenreSet:
    """Fixed-size bitset over :data:`GENRES`; bit ``i`` is ``GENRES[i]``."""

    mask: int = 0

    @classmethod
    def from_flags(cls, flags: Sequence[object]) -> "GenreSet":
        """Build a set from indicator values listed in taxonomy order.

        Storage keeps indicators as ``0``/``1`` integers (sometimes ``NULL``);
        only a value equal to ``1`` or ``True`` counts as membership.
        """

        if len(flags) != len(GENRES):
            raise ValueError(
                f"Expected {len(GENRES)} genre indicators, received {len(flags)}"
            )
        mask = 0
        for index, value in enumerate(flags):
            if value == 1:
                mask |= 1 << index
        return cls(mask)

    @classmethod
    def from_labels(cls, labels: Iterable[str]) -> "GenreSet":
        mask = 0
        for label in labels:
            mask |= 1 << _POSITIONS[resolve_genre(label).label]
        return cls(mask)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Genre):
            label = item.label
        elif isinstance(item, str):
            try:
                label = resolve_genre(item).label
            except UnrecognizedGenreError:
                return False
        else:
            return False
        return bool(self.mask >> _POSITIONS[label] & 1)

    def __iter__(self) -> Iterator[Genre]:
        mask = self.mask
        while mask:
            lowest = mask & -mask
            yield GENRES[lowest.bit_length() - 1]
            mask ^= lowest

    def __len__(self) -> int:
        return bin(self.mask).count("1")

    def __bool__(self) -> bool:
        return self.mask != 0

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(genre.label for genre in self)

    @property
    def primary(self) -> str:
        if not self.mask:
            return OTHER_GENRE
        return GENRES[(self.mask & -self.mask).bit_length() - 1].label


def genres_of(genres: GenreSet) -> tuple[str, ...]:
    """Return every genre label in the set, in taxonomy order."""

    return genres.labels


def primary_genre(genres: GenreSet) -> str:
    """Return the highest-priority genre label or ``"Other"``."""

    return genres.primary
