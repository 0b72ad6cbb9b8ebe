"""Kids-mode content rating policy.

The predicate and the SQL clause below must stay in agreement: candidate
selection happens in the database, hydrated items are checked in memory.
"""

from __future__ import annotations

from sqlalchemy import ColumnElement, or_
from sqlalchemy.orm import InstrumentedAttribute

CONTENT_RATINGS: tuple[str, ...] = (
    "G",
    "PG",
    "PG-13",
    "R",
    "NC-17",
    "NR",
    "UR",
    "TV-Y",
    "TV-Y7",
    "TV-Y7-FV",
    "TV-G",
    "TV-PG",
    "TV-14",
    "TV-MA",
)

KIDS_MODE_DENYLIST: frozenset[str] = frozenset(
    {"PG-13", "TV-14", "TV-MA", "R", "NR", "TV-Y7-FV", "UR"}
)


def is_allowed_under_kids_mode(content_rating: str | None) -> bool:
    """Return ``False`` only for ratings on the kids-mode denylist."""

    if content_rating is None:
        return True
    return content_rating not in KIDS_MODE_DENYLIST


def kids_mode_clause(rating_column: InstrumentedAttribute[str | None]) -> ColumnElement[bool]:
    """SQL counterpart of :func:`is_allowed_under_kids_mode`."""

    return or_(
        rating_column.is_(None),
        rating_column.not_in(sorted(KIDS_MODE_DENYLIST)),
    )
