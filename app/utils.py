"""Utility helpers for the Marquee service."""

from __future__ import annotations

import logging
import re
from typing import Iterable

logger = logging.getLogger(__name__)

DEFAULT_USER_KEY = 1

HEX_PREFIX_RE = re.compile(r"[0-9a-fA-F]+")


def map_user_key(
    external_user_id: str,
    *,
    key_space: int = 200,
    prefix_length: int = 8,
) -> int:
    """Map an external user identifier onto the precomputed key range.

    The first ``prefix_length`` characters are read as a base-16 integer and
    folded into ``[1, key_space]``. Identifiers that are too short or not
    hexadecimal map to :data:`DEFAULT_USER_KEY`.

    Many identifiers share a key: the recommendation tables cover a small
    synthetic population rather than every account.
    """

    prefix = (external_user_id or "")[:prefix_length]
    if len(prefix) < prefix_length or not HEX_PREFIX_RE.fullmatch(prefix):
        logger.info(
            "User id is not hex-prefixed; using default recommendation key %s",
            DEFAULT_USER_KEY,
        )
        return DEFAULT_USER_KEY
    return int(prefix, 16) % key_space + 1


def unique_ids(candidates: Iterable[str | None], *, exclude: Iterable[str] = ()) -> list[str]:
    """Return non-empty ids in first-seen order without duplicates."""

    seen = set(exclude)
    ordered: list[str] = []
    for candidate in candidates:
        if candidate is None:
            continue
        value = candidate.strip()
        if not value or value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return ordered
