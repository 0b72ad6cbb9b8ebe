"""Request-scoped error types raised by the catalog services."""

from __future__ import annotations


class UnrecognizedGenreError(ValueError):
    """Raised when a genre label is not part of the taxonomy."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Unrecognized genre: {label!r}")


class TitleNotFoundError(KeyError):
    """Raised when a title is missing or hidden by the kids-mode policy.

    Both cases share this error so callers cannot probe for restricted titles.
    """

    def __init__(self, show_id: str) -> None:
        self.show_id = show_id
        super().__init__(f"Title {show_id} not found")

    def __str__(self) -> str:
        # KeyError quotes its argument; the API surfaces this text directly.
        return str(self.args[0])
