"""Scrape pipeline exceptions."""

from __future__ import annotations


class ScrapeError(RuntimeError):
    """Base error carrying a machine-readable kind alongside the message."""

    kind = "scrape"

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        super().__init__(message)
        if kind:
            self.kind = kind

    @property
    def message(self) -> str:
        return str(self)


class FetchError(ScrapeError):
    kind = "transport"


class PersistenceError(ScrapeError):
    kind = "persistence"


class ScrapeCancelled(ScrapeError):
    kind = "cancelled"
