"""
Custom exceptions for the loot scraper.

Fetch failures are the only errors that can abort a run; parse problems
are absorbed where they happen and never surface as exceptions.
"""


class ArcLootError(Exception):
    pass


class FetchError(ArcLootError):
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch '{url}': {reason}")


class ExtractionError(ArcLootError):
    pass


class StorageError(ArcLootError):
    pass
