"""MangaDex API client module."""

from .mangadex import MangaDexClient
from .model import AtHomeServer, ChapterList, ChapterRecord, MangaRecord
from .ratelimit import RateLimiter, with_rate_limit

__all__ = [
    "MangaDexClient",
    "RateLimiter",
    "with_rate_limit",
    "AtHomeServer",
    "ChapterList",
    "ChapterRecord",
    "MangaRecord",
]
