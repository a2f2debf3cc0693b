"""
Core download module.

This module provides:
- MangaDexClient: Rate-limited MangaDex API client
- fetch_chapters: Paginated chapter listing
- ChapterDownloader: Resumable, concurrent page downloads
- build_manga: Manga title and chapter list assembly

Usage:
    from mangadex_dl.core import (
        ChapterDownloader,
        MangaDexClient,
        RateLimiter,
        build_manga,
    )

    async with MangaDexClient(RateLimiter(5)) as client:
        manga = await build_manga(client, "en", manga_id)
        downloader = ChapterDownloader(client)
        async for page in downloader.download_pages(manga.chapters[0], path):
            ...
"""

from .catalog import chapter_from_record, fetch_chapters
from .client import AtHomeServer, MangaDexClient, RateLimiter, with_rate_limit
from .downloader import ChapterDownloader, PageResult
from .manga import build_manga
from .model import Chapter, Manga
from .progress import ProgressReporter

__all__ = [
    # Client
    "MangaDexClient",
    "RateLimiter",
    "with_rate_limit",
    "AtHomeServer",
    # Model
    "Chapter",
    "Manga",
    # Listing
    "fetch_chapters",
    "chapter_from_record",
    "build_manga",
    # Download
    "ChapterDownloader",
    "PageResult",
    "ProgressReporter",
]
