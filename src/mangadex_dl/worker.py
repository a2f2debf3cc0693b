from contextlib import aclosing
from dataclasses import dataclass
from pathlib import Path

from .core import Chapter, ChapterDownloader, Manga, ProgressReporter
from .core.fs import ensure_directory
from .errors import MangaDexDLError
from .logger import logger


@dataclass
class DownloadStats:
    saved: int = 0
    skipped: int = 0


def volume_directory(directory: Path, chapter: Chapter) -> Path:
    return directory / f"Volume {chapter.volume:0>2}"


async def download_chapter(
    downloader: ChapterDownloader,
    chapter: Chapter,
    directory: Path,
    reporter: ProgressReporter,
    stats: DownloadStats,
) -> None:
    """Download the pages of one chapter into its volume directory.

    Stops at the first page that fails; pages already saved stay on disk.
    """
    destination = volume_directory(directory, chapter)
    try:
        ensure_directory(destination)
    except MangaDexDLError as e:
        raise e.with_context("create volume directory") from e

    async with aclosing(downloader.download_pages(chapter, destination)) as pages:
        async for page in pages:
            if page.error is not None:
                raise page.error
            if page.skipped:
                stats.skipped += 1
            else:
                stats.saved += 1
            reporter.page_done()


async def download_manga(
    downloader: ChapterDownloader,
    manga: Manga,
    directory: Path,
    reporter: ProgressReporter,
) -> DownloadStats:
    """Download every chapter of a manga, one chapter at a time."""
    logger.info(f"Downloading {manga.title}")
    stats = DownloadStats()

    for chapter in manga.chapters:
        try:
            await download_chapter(downloader, chapter, directory, reporter, stats)
        except MangaDexDLError as e:
            raise e.with_context(f"download {chapter.title}") from e
        reporter.chapter_done()

    logger.info(
        f"Finished {manga.title}: {stats.saved} page(s) saved, "
        f"{stats.skipped} already present"
    )
    return stats
