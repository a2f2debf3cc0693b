"""
Chapter page downloader.

Pages are saved as ``<chapter number>-<page index>.<ext>``. A page whose file
already exists is not downloaded again, which makes an interrupted run safe
to resume.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional

from mangadex_dl.errors import MangaDexDLError
from mangadex_dl.logger import logger

from .client import AtHomeServer, MangaDexClient
from .fs import atomic_write, extension_from_url
from .model import Chapter


def page_filename(number: str, index: int, ext: str) -> str:
    return f"{number}-{index:03d}.{ext}"


@dataclass
class PageResult:
    index: int
    filename: str
    path: Path
    skipped: bool = False
    error: Optional[MangaDexDLError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ChapterDownloader:
    """Download the pages of a chapter into a directory.

    The delivery server is requested for every chapter since MangaDex only
    guarantees it for a short while.
    """

    def __init__(self, client: MangaDexClient, data_saver: bool = False):
        self._client = client
        self._data_saver = data_saver

    @property
    def client(self) -> MangaDexClient:
        return self._client

    async def download_pages(
        self,
        chapter: Chapter,
        destination: Path,
        server: Optional[AtHomeServer] = None,
    ) -> AsyncIterator[PageResult]:
        """Yield one result per page, in completion order.

        Pages are downloaded concurrently; the shared rate limiter is the only
        throttle. Closing the generator early cancels the pages still in
        flight.

        Args:
            chapter: Chapter to download
            destination: Existing directory receiving the pages
            server: Delivery server to use instead of requesting a new one
        """
        if server is None:
            server = await self._client.get_at_home_server(chapter.id)

        filenames = server.filenames(self._data_saver)
        logger.debug(
            f"Chapter {chapter.number}: {len(filenames)} page(s) from {server.base_url}"
        )

        # Filenames come sorted, their position is the page order
        tasks = [
            asyncio.create_task(self._save_page(chapter, server, i, name, destination))
            for i, name in enumerate(filenames)
        ]
        try:
            for next_done in asyncio.as_completed(tasks):
                yield await next_done
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

    async def _save_page(
        self,
        chapter: Chapter,
        server: AtHomeServer,
        index: int,
        remote_name: str,
        destination: Path,
    ) -> PageResult:
        url = MangaDexClient.page_url(server, remote_name, self._data_saver)
        filename = page_filename(chapter.number, index, extension_from_url(url))
        path = destination / filename

        if path.is_file():
            logger.debug(f"Skip existing page {filename}")
            return PageResult(index=index, filename=filename, path=path, skipped=True)

        try:
            data = await self._client.fetch_bytes(url)
            await asyncio.to_thread(atomic_write, path, data)
        except MangaDexDLError as e:
            error = e.with_context(f"save page {filename}")
            error.__cause__ = e
            return PageResult(index=index, filename=filename, path=path, error=error)

        logger.debug(f"Saved page {filename} ({len(data)} bytes)")
        return PageResult(index=index, filename=filename, path=path)
