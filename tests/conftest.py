"""Shared test helpers and fixtures."""

from typing import Optional

import pytest

from mangadex_dl.core.client import AtHomeServer, ChapterList, ChapterRecord
from mangadex_dl.core.model import Chapter


def make_record(
    chapter: Optional[str] = "1",
    id: Optional[str] = None,
    title: Optional[str] = "Chapter",
    volume: Optional[str] = "1",
    pages: object = 20,
) -> ChapterRecord:
    """Helper to build a raw chapter listing entry."""
    return ChapterRecord(
        id=id or f"chapter-{chapter}",
        title=title,
        volume=volume,
        chapter=chapter,
        pages=pages,
    )


def make_chapter(
    number: str = "001",
    title: str = "Chapter 1",
    volume: str = "1",
    page_count: int = 3,
    id: str = "chapter-1",
) -> Chapter:
    """Helper to build a Chapter instance."""
    return Chapter(
        title=title, id=id, volume=volume, number=number, page_count=page_count
    )


class FakeListingClient:
    """Serve scripted chapter pages, keyed by offset."""

    def __init__(self, pages: dict[int, ChapterList]):
        self.pages = pages
        self.offsets: list[int] = []

    async def list_chapters(self, manga_id, language, offset=0, limit=100):
        self.offsets.append(offset)
        return self.pages.get(offset, ChapterList(data=[], limit=limit, total=0))


def make_listing(total: int, start: int, limit: int) -> FakeListingClient:
    """Build a client paging through chapters 1..total, `limit` per page."""
    pages = {}
    for offset in range(start, total, limit):
        records = [
            make_record(chapter=str(n + 1))
            for n in range(offset, min(offset + limit, total))
        ]
        pages[offset] = ChapterList(data=records, limit=limit, offset=offset, total=total)
    return FakeListingClient(pages)


@pytest.fixture
def server() -> AtHomeServer:
    return AtHomeServer(
        base_url="https://cdn.example.org",
        hash="abc123",
        data=["x1-aaa.png", "x2-bbb.png", "x3-ccc.jpg"],
        data_saver=["x1-aaa.jpg", "x2-bbb.jpg", "x3-ccc.jpg"],
    )
