"""
Chapter listing.

The chapter endpoint returns bounded pages plus an authoritative ``total``.
When a language filter is applied the server may report a total that the
filtered pages never reach, so the loop also stops when a round adds nothing.
"""

from typing import List

from mangadex_dl.errors import DataShapeError
from mangadex_dl.logger import logger

from .client import ChapterRecord, MangaDexClient
from .model import Chapter

# Page counts are stored as unsigned 16-bit values upstream
MAX_PAGE_COUNT = 0xFFFF


def chapter_from_record(record: ChapterRecord) -> Chapter:
    """Build a Chapter from a raw listing entry.

    Raises:
        DataShapeError: the chapter number is missing or the page count is
            not an integer in ``0..MAX_PAGE_COUNT``.
    """
    if record.chapter is None:
        raise DataShapeError(f"missing chapter number (chapter {record.id})")

    pages = record.pages
    if (
        isinstance(pages, bool)
        or not isinstance(pages, int)
        or not 0 <= pages <= MAX_PAGE_COUNT
    ):
        raise DataShapeError(f"invalid page count {pages!r} (chapter {record.id})")

    return Chapter(
        title=record.title or "",
        id=record.id,
        volume=record.volume or "",
        number=f"{record.chapter:0>3}",
        page_count=pages,
    )


async def fetch_chapters(
    client: MangaDexClient,
    manga_id: str,
    language: str,
    start_offset: int = 0,
    page_size: int = 100,
) -> List[Chapter]:
    """Fetch every chapter of a manga from ``start_offset`` on.

    Args:
        client: Rate-limited MangaDex client
        manga_id: Manga UUID
        language: Translated language to keep (e.g. "en")
        start_offset: Number of leading chapters to skip
        page_size: Requested page size; the server's reported limit is used
            to advance the offset

    Returns:
        Chapters in ascending chapter order, without duplicates.
    """
    if start_offset < 0:
        raise ValueError("start_offset must not be negative")

    chapters: List[Chapter] = []
    seen: set[str] = set()
    offset = start_offset

    while True:
        page = await client.list_chapters(
            manga_id, language, offset=offset, limit=page_size
        )
        if page.total < start_offset:
            raise DataShapeError(
                f"chapter total {page.total} is smaller than start offset {start_offset}"
            )
        target = page.total - start_offset

        old_len = len(chapters)
        for record in page.data:
            if record.id in seen:
                continue
            seen.add(record.id)
            chapters.append(chapter_from_record(record))
        # The last page may overshoot the total
        del chapters[target:]

        logger.debug(
            f"Chapter page at offset {offset}: {len(page.data)} item(s), "
            f"{len(chapters)}/{target} collected"
        )

        if len(chapters) == target:
            break
        if len(chapters) == old_len:
            logger.warning(
                f"Chapter listing stopped early for {manga_id}: collected "
                f"{len(chapters)} of {target} reported chapter(s) ({language})"
            )
            break

        offset += page.limit

    return chapters
