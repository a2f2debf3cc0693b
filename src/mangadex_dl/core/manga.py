from mangadex_dl.errors import DataShapeError
from mangadex_dl.logger import logger

from .catalog import fetch_chapters
from .client import MangaDexClient
from .model import Manga


async def build_manga(
    client: MangaDexClient,
    language: str,
    manga_id: str,
    start_offset: int = 0,
    fallback_language: str = "en",
    page_size: int = 100,
) -> Manga:
    """Fetch a manga's title and its chapter list.

    The title uses ``language`` when available and ``fallback_language``
    otherwise.

    Raises:
        DataShapeError: the manga has a title in neither language.
        TransportError: one of the API calls failed.
    """
    record = await client.get_manga(manga_id)
    title = record.titles.get(language) or record.titles.get(fallback_language)
    if not title:
        raise DataShapeError("missing manga title")

    chapters = await fetch_chapters(
        client, manga_id, language, start_offset=start_offset, page_size=page_size
    )
    manga = Manga(title=title, chapters=tuple(chapters))
    logger.info(
        f"{manga.title}: {manga.chapter_count} chapter(s), {manga.page_count} page(s)"
    )
    return manga
