import asyncio
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import aiohttp

from mangadex_dl.errors import TransportError
from mangadex_dl.logger import logger

from .model import AtHomeServer, ChapterList, MangaRecord
from .ratelimit import RateLimiter, with_rate_limit


class MangaDexClient:
    """Rate-limited MangaDex API client.

    Every request, whether a JSON API call or a raw page download, waits on
    the same ``RateLimiter`` before it is sent.
    """

    def __init__(
        self,
        limiter: RateLimiter,
        base_url: str = "https://api.mangadex.org",
        user_agent: str = "mangadex-dl/1.0",
        request_timeout: float = 30.0,
        connect_timeout: float = 30.0,
        sock_read_timeout: float = 30.0,
    ):
        self.limiter = limiter
        self.base_url = base_url.rstrip("/")
        self.headers = {"User-Agent": user_agent}
        self._timeout = aiohttp.ClientTimeout(
            total=request_timeout,
            connect=connect_timeout,
            sock_read=sock_read_timeout,
        )
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Lazy-initialize the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self.headers,
                timeout=self._timeout,
                trust_env=True,
            )
        return self._session

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "MangaDexClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @with_rate_limit
    async def _get_json(
        self, operation: str, url: str, params: Any = None
    ) -> Dict[str, Any]:
        """GET a MangaDex endpoint and return the decoded JSON body."""
        logger.debug(f"{operation}: GET {url} {params or ''}")
        try:
            async with self.session.get(url, params=params) as response:
                response.raise_for_status()
                data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise TransportError(operation, operation=operation) from e

        if not isinstance(data, dict):
            raise TransportError(
                f"{operation}: unexpected response body", operation=operation
            )
        if data.get("result", "ok") != "ok":
            details = "; ".join(
                err.get("detail") or err.get("title") or ""
                for err in data.get("errors") or []
            )
            raise TransportError(
                f"{operation}: API error {details or data.get('result')}",
                operation=operation,
            )
        return data

    @with_rate_limit
    async def fetch_bytes(self, url: str) -> bytes:
        """Download a raw resource (page image)."""
        operation = "get page"
        logger.debug(f"{operation}: GET {url}")
        try:
            async with self.session.get(url) as response:
                response.raise_for_status()
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(operation, operation=operation) from e

    async def list_chapters(
        self, manga_id: str, language: str, offset: int = 0, limit: int = 100
    ) -> ChapterList:
        """
        List the chapters of a manga in one language, ascending by chapter number.
        Endpoint: GET /chapter
        """
        url = f"{self.base_url}/chapter"
        params = [
            ("manga", manga_id),
            ("translatedLanguage[]", language),
            ("order[chapter]", "asc"),
            ("offset", str(offset)),
            ("limit", str(limit)),
        ]
        data = await self._get_json("ListChapter", url, params)
        return ChapterList.from_dict(data)

    async def get_manga(self, manga_id: str) -> MangaRecord:
        """
        Get manga metadata.
        Endpoint: GET /manga/{id}
        """
        url = f"{self.base_url}/manga/{manga_id}"
        data = await self._get_json("GetManga", url)
        return MangaRecord.from_dict(data)

    async def get_at_home_server(self, chapter_id: str) -> AtHomeServer:
        """
        Get the delivery server for a chapter's pages.
        Endpoint: GET /at-home/server/{chapterId}
        """
        url = f"{self.base_url}/at-home/server/{chapter_id}"
        data = await self._get_json("GetChapter", url)
        return AtHomeServer.from_dict(data)

    @staticmethod
    def page_url(server: AtHomeServer, filename: str, data_saver: bool = False) -> str:
        # The page path is absolute and replaces any path on the base URL
        return urljoin(server.base_url, server.page_path(filename, data_saver))
