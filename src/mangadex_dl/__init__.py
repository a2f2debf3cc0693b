import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from .cli import apply_overrides, parse_args
from .config import ConfigManager, default_config_path
from .core import (
    ChapterDownloader,
    MangaDexClient,
    ProgressReporter,
    RateLimiter,
    build_manga,
)
from .core.fs import ensure_directory, sanitize_name
from .errors import MangaDexDLError, format_error_chain
from .logger import configure_logger, logger
from .worker import DownloadStats, download_manga


async def run(config: ConfigManager, manga_id: str, start: int = 0) -> DownloadStats:
    """Download one manga as configured."""
    api = config.api
    settings = config.download

    limiter = RateLimiter(api.requests_per_second)
    async with MangaDexClient(
        limiter,
        base_url=api.base_url,
        user_agent=api.user_agent,
        request_timeout=api.request_timeout,
        connect_timeout=api.connect_timeout,
        sock_read_timeout=api.sock_read_timeout,
    ) as client:
        try:
            manga = await build_manga(
                client,
                settings.language,
                manga_id,
                start_offset=start,
                fallback_language=settings.fallback_language,
                page_size=api.page_size,
            )
        except MangaDexDLError as e:
            raise e.with_context("get manga") from e

        # Create manga directory, if necessary.
        destination = Path(settings.output) / sanitize_name(manga.title)
        try:
            ensure_directory(destination)
        except MangaDexDLError as e:
            raise e.with_context("create manga directory") from e

        downloader = ChapterDownloader(client, data_saver=settings.data_saver)
        with ProgressReporter(manga.chapter_count, manga.page_count) as reporter:
            try:
                return await download_manga(downloader, manga, destination, reporter)
            except MangaDexDLError as e:
                raise e.with_context(f"download manga {manga_id}") from e


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    config = ConfigManager(args.config_path or default_config_path())

    if args.init_config:
        config.save()
        logger.info(f"Configuration written to {config.config_path}")
        return

    apply_overrides(config, args)

    # Configure logger from config
    configure_logger(
        console_level=config.log.level,
        file_level=config.log.file_level,
        rotation=config.log.rotation,
        retention=config.log.retention,
        log_name="mangadex_dl",
        log_dir=config.log.log_dir,
    )

    if not config.validate():
        logger.error("Configuration validation failed. Exiting.")
        sys.exit(1)

    try:
        asyncio.run(run(config, args.manga, args.start))
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        sys.exit(130)
    except MangaDexDLError as e:
        logger.error(format_error_chain(e))
        sys.exit(1)
