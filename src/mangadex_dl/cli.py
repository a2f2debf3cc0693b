import argparse
import uuid
from typing import Optional, Sequence

from .config import ConfigManager


def _manga_id(value: str) -> str:
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid manga ID: {value!r}") from None


def _offset(value: str) -> int:
    try:
        offset = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid chapter offset: {value!r}") from None
    if offset < 0:
        raise argparse.ArgumentTypeError("chapter offset must not be negative")
    return offset


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mangadex-dl",
        description="Download manga from MangaDex.",
    )
    parser.add_argument(
        "-m",
        "--manga",
        type=_manga_id,
        help="Manga ID",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Path to the output directory (default: [download] output, or .)",
    )
    parser.add_argument(
        "-l",
        "--lang",
        help="Chapter language (default: [download] language, or en)",
    )
    parser.add_argument(
        "-s",
        "--start",
        type=_offset,
        default=0,
        help="Start downloading from the specified chapter number (default: 0)",
    )
    parser.add_argument(
        "-c",
        "--config",
        dest="config_path",
        help="Path to the configuration file (default: $CONFIG_PATH or config.toml)",
    )
    parser.add_argument(
        "--data-saver",
        dest="data_saver",
        action="store_true",
        default=None,
        help="Download compressed images",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Console log level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--init-config",
        dest="init_config",
        action="store_true",
        help="Write the configuration file with default values and exit",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.init_config and args.manga is None:
        parser.error("the following arguments are required: -m/--manga")
    return args


def apply_overrides(config: ConfigManager, args: argparse.Namespace) -> None:
    """Override file settings with the values given on the command line."""
    settings = config.data
    if args.output is not None:
        settings.download.output = args.output
    if args.lang is not None:
        settings.download.language = args.lang
    if args.data_saver is not None:
        settings.download.data_saver = args.data_saver
    if args.log_level is not None:
        settings.log.level = args.log_level
