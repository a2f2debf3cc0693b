"""Filesystem helpers."""

import os
import re
import tempfile
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

from mangadex_dl.errors import FilesystemError

# Used when the URL path carries no extension
DEFAULT_EXTENSION = "bin"


def sanitize_name(name: str) -> str:
    """Remove or replace characters that are invalid in filenames."""
    # Invalid chars for Windows: < > : " / \ | ? *
    invalid_chars = r'[<>:"/\\|?*\x00-\x1f]'
    sanitized = re.sub(invalid_chars, " ", name)
    # Windows also refuses trailing dots
    sanitized = sanitized.strip().rstrip(".").strip()
    return sanitized


def extension_from_url(url: str) -> str:
    """Return the extension of the URL path, without the leading dot."""
    suffix = PurePosixPath(urlparse(url).path).suffix
    return suffix[1:].lower() if len(suffix) > 1 else DEFAULT_EXTENSION


def ensure_directory(path: Path) -> None:
    """Create a directory and its parents, if necessary."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"create directory {path}") from e


def atomic_write(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` without ever exposing a partial file.

    The bytes go to a hidden temporary file in the same directory, which is
    then renamed over ``path``.
    """
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".part"
        )
    except OSError as e:
        raise FilesystemError(f"write {path.name}") from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise FilesystemError(f"write {path.name}") from e
