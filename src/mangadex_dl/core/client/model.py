from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from mangadex_dl.errors import DataShapeError


@dataclass
class ChapterRecord:
    """Raw chapter entry as returned by ``GET /chapter``."""

    id: str
    title: Optional[str] = None
    volume: Optional[str] = None
    chapter: Optional[str] = None
    pages: Any = None
    translated_language: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ChapterRecord":
        attributes = d.get("attributes") or {}
        return cls(
            id=d.get("id", ""),
            title=attributes.get("title"),
            volume=attributes.get("volume"),
            chapter=attributes.get("chapter"),
            pages=attributes.get("pages"),
            translated_language=attributes.get("translatedLanguage"),
        )


def _count(d: Dict[str, Any], key: str) -> int:
    value = d.get(key) or 0
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise DataShapeError(f"invalid {key} {value!r} in chapter list") from e


@dataclass
class ChapterList:
    """One page of the chapter listing."""

    data: List[ChapterRecord] = field(default_factory=list)
    limit: int = 0
    offset: int = 0
    total: int = 0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ChapterList":
        return cls(
            data=[ChapterRecord.from_dict(r) for r in d.get("data") or []],
            limit=_count(d, "limit"),
            offset=_count(d, "offset"),
            total=_count(d, "total"),
        )


@dataclass
class MangaRecord:
    id: str
    titles: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MangaRecord":
        # GET /manga/{id} wraps the entity in "data"
        entity = d.get("data") or {}
        attributes = entity.get("attributes") or {}
        return cls(
            id=entity.get("id", ""),
            titles=dict(attributes.get("title") or {}),
        )


@dataclass
class AtHomeServer:
    """Ephemeral delivery location for one chapter's page images.

    The base URL is only valid for a short while, so a new one is requested
    for every chapter download.
    """

    base_url: str
    hash: str
    data: List[str] = field(default_factory=list)
    data_saver: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AtHomeServer":
        chapter = d.get("chapter") or {}
        return cls(
            base_url=d.get("baseUrl", ""),
            hash=chapter.get("hash", ""),
            data=list(chapter.get("data") or []),
            data_saver=list(chapter.get("dataSaver") or []),
        )

    def filenames(self, data_saver: bool = False) -> List[str]:
        return self.data_saver if data_saver else self.data

    def page_path(self, filename: str, data_saver: bool = False) -> str:
        quality = "data-saver" if data_saver else "data"
        return f"/{quality}/{self.hash}/{filename}"
