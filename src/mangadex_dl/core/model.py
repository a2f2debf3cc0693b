from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Chapter:
    """A manga chapter."""

    title: str
    id: str
    # Volume "number", may be empty
    volume: str
    # Chapter "number", zero-padded to sort and name files
    number: str
    page_count: int


@dataclass(frozen=True)
class Manga:
    """A series and its chapters, in ascending chapter order."""

    title: str
    chapters: Tuple[Chapter, ...] = field(default_factory=tuple)

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    @property
    def page_count(self) -> int:
        return sum(chapter.page_count for chapter in self.chapters)
