from tqdm import tqdm

BAR_FORMAT = "{desc:10}    [{bar:40}] {n_fmt:>4}/{total_fmt:4}"
PAGE_BAR_FORMAT = BAR_FORMAT + " ETA: {remaining}"


class ProgressReporter:
    """Chapter and page progress bars."""

    def __init__(self, chapter_total: int, page_total: int, disable: bool = False):
        self.chapters = tqdm(
            total=chapter_total,
            desc="chapter",
            position=0,
            bar_format=BAR_FORMAT,
            ascii="-#",
            disable=disable,
        )
        self.pages = tqdm(
            total=page_total,
            desc="pages",
            position=1,
            bar_format=PAGE_BAR_FORMAT,
            ascii="-#",
            disable=disable,
        )

    def chapter_done(self) -> None:
        self.chapters.update(1)

    def page_done(self) -> None:
        self.pages.update(1)

    def close(self) -> None:
        self.pages.close()
        self.chapters.close()

    def __enter__(self) -> "ProgressReporter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
