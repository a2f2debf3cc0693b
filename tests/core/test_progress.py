"""Tests for ProgressReporter."""

from mangadex_dl.core.progress import ProgressReporter


class TestProgressReporter:
    def test_counters(self):
        with ProgressReporter(chapter_total=2, page_total=5, disable=True) as reporter:
            reporter.page_done()
            reporter.page_done()
            reporter.chapter_done()

            assert reporter.chapters.total == 2
            assert reporter.pages.total == 5
            assert reporter.chapters.n == 1
            assert reporter.pages.n == 2

    def test_zero_totals(self):
        reporter = ProgressReporter(chapter_total=0, page_total=0, disable=True)
        reporter.close()
