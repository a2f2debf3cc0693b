"""Tests for MangaDex response models."""

import pytest

from mangadex_dl.core.client import AtHomeServer, ChapterList, ChapterRecord, MangaRecord
from mangadex_dl.errors import DataShapeError


class TestChapterRecord:
    def test_from_dict(self):
        record = ChapterRecord.from_dict(
            {
                "id": "c1",
                "type": "chapter",
                "attributes": {
                    "title": None,
                    "volume": None,
                    "chapter": "10.5",
                    "pages": 22,
                    "translatedLanguage": "en",
                },
            }
        )
        assert record.id == "c1"
        assert record.title is None
        assert record.volume is None
        assert record.chapter == "10.5"
        assert record.pages == 22
        assert record.translated_language == "en"

    def test_missing_attributes(self):
        record = ChapterRecord.from_dict({"id": "c1"})
        assert record.chapter is None
        assert record.pages is None


class TestChapterList:
    def test_from_dict(self):
        page = ChapterList.from_dict(
            {"data": [{"id": "a"}, {"id": "b"}], "limit": 10, "offset": 20, "total": 42}
        )
        assert [r.id for r in page.data] == ["a", "b"]
        assert (page.limit, page.offset, page.total) == (10, 20, 42)

    def test_defaults(self):
        page = ChapterList.from_dict({})
        assert page.data == []
        assert page.total == 0

    @pytest.mark.parametrize(
        "field, value", [("total", "many"), ("limit", [10]), ("offset", "1.5")]
    )
    def test_malformed_count_raises_data_shape_error(self, field, value):
        with pytest.raises(DataShapeError, match=field):
            ChapterList.from_dict({"data": [], field: value})


class TestMangaRecord:
    def test_missing_titles(self):
        record = MangaRecord.from_dict({"data": {"id": "m1", "attributes": {}}})
        assert record.titles == {}


class TestAtHomeServer:
    def test_page_path(self):
        server = AtHomeServer(base_url="https://n", hash="h")
        assert server.page_path("1.png") == "/data/h/1.png"
        assert server.page_path("1.jpg", data_saver=True) == "/data-saver/h/1.jpg"

    def test_missing_chapter(self):
        server = AtHomeServer.from_dict({"baseUrl": "https://n"})
        assert server.hash == ""
        assert server.filenames() == []
