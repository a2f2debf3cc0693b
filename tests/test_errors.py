"""Tests for the error taxonomy and context chains."""

from mangadex_dl.errors import (
    DataShapeError,
    FilesystemError,
    MangaDexDLError,
    TransportError,
    format_error_chain,
)


class TestWithContext:
    def test_keeps_kind_and_operation(self):
        inner = TransportError("get page: 404", operation="get page")
        outer = inner.with_context("save page 001-000.png")

        assert isinstance(outer, TransportError)
        assert outer.operation == "get page"
        assert str(outer) == "save page 001-000.png"

    def test_kinds_share_base(self):
        for kind in (TransportError, DataShapeError, FilesystemError):
            assert issubclass(kind, MangaDexDLError)


class TestFormatErrorChain:
    def test_single(self):
        assert format_error_chain(DataShapeError("missing manga title")) == (
            "missing manga title"
        )

    def test_chain(self):
        try:
            try:
                try:
                    raise OSError("No space left on device")
                except OSError as e:
                    raise FilesystemError("write 001-000.png") from e
            except FilesystemError as e:
                raise e.with_context("download Chapter 1") from e
        except FilesystemError as e:
            chain = format_error_chain(e)

        assert chain == (
            "download Chapter 1: write 001-000.png: No space left on device"
        )

    def test_empty_message_uses_type_name(self):
        assert format_error_chain(TimeoutError()) == "TimeoutError"
