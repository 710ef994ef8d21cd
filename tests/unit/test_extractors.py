"""
Unit tests for the input line source
"""

import pytest
from ingestion.extractors.line_source import LineSource
from core.exceptions import FileExtractionError


class TestLineSource:
    """Test LineSource iteration"""

    def test_lines_are_numbered_from_one(self, write_input):
        path = write_input(["first", "second", "third"])

        lines = list(LineSource(path))

        assert [line.line_number for line in lines] == [1, 2, 3]
        assert [line.content for line in lines] == ["first", "second", "third"]

    @pytest.mark.parametrize("newline", ["\n", "\r\n", "\r"])
    def test_terminator_style_does_not_change_count(self, write_input, newline):
        path = write_input(["a|b", "c|d", "e|f", "g|h"], newline=newline)

        lines = list(LineSource(path))

        assert len(lines) == 4
        assert lines[-1].line_number == 4
        assert lines[1].content == "c|d"

    def test_blank_lines_are_kept(self, write_input):
        path = write_input(["a", "", "b"])

        lines = list(LineSource(path))

        assert [line.content for line in lines] == ["a", "", "b"]
        assert lines[2].line_number == 3

    def test_last_line_without_terminator(self, tmp_path):
        path = tmp_path / "no_newline.dat"
        path.write_text("one\ntwo", encoding="utf-8")

        lines = list(LineSource(str(path)))

        assert [line.content for line in lines] == ["one", "two"]

    def test_new_iteration_restarts_at_line_one(self, write_input):
        source = LineSource(write_input(["x", "y"]))

        first = next(iter(source))
        again = list(source)

        assert first.line_number == 1
        assert [line.line_number for line in again] == [1, 2]

    def test_undecodable_bytes_do_not_abort(self, tmp_path):
        path = tmp_path / "latin1.dat"
        path.write_bytes("Jos\xe9|ok\nnext\n".encode("latin-1"))

        lines = list(LineSource(str(path)))

        assert len(lines) == 2
        assert lines[0].content.startswith("Jos")

    def test_configured_encoding(self, tmp_path):
        path = tmp_path / "latin1.dat"
        path.write_bytes("Jos\xe9|ok\n".encode("latin-1"))

        lines = list(LineSource(str(path), encoding="latin-1"))

        assert lines[0].content == "Jos\xe9|ok"

    def test_missing_file_raises_on_iteration(self, tmp_path):
        source = LineSource(str(tmp_path / "missing.dat"))

        with pytest.raises(FileExtractionError) as exc_info:
            list(source)

        assert exc_info.value.context["file_path"].endswith("missing.dat")
        assert isinstance(exc_info.value.original_exception, FileNotFoundError)

    def test_byte_order_mark_is_dropped(self, tmp_path):
        path = tmp_path / "bom.dat"
        path.write_bytes("\ufeffAna|Lopez\nB\ufeff|x\n".encode("utf-8"))

        lines = list(LineSource(str(path)))

        assert lines[0].content == "Ana|Lopez"
        assert lines[1].content == "B\ufeff|x"
