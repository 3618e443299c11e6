"""
Tests for the Line Router
=========================

These tests verify that whole dumps are routed through the transcoder
line by line, from iterables and from files.
"""

import pytest

from bindump.config import TranscoderConfig
from bindump.errors import InputFileError, OutputFileError
from bindump.router import (
    RouterStats,
    process_file,
    process_file_to_file,
    process_stream,
    strip_terminator,
)
from bindump.transcoder import LineTranscoder, OutputMode


# =============================================================================
# Line Terminators
# =============================================================================

class TestStripTerminator:
    """Tests for strip_terminator()."""

    def test_newline(self):
        assert strip_terminator("abc\n") == "abc"

    def test_carriage_return_kept(self):
        """Only the newline is a terminator; a CR before it is content."""
        assert strip_terminator("abc\r\n") == "abc\r"

    def test_no_terminator(self):
        assert strip_terminator("abc") == "abc"

    def test_only_one_terminator_removed(self):
        assert strip_terminator("abc\n\n") == "abc\n"


# =============================================================================
# Stream Processing
# =============================================================================

class TestProcessStream:
    """Tests for process_stream()."""

    def test_full_output(self, sample_lines, full_output):
        output = []
        process_stream([line + "\n" for line in sample_lines], output.append)

        assert output == full_output

    def test_binary_only_output(self, sample_lines, binary_output):
        output = []
        transcoder = LineTranscoder(mode=OutputMode.BINARY_ONLY)
        process_stream(sample_lines, output.append, transcoder)

        assert output == binary_output

    def test_plain_lines_pass_through(self):
        """A dump without instruction lines comes back unchanged."""
        lines = ["", "hello:     file format elf32-i386", "08049000 <_start>:", "foo\tbar"]
        output = []
        process_stream(lines, output.append)

        assert output == lines

    def test_plain_lines_dropped_in_binary_only(self):
        output = []
        transcoder = LineTranscoder(mode=OutputMode.BINARY_ONLY)
        process_stream(["08049000 <start>:\n", "\n"], output.append, transcoder)

        assert output == []

    def test_crlf_input(self):
        """CR stays on plain lines and is not rendered in the byte field."""
        output = []
        process_stream(["08049000 <start>:\r\n", " 8049141:\t00\r\n"], output.append)

        assert output[0] == "08049000 <start>:\r"
        assert output[1] == " 8049141:\t0000 " + " " * 30

    def test_stats(self, sample_lines):
        output = []
        transcoder = LineTranscoder(mode=OutputMode.BINARY_ONLY)
        stats = process_stream(sample_lines, output.append, transcoder)

        assert stats == RouterStats(
            lines_read=11,
            instruction_lines=4,
            plain_lines=7,
            lines_written=4,
            malformed_tokens=0,
        )
        assert "11 lines read" in stats.summary()


# =============================================================================
# File Processing
# =============================================================================

class TestProcessFile:
    """Tests for process_file() and process_file_to_file()."""

    def test_full_output(self, sample_dump, sample_lines, full_output):
        output = []
        stats = process_file(sample_dump, output.append)

        assert output == full_output
        assert stats.lines_written == len(sample_lines)

    def test_binary_only_output(self, sample_dump, binary_output):
        output = []
        process_file(sample_dump, output.append, mode=OutputMode.BINARY_ONLY)

        assert output == binary_output

    def test_config_applied(self, sample_dump):
        output = []
        process_file(
            sample_dump, output.append, TranscoderConfig(slots=2), OutputMode.BINARY_ONLY
        )

        assert output == ["1011 0000 ", "1100 1000 ", "1100 0000 ", "0000 0000 "]

    def test_lone_carriage_return_does_not_split(self, tmp_path):
        """Only newlines end a line; a bare CR stays inside it."""
        dump = tmp_path / "cr.dump"
        dump.write_bytes(b"abc\rdef\n")
        output = []

        stats = process_file(dump, output.append)

        assert output == ["abc\rdef"]
        assert stats.lines_read == 1

    def test_crlf_plain_file_round_trips(self, tmp_path):
        """A CRLF dump of plain lines is written back byte for byte."""
        data = b"hello:     file format elf32-i386\r\n\r\n08049000 <_start>:\r\n"
        dump = tmp_path / "crlf.dump"
        dump.write_bytes(data)
        target = tmp_path / "out.txt"

        process_file_to_file(dump, target)

        assert target.read_bytes() == data

    def test_missing_file(self, tmp_path):
        """A missing dump raises before anything is emitted."""
        missing = tmp_path / "missing.dump"
        output = []

        with pytest.raises(InputFileError, match="missing.dump") as exc_info:
            process_file(missing, output.append)

        assert output == []
        assert exc_info.value.filename == str(missing)
        assert str(exc_info.value) == f"Failed to open {missing} for input."

    def test_to_file(self, sample_dump, tmp_path, binary_output):
        target = tmp_path / "hello.bin.txt"
        process_file_to_file(sample_dump, target, mode=OutputMode.BINARY_ONLY)

        assert target.read_text(encoding="utf-8") == "\n".join(binary_output) + "\n"

    def test_to_file_missing_input(self, tmp_path):
        """The output file is not created when the input cannot be opened."""
        target = tmp_path / "out.txt"

        with pytest.raises(InputFileError):
            process_file_to_file(tmp_path / "missing.dump", target)

        assert not target.exists()

    def test_to_file_bad_output(self, sample_dump, tmp_path):
        """A directory cannot be opened as the output file."""
        with pytest.raises(OutputFileError, match="for output"):
            process_file_to_file(sample_dump, tmp_path)
