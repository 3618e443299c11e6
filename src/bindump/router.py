"""
Line Router
===========

Feeds a dump to the LineTranscoder one line at a time and hands every
produced line to an output callable. Nothing is buffered beyond the current
line.

Usage:
    stats = process_file("listing.txt", click.echo, mode=OutputMode.BINARY_ONLY)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Iterator, Optional, Union
import logging

from bindump.config import TranscoderConfig
from bindump.errors import InputFileError, OutputFileError
from bindump.transcoder import LineTranscoder, OutputMode

logger = logging.getLogger(__name__)


@dataclass
class RouterStats:
    """
    Counters for one processing run.

    Attributes:
        lines_read: Input lines consumed
        instruction_lines: Lines carrying a byte field
        plain_lines: Headers, blanks and anything unrecognized
        lines_written: Lines handed to the output
        malformed_tokens: Non-hex positions rendered as blanks
    """
    lines_read: int = 0
    instruction_lines: int = 0
    plain_lines: int = 0
    lines_written: int = 0
    malformed_tokens: int = 0

    def summary(self) -> str:
        return (
            f"{self.lines_read} lines read, "
            f"{self.instruction_lines} instruction lines, "
            f"{self.lines_written} lines written, "
            f"{self.malformed_tokens} malformed tokens"
        )


def strip_terminator(line: str) -> str:
    """Drop one trailing newline, if any. Carriage returns are content."""
    if line.endswith("\n"):
        return line[:-1]
    return line


def process_stream(
    lines: Iterable[str],
    emit: Callable[[str], None],
    transcoder: Optional[LineTranscoder] = None,
) -> RouterStats:
    """
    Transcode every line of an iterable and emit the results.

    Args:
        lines: Input lines, with or without their newline
        emit: Called once per output line, with the text minus its newline
        transcoder: The transcoder to use (full output, default config if None)

    Returns:
        RouterStats for this run
    """
    transcoder = transcoder or LineTranscoder()
    stats = RouterStats()

    for line_number, raw in enumerate(lines, start=1):
        stats.lines_read += 1
        text = transcoder.transcode(strip_terminator(raw), line_number)
        if text is not None:
            emit(text)
            stats.lines_written += 1

    stats.instruction_lines = transcoder.instruction_lines
    stats.plain_lines = transcoder.plain_lines
    stats.malformed_tokens = transcoder.malformed_tokens
    return stats


def _open_input(filename: Union[str, Path]) -> BinaryIO:
    try:
        return open(filename, "rb")
    except OSError as e:
        logger.debug(f"open failed for {filename}: {e}")
        raise InputFileError(str(filename)) from e


def _decode_lines(handle: BinaryIO, encoding: str) -> Iterator[str]:
    # Binary iteration splits on b"\n" only, so a lone "\r" stays in its line
    for raw in handle:
        yield raw.decode(encoding, errors="replace")


def process_file(
    filename: Union[str, Path],
    emit: Callable[[str], None],
    config: Optional[TranscoderConfig] = None,
    mode: OutputMode = OutputMode.FULL,
) -> RouterStats:
    """
    Transcode a dump file produced by ``objdump -d`` (or similar).

    Args:
        filename: Path of the dump file
        emit: Called once per output line, with the text minus its newline
        config: Transcoder settings (defaults if None)
        mode: OutputMode.FULL or OutputMode.BINARY_ONLY

    Returns:
        RouterStats for this run

    Raises:
        InputFileError: If the file cannot be opened; nothing has been
            emitted at that point
    """
    config = config or TranscoderConfig()
    transcoder = LineTranscoder(config, mode, filename=str(filename))

    with _open_input(filename) as handle:
        stats = process_stream(_decode_lines(handle, config.encoding), emit, transcoder)

    logger.debug(f"{filename}: {stats.summary()}")
    return stats


def process_file_to_file(
    filename: Union[str, Path],
    output: Union[str, Path],
    config: Optional[TranscoderConfig] = None,
    mode: OutputMode = OutputMode.FULL,
) -> RouterStats:
    """
    Transcode a dump file into another file.

    The output file is only created once the input has been opened.

    Raises:
        InputFileError: If the dump file cannot be opened
        OutputFileError: If the output file cannot be opened
    """
    config = config or TranscoderConfig()
    transcoder = LineTranscoder(config, mode, filename=str(filename))

    with _open_input(filename) as handle:
        try:
            out = open(output, "w", encoding=config.encoding, newline="")
        except OSError as e:
            logger.debug(f"open failed for {output}: {e}")
            raise OutputFileError(str(output)) from e
        with out:
            lines = _decode_lines(handle, config.encoding)
            stats = process_stream(lines, lambda text: out.write(text + "\n"), transcoder)

    logger.debug(f"{filename} -> {output}: {stats.summary()}")
    return stats
