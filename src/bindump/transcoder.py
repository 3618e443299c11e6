"""
Line Transcoder
===============

Rewrites the instruction-byte field of ``objdump -d`` style lines as binary
digit groups.

Line Layout
-----------
An instruction line is an address label, a colon, a tab, the byte field and,
unless it is a continuation line, a second tab followed by the mnemonic:

     804913c:	b8 10 90 04 08       	mov    $0x8049010,%eax
     8049141:	00 00 00

The byte field holds up to 7 two-character hex tokens separated by single
spaces. It is scanned in fixed slots three characters apart, so a slot keeps
its column even when the token is missing.

Rendering
---------
Each slot becomes one group followed by a separator space:

- NIBBLE width: the slot's leading hex character as 4 binary digits
  (``b8`` -> ``1011``). This is the classic output, 35 characters wide.
- BYTE width: both characters as 4 digits each (``b8`` -> ``10111000``),
  63 characters wide.

Absent or whitespace positions render as spaces of the same width, so
anything after the rendering stays aligned.

Usage:
    transcoder = LineTranscoder(TranscoderConfig(), OutputMode.FULL)
    for line in lines:
        text = transcoder.transcode(line)
        if text is not None:
            print(text)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging
import string

from bindump.config import (
    MalformedPolicy,
    NIBBLE_BITS,
    RenderWidth,
    TOKEN_CHARS,
    TOKEN_STRIDE,
    TranscoderConfig,
)
from bindump.errors import LineFormatError, MalformedTokenError, SourceLocation

logger = logging.getLogger(__name__)


FIELD_DELIMITER = "\t"
HEADER_MARK = ":"
GROUP_SEPARATOR = " "

HEX_DIGITS = frozenset(string.hexdigits)


# =============================================================================
# Data Structures
# =============================================================================

class LineKind(Enum):
    """Whether a line carries an instruction-byte field."""
    INSTRUCTION = "instruction"
    PLAIN = "plain"


class OutputMode(Enum):
    """What gets written for each input line."""
    FULL = "full"                # whole line, byte field replaced
    BINARY_ONLY = "binary"       # renderings only, plain lines dropped


@dataclass(frozen=True)
class LineFields:
    """
    The three parts of an instruction line.

    Attributes:
        header: Address label through the first tab, inclusive
        byte_field: After the first tab through the second tab, inclusive,
            or to the end of the line on continuation lines
        trailer: From the second tab to the end of the line; empty on
            continuation lines
    """
    header: str
    byte_field: str
    trailer: str

    @property
    def is_continuation(self) -> bool:
        """True for lines holding only byte data, with no mnemonic."""
        return not self.trailer


# =============================================================================
# Classification and Field Extraction
# =============================================================================

def classify_line(line: str) -> LineKind:
    """
    Decide whether a line is an instruction line.

    A line is an instruction line when it has a tab and the character
    right before the first tab is a colon.

    Example:
        >>> classify_line(" 804913c:\\tb8 10 90 04 08 \\tmov $0x8049010,%eax")
        <LineKind.INSTRUCTION: 'instruction'>
        >>> classify_line("08049000 <start>:")
        <LineKind.PLAIN: 'plain'>
    """
    pos = line.find(FIELD_DELIMITER)
    if pos > 0 and line[pos - 1] == HEADER_MARK:
        return LineKind.INSTRUCTION
    return LineKind.PLAIN


def split_fields(line: str) -> LineFields:
    """
    Split an instruction line into header, byte field and trailer.

    The byte field keeps the second tab as its last character; the trailer
    starts with that same tab. Without a second tab the byte field runs to
    the end of the line and the trailer is empty.

    Raises:
        LineFormatError: If the line is not an instruction line
    """
    if classify_line(line) is not LineKind.INSTRUCTION:
        raise LineFormatError(
            "line has no instruction-byte field",
            hint="instruction lines look like 'address:<TAB>bytes<TAB>mnemonic'",
        )

    start = line.index(FIELD_DELIMITER) + 1
    end = line.find(FIELD_DELIMITER, start)
    if end == -1:
        return LineFields(header=line[:start], byte_field=line[start:], trailer="")
    return LineFields(
        header=line[:start],
        byte_field=line[start:end + 1],
        trailer=line[end:],
    )


# =============================================================================
# Byte-Token Rendering
# =============================================================================

def hex_char_to_bits(char: str) -> str:
    """
    Convert one hex character to its 4-digit binary string, MSB first.

    Example:
        >>> hex_char_to_bits("a")
        '1010'
    """
    value = int(char, 16)
    bits = []
    for _ in range(NIBBLE_BITS):
        bits.append(str(value % 2))
        value //= 2
    return "".join(reversed(bits))


def render_byte_field(
    field: str,
    config: Optional[TranscoderConfig] = None,
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> str:
    """
    Render a byte field as binary digit groups.

    Args:
        field: The byte field, as returned by split_fields()
        config: Slot count, width and malformed policy (default settings if None)
        location: Position of the field's first character, used for
            malformed token reports
        source_line: The full dump line, used for malformed token reports

    Returns:
        Exactly config.rendering_width characters

    Raises:
        MalformedTokenError: On a non-hex character under MalformedPolicy.STRICT
    """
    return _render(field, config or TranscoderConfig(), location, source_line)[0]


def _render(
    field: str,
    config: TranscoderConfig,
    location: Optional[SourceLocation],
    source_line: Optional[str],
) -> tuple[str, int]:
    """Render a byte field, returning the rendering and the malformed count."""
    if config.width is RenderWidth.BYTE:
        chars_per_slot = TOKEN_CHARS
    else:
        chars_per_slot = 1

    blank = " " * NIBBLE_BITS
    groups = []
    malformed = 0

    for slot in range(config.slots):
        start = slot * TOKEN_STRIDE
        group = []
        for offset in range(start, start + chars_per_slot):
            char = field[offset] if offset < len(field) else " "
            if char.isspace():
                group.append(blank)
            elif char in HEX_DIGITS:
                group.append(hex_char_to_bits(char))
            else:
                malformed += 1
                _report_malformed(
                    field[start:start + TOKEN_CHARS], offset, config,
                    location, source_line,
                )
                group.append(blank)
        groups.append("".join(group) + GROUP_SEPARATOR)

    return "".join(groups), malformed


def _report_malformed(
    token: str,
    offset: int,
    config: TranscoderConfig,
    location: Optional[SourceLocation],
    source_line: Optional[str],
) -> None:
    at = None
    if location is not None:
        at = SourceLocation(location.filename, location.line, location.column + offset)

    if config.malformed is MalformedPolicy.STRICT:
        raise MalformedTokenError(token, location=at, source_line=source_line)

    where = f"{at}: " if at else ""
    logger.warning(f"{where}malformed byte token {token!r}, rendered as blanks")


# =============================================================================
# Line Transcoder
# =============================================================================

class LineTranscoder:
    """
    Transcodes dump lines one at a time.

    The transcoder holds no state between lines except counters, which the
    line router reads to report on a run.

    Attributes:
        config: Rendering settings
        mode: OutputMode.FULL or OutputMode.BINARY_ONLY
        filename: Name used in malformed token reports
        instruction_lines: Instruction lines seen so far
        plain_lines: Plain lines seen so far
        malformed_tokens: Malformed positions seen so far
    """

    def __init__(
        self,
        config: Optional[TranscoderConfig] = None,
        mode: OutputMode = OutputMode.FULL,
        filename: str = "<input>",
    ):
        self.config = config or TranscoderConfig()
        self.mode = mode
        self.filename = filename
        self.instruction_lines = 0
        self.plain_lines = 0
        self.malformed_tokens = 0

    @property
    def full_output(self) -> bool:
        return self.mode is OutputMode.FULL

    def transcode(self, line: str, line_number: int = 0) -> Optional[str]:
        """
        Transcode a single line.

        Args:
            line: The line without its terminator
            line_number: 1-indexed line number for malformed token reports

        Returns:
            The output text without a newline, or None when nothing should
            be written for this line
        """
        if classify_line(line) is LineKind.PLAIN:
            self.plain_lines += 1
            return line if self.full_output else None

        self.instruction_lines += 1
        fields = split_fields(line)
        location = SourceLocation(self.filename, line_number, len(fields.header) + 1)
        rendering, malformed = _render(fields.byte_field, self.config, location, line)
        self.malformed_tokens += malformed

        if self.full_output:
            return fields.header + rendering + fields.trailer
        return rendering
