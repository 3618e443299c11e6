"""
bindump - Configuration
=======================

Transcoder settings. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied on top by the CLI)

The defaults reproduce the classic output: 7 slots of 4 binary digits,
35 characters of rendering per instruction line.
"""

from dataclasses import dataclass
import codecs
from enum import Enum
import os


# The widest instruction in the expected objdump column layout is 7 bytes
INSTRUCTION_SLOTS = 7

# Characters per hex token, and per token plus its separator
TOKEN_CHARS = 2
TOKEN_STRIDE = TOKEN_CHARS + 1

# Binary digits produced by a single hex character
NIBBLE_BITS = 4


class RenderWidth(Enum):
    """How many binary digits each byte token turns into."""
    NIBBLE = "nibble"  # leading hex character only, 4 digits
    BYTE = "byte"      # both hex characters, 8 digits


class MalformedPolicy(Enum):
    """What to do with a non-hex character in the byte field."""
    BLANK = "blank"    # render as spaces, log a warning
    STRICT = "strict"  # raise MalformedTokenError


@dataclass
class TranscoderConfig:
    """
    Configuration for line transcoding.

    Attributes:
        slots: Number of byte-token slots scanned per line (default: 7)
        width: Rendering width per token (default: RenderWidth.NIBBLE)
        malformed: Handling of non-hex characters (default: MalformedPolicy.BLANK)
        encoding: Text encoding of dump files (default: "utf-8")
    """

    slots: int = INSTRUCTION_SLOTS
    width: RenderWidth = RenderWidth.NIBBLE
    malformed: MalformedPolicy = MalformedPolicy.BLANK
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.slots < 1:
            raise ValueError(f"slots must be at least 1, got {self.slots}")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"unknown encoding: {self.encoding}") from None

    @classmethod
    def from_env(cls) -> "TranscoderConfig":
        """
        Create TranscoderConfig from environment variables.

        Environment variables (all optional):
            BINDUMP_SLOTS: Number of token slots (positive integer)
            BINDUMP_WIDTH: "nibble" or "byte"
            BINDUMP_MALFORMED: "blank" or "strict"
            BINDUMP_ENCODING: Text encoding of dump files

        Returns:
            TranscoderConfig with values from environment variables
        """
        config = cls()

        if slots := os.environ.get("BINDUMP_SLOTS"):
            try:
                value = int(slots)
            except ValueError:
                value = 0
            if value >= 1:
                config.slots = value

        if width := os.environ.get("BINDUMP_WIDTH"):
            if width.lower() in ("nibble", "byte"):
                config.width = RenderWidth(width.lower())

        if malformed := os.environ.get("BINDUMP_MALFORMED"):
            if malformed.lower() in ("blank", "strict"):
                config.malformed = MalformedPolicy(malformed.lower())

        if encoding := os.environ.get("BINDUMP_ENCODING"):
            try:
                codecs.lookup(encoding)
            except LookupError:
                pass  # Ignore unknown codecs
            else:
                config.encoding = encoding

        return config

    @property
    def digits_per_group(self) -> int:
        """Binary digits (or placeholder spaces) emitted per slot."""
        if self.width is RenderWidth.BYTE:
            return NIBBLE_BITS * TOKEN_CHARS
        return NIBBLE_BITS

    @property
    def rendering_width(self) -> int:
        """Total characters of a binary rendering, separators included."""
        return self.slots * (self.digits_per_group + 1)
