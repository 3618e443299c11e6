"""
bindump - Binary Rendering of Disassembler Dumps
================================================

This package rewrites the output of ``objdump -d`` (and similar dumps) so
that the hex instruction bytes of every instruction line appear as binary
digit groups. Column alignment with the mnemonic text is preserved, and a
binary-only mode strips everything but the binary digits.

Main Components
---------------
- **transcoder**: line classification, field extraction and rendering
- **router**: line-by-line processing of files and streams
- **config**: transcoder settings and environment overrides
- **cli**: the ``objdump2bin`` command-line tool

Quick Start
-----------
Transcode a single line:
    >>> from bindump import LineTranscoder
    >>> LineTranscoder().transcode(" 804913c:\\tb8 10 90 04 08 \\tmov $0x8049010,%eax")
    ' 804913c:\\t1011 0001 1001 0000 0000           \\tmov $0x8049010,%eax'

Transcode a file:
    >>> from bindump import process_file, OutputMode
    >>> stats = process_file("listing.txt", print, mode=OutputMode.BINARY_ONLY)

Or use the command-line tool:
    $ objdump -d a.out > listing.txt
    $ objdump2bin -b listing.txt
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from bindump.config import (
    INSTRUCTION_SLOTS,
    MalformedPolicy,
    RenderWidth,
    TranscoderConfig,
)
from bindump.errors import (
    BindumpError,
    BindumpIOError,
    InputFileError,
    LineFormatError,
    MalformedTokenError,
    OutputFileError,
    SourceLocation,
    TranscodeError,
)
from bindump.router import (
    RouterStats,
    process_file,
    process_file_to_file,
    process_stream,
)
from bindump.transcoder import (
    LineFields,
    LineKind,
    LineTranscoder,
    OutputMode,
    classify_line,
    hex_char_to_bits,
    render_byte_field,
    split_fields,
)

__all__ = [
    "__version__",
    # Configuration
    "INSTRUCTION_SLOTS",
    "MalformedPolicy",
    "RenderWidth",
    "TranscoderConfig",
    # Exception hierarchy
    "BindumpError",
    "BindumpIOError",
    "InputFileError",
    "LineFormatError",
    "MalformedTokenError",
    "OutputFileError",
    "SourceLocation",
    "TranscodeError",
    # Line router
    "RouterStats",
    "process_file",
    "process_file_to_file",
    "process_stream",
    # Transcoder
    "LineFields",
    "LineKind",
    "LineTranscoder",
    "OutputMode",
    "classify_line",
    "hex_char_to_bits",
    "render_byte_field",
    "split_fields",
]
