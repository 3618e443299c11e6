"""
bindump Error Hierarchy
=======================

This module defines the exception hierarchy for the bindump package.
All exceptions inherit from BindumpError, allowing callers to catch all
package errors with a single except clause if desired.

Exception Hierarchy
-------------------
BindumpError (base)
├── TranscodeError (problems inside a dump line)
│   ├── LineFormatError - fields requested from a non-instruction line
│   └── MalformedTokenError - non-hex character in the byte field
└── BindumpIOError (file handling)
    ├── InputFileError - dump file cannot be opened for reading
    └── OutputFileError - output file cannot be opened for writing

Error messages for transcoding problems follow this format:
    filename:line:column: error: description
    source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class BindumpError(Exception):
    """
    Base exception for all bindump errors.

        try:
            process_file("listing.txt", emit)
        except BindumpError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position inside the dump being transcoded.

    Attributes:
        filename: Name of the dump file (or "<input>" for in-memory lines)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Transcoding Exceptions
# =============================================================================

class TranscodeError(BindumpError):
    """
    Base exception for problems found inside a dump line.

    Attributes:
        message: The error description
        location: Where in the dump the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The dump line at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            dump.txt:7:11: error: malformed byte token 'zz'
                 804913c: zz 10 90 04 08
                          ^
            hint: the byte field should only hold hex digits
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            # Tabs would shift the caret, so show them as single spaces
            parts.append(f"    {self.source_line.expandtabs(1)}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class LineFormatError(TranscodeError):
    """
    Fields were requested from a line that is not an instruction line.

    Only lines whose first tab follows a colon (``address:\\t...``) carry
    an instruction-byte field.
    """
    pass


class MalformedTokenError(TranscodeError):
    """
    A byte token holds a character that is neither whitespace nor a hex digit.

    Only raised in strict mode; otherwise the position renders as blanks
    and a warning is logged.
    """

    def __init__(
        self,
        token: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.token = token
        super().__init__(
            f"malformed byte token {token!r}",
            location=location,
            hint="the byte field should only hold hex digits",
            source_line=source_line,
        )


# =============================================================================
# File Handling Exceptions
# =============================================================================

class BindumpIOError(BindumpError):
    """Base exception for files that cannot be opened."""

    def __init__(self, message: str, filename: str):
        self.filename = filename
        super().__init__(message)


class InputFileError(BindumpIOError):
    """The dump file could not be opened for reading."""

    def __init__(self, filename: str):
        super().__init__(f"Failed to open {filename} for input.", filename)


class OutputFileError(BindumpIOError):
    """The output file could not be opened for writing."""

    def __init__(self, filename: str):
        super().__init__(f"Failed to open {filename} for output.", filename)
