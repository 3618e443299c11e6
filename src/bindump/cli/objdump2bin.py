"""
objdump2bin - Binary Instruction Dump Command-Line Interface
=============================================================

This module implements the command-line interface for the dump transcoder.
It reads a file produced by ``objdump -d`` (or similar) and echoes it with
the hex instruction bytes rewritten as binary digits.

Usage Examples
--------------
Full listing with binary bytes:
    $ objdump2bin listing.txt

Binary digits only, everything else stripped:
    $ objdump2bin -b listing.txt

All 8 bits of every byte instead of the leading hex digit only:
    $ objdump2bin --full-bytes listing.txt

Output to file:
    $ objdump2bin -b listing.txt -o listing.bin.txt

Exit Codes
----------
0 - Success, or usage shown because no arguments were given
1 - Usage error, unreadable input or unwritable output, strict-mode failure
3 - Internal error
"""

import functools
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

import click

from bindump import __version__
from bindump.cli.errors import ExitCode, handle_cli_exception
from bindump.config import MalformedPolicy, RenderWidth, TranscoderConfig
from bindump.router import RouterStats, process_file, process_file_to_file
from bindump.transcoder import OutputMode

logger = logging.getLogger(__name__)


BINARY_ONLY_FLAG = "-b"

USAGE_TEXT = (
    "Usage: \n"
    "     objdump2bin [-b] objdump_output_file\n"
    "      \n"
    "     Options: \n"
    "         -b      Produce only the binary output (remove other \n"
    "                 information from the objdump output)\n"
    "         \n"
    "     Note:\n"
    "         Use with the `-b` flag to strip everything except the binary\n"
    "         output.  All other data from the original objdump_output_file\n"
    "         is ignored.\n"
    "         Run `objdump2bin --help` for the extended options.\n\n\n"
)


# =============================================================================
# Argument Parsing
# =============================================================================

@dataclass(frozen=True)
class ParsedArguments:
    """Arguments that allow processing to go ahead."""
    filename: str
    mode: OutputMode


@dataclass(frozen=True)
class UsageRequest:
    """
    Arguments that call for the usage text instead of processing.

    An empty message means usage was asked for (no arguments) rather than
    provoked by a mistake, and the exit code is 0.
    """
    message: str = ""

    @property
    def exit_code(self) -> ExitCode:
        return ExitCode.FAILURE if self.message else ExitCode.SUCCESS


def parse_arguments(args: Sequence[str]) -> Union[ParsedArguments, UsageRequest]:
    """
    Interpret the positional ``[-b] objdump_output_file`` arguments.

    Never exits; the caller decides what to do with a UsageRequest.

    Example:
        >>> parse_arguments(["-b", "dump.txt"])
        ParsedArguments(filename='dump.txt', mode=<OutputMode.BINARY_ONLY: 'binary'>)
        >>> parse_arguments(["-x", "dump.txt"])
        UsageRequest(message='Unknown option: -x')
    """
    if not args:
        return UsageRequest()

    index = 0
    mode = OutputMode.FULL
    token = args[0]
    if token == BINARY_ONLY_FLAG:
        mode = OutputMode.BINARY_ONLY
        index += 1
    elif len(args) > 1:
        return UsageRequest(f"Unknown option: {token}")

    if index >= len(args):
        return UsageRequest("Missing objdump_output_file.")

    return ParsedArguments(filename=args[index], mode=mode)


def format_usage(message: str = "") -> str:
    """Build the usage text, preceded by the message when there is one."""
    if message:
        return f"{message}\n\n{USAGE_TEXT}"
    return USAGE_TEXT


def build_config(
    full_bytes: bool,
    slots: Optional[int],
    strict: bool,
) -> TranscoderConfig:
    """Environment settings with command-line options applied on top."""
    config = TranscoderConfig.from_env()
    if full_bytes:
        config.width = RenderWidth.BYTE
    if slots is not None:
        config.slots = slots
    if strict:
        config.malformed = MalformedPolicy.STRICT
    return config


def setup_logging(verbose: bool) -> None:
    """Configure logging on stderr based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "help_option_names": ["-h", "--help"],
    },
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "--full-bytes",
    is_flag=True,
    help="Render both hex digits of every byte (8 binary digits per byte)",
)
@click.option(
    "--slots",
    type=click.IntRange(min=1),
    default=None,
    help="Byte slots per instruction line (default: 7)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on non-hex characters in the byte field instead of blanking them",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="objdump2bin")
def main(
    args: tuple[str, ...],
    output: Optional[Path],
    full_bytes: bool,
    slots: Optional[int],
    strict: bool,
    verbose: bool,
) -> None:
    """
    Rewrite the hex instruction bytes of an objdump listing as binary.

    ARGS is [-b] OBJDUMP_OUTPUT_FILE. With -b only the binary digits of each
    instruction line are written; everything else is dropped.

    Examples:

        # Full listing, hex bytes replaced by binary
        objdump2bin listing.txt

        # Only the binary digits
        objdump2bin -b listing.txt
    """
    setup_logging(verbose)

    parsed = parse_arguments(args)
    if isinstance(parsed, UsageRequest):
        click.echo(format_usage(parsed.message), nl=False)
        sys.exit(parsed.exit_code)

    try:
        config = build_config(full_bytes, slots, strict)
        if verbose:
            click.echo(f"Input file: {parsed.filename}", err=True)
            click.echo(
                f"Mode: {parsed.mode.value}, width: {config.width.value}, "
                f"slots: {config.slots}",
                err=True,
            )

        if output:
            stats = process_file_to_file(parsed.filename, output, config, parsed.mode)
        else:
            # color=True keeps escape sequences from colourised dumps intact
            emit = functools.partial(click.echo, color=True)
            stats = process_file(parsed.filename, emit, config, parsed.mode)
    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    report(stats, output, verbose)


def report(stats: RouterStats, output: Optional[Path], verbose: bool) -> None:
    if stats.malformed_tokens:
        logger.warning(f"{stats.malformed_tokens} malformed byte tokens rendered as blanks")
    if verbose:
        if output:
            click.echo(f"Output written to: {output}", err=True)
        click.echo(stats.summary(), err=True)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
