"""
Shared fixtures for the bindump tests.

Provides a small ``objdump -d`` listing (i386) as lines, as a file, and
the output expected from it in both output modes.
"""

import pytest


# Each rendering group is 4 characters plus a separator
_BLANK = " " * 5

_SAMPLE_LINES = [
    "",
    "hello:     file format elf32-i386",
    "",
    "",
    "Disassembly of section .text:",
    "",
    "08049000 <_start>:",
    " 8049000:\tb8 04 00 00 00       \tmov    $0x4,%eax",
    " 8049005:\tcd 80                \tint    $0x80",
    " 804900a:\tc7 05 10 90 04 08 01 \tmovl   $0x1,0x8049010",
    " 8049011:\t00 00 00 ",
]

_BINARY_OUTPUT = [
    "1011 0000 0000 0000 0000 " + _BLANK * 2,
    "1100 1000 " + _BLANK * 5,
    "1100 0000 0001 1001 0000 0000 0000 ",
    "0000 0000 0000 " + _BLANK * 4,
]

_FULL_OUTPUT = _SAMPLE_LINES[:7] + [
    " 8049000:\t" + _BINARY_OUTPUT[0] + "\tmov    $0x4,%eax",
    " 8049005:\t" + _BINARY_OUTPUT[1] + "\tint    $0x80",
    " 804900a:\t" + _BINARY_OUTPUT[2] + "\tmovl   $0x1,0x8049010",
    " 8049011:\t" + _BINARY_OUTPUT[3],
]


@pytest.fixture
def sample_lines():
    """Lines of the sample listing, without terminators."""
    return list(_SAMPLE_LINES)


@pytest.fixture
def full_output():
    """Full-mode output expected for the sample listing."""
    return list(_FULL_OUTPUT)


@pytest.fixture
def binary_output():
    """Binary-only output expected for the sample listing."""
    return list(_BINARY_OUTPUT)


@pytest.fixture
def sample_dump(tmp_path):
    """Write the sample listing to a file and return its path."""
    path = tmp_path / "hello.dump"
    path.write_text("\n".join(_SAMPLE_LINES) + "\n", encoding="utf-8")
    return path
