"""
bindump Command-Line Interface
==============================

This package provides the command-line tool for bindump:

- **objdump2bin**: rewrites objdump instruction bytes as binary digits

The tool is implemented as a Click-based CLI application.
"""

__all__ = ["objdump2bin"]
