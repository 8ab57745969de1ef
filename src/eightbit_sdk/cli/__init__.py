"""
8-bit SDK Command-Line Interface
================================

This package provides command-line tools for the 8-bit SDK:

- **slc**: Simplelang compiler

Each tool is implemented as a Click-based CLI application with
help text and consistent exit codes (see errors.py).
"""

__all__ = ["slc"]
