"""
Command-line tools for checking values and payloads.
"""

from .validate_cli import build_parser, main

__all__ = ["build_parser", "main"]
