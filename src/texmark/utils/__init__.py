"""Shared utilities for texmark."""

from texmark.utils.logger import enable_debug_logging, get_logger
from texmark.utils.text import escape_latex, escape_url, substitute_params

__all__ = [
    "enable_debug_logging",
    "escape_latex",
    "escape_url",
    "get_logger",
    "substitute_params",
]
