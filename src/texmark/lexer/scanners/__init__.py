"""Inline scanners for the texmark lexer.

Scanners consume constructs that may appear anywhere on a line.
"""

from texmark.lexer.scanners.delimiters import DelimiterScannerMixin
from texmark.lexer.scanners.math import MathScannerMixin
from texmark.lexer.scanners.word import WordScannerMixin, unescape_word

__all__ = [
    "DelimiterScannerMixin",
    "MathScannerMixin",
    "WordScannerMixin",
    "unescape_word",
]
