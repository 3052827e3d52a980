"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from texmark.lexer.charsets import ESCAPABLE

    if char in ESCAPABLE:  # O(1) lookup
        ...
"""

import unicodedata

# ASCII whitespace; Unicode space separators are handled by is_whitespace()
WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")

# Whitespace that does not end a line
INLINE_WHITESPACE: frozenset[str] = WHITESPACE - {"\n"}

# Characters a backslash turns into literal word text
ESCAPABLE: frozenset[str] = frozenset("%[@)~_]!*$")

# Single characters that end a word when unescaped
WORD_STOP_CHARS: frozenset[str] = frozenset("%[@)*$")

# Two-character sequences that end a word
WORD_STOP_PAIRS: frozenset[str] = frozenset({"~~", "__", "](", "!["})

DIGITS: frozenset[str] = frozenset("0123456789")


def is_whitespace(char: str) -> bool:
    """Check if character is whitespace.

    Includes ASCII whitespace and Unicode category Zs (space separator).
    The empty string (end of input) is not whitespace.

    """
    if not char:
        return False
    if char in WHITESPACE:
        return True
    return unicodedata.category(char) == "Zs"


def is_control(char: str) -> bool:
    """Check if character is a control character with no lexical meaning.

    These are the characters the lexer reports as unrecognized input.

    """
    if not char or char in WHITESPACE:
        return False
    return unicodedata.category(char) == "Cc"
