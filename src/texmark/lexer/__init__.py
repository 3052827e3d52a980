"""Character-level lexer for texmark markup.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexResult, Cursor
├── core.py              # Lexer class (mixin composition + dispatch)
├── cursor.py            # Cursor: position tracking, capture, backtracking
├── charsets.py          # Character classification
├── classifiers/         # Column-1 constructs
│   ├── heading.py       # # ## ### and starred forms
│   ├── list.py          # - and 1. markers
│   ├── macro.py         # macro definitions
│   └── heredoc.py       # TEX <<< ID blocks
└── scanners/            # Inline constructs
    ├── delimiters.py    # emphasis, brackets, @refs, comments, blank lines
    ├── math.py          # $ $$ \\( \\[ spans
    └── word.py          # plain text with escapes

Usage:
    >>> from texmark.lexer import Lexer
    >>> [t.kind.name for t in Lexer("# Hi").tokenize()]
    ['SOF', 'HASH', 'WORD', 'EOF']

"""

from texmark.lexer.core import Lexer, LexResult
from texmark.lexer.cursor import Cursor, Snapshot

__all__ = ["Cursor", "LexResult", "Lexer", "Snapshot"]
