"""Tree-building subsystem for texmark parser.

parsing/
├── token_nav.py   # TokenNavigationMixin: advance, peek
├── stack.py       # NodeStack / OpenBranch: push, pop, collapse
├── blocks.py      # paragraphs, heading rows, lists, SOF/EMPTY_ROW/EOF
├── macros.py      # macro definitions
└── inline/        # leaves, emphasis, links and images

"""

from texmark.parsing.blocks import HEADING_KINDS, LIST_KINDS, BlockParsingMixin
from texmark.parsing.inline import InlineParsingMixin
from texmark.parsing.macros import MacroParsingMixin, parse_macro_def
from texmark.parsing.stack import NodeStack, OpenBranch
from texmark.parsing.token_nav import TokenNavigationMixin

__all__ = [
    "HEADING_KINDS",
    "LIST_KINDS",
    "BlockParsingMixin",
    "InlineParsingMixin",
    "MacroParsingMixin",
    "NodeStack",
    "OpenBranch",
    "TokenNavigationMixin",
    "parse_macro_def",
]
