"""Inline parsing subsystem for texmark parser.

Provides mixins for inline content:
- Leaves (words, @references, math, raw TeX)
- Emphasis (*, **, __, ~~)
- Links and images

"""

from __future__ import annotations

from texmark.parsing.inline.emphasis import EMPHASIS_KINDS, EmphasisMixin
from texmark.parsing.inline.leaves import LeafParsingMixin, heredoc_body, leaf_content
from texmark.parsing.inline.links import LINK_KINDS, LinkParsingMixin


class InlineParsingMixin(
    LeafParsingMixin,
    EmphasisMixin,
    LinkParsingMixin,
):
    """Combined inline parsing mixin.

    Required Host Attributes:
        - _stack: NodeStack

    """

    pass


__all__ = [
    "EMPHASIS_KINDS",
    "LINK_KINDS",
    "EmphasisMixin",
    "InlineParsingMixin",
    "LeafParsingMixin",
    "LinkParsingMixin",
    "heredoc_body",
    "leaf_content",
]
