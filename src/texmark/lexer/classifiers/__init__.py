"""Line-start construct classifiers for the texmark lexer.

Each classifier is a mixin that recognizes one construct that is only
meaningful in column 1: heading markers, list markers, macro definitions
and heredoc blocks. A classifier either emits its token and returns True,
or leaves the cursor untouched and returns False.
"""

from texmark.lexer.classifiers.heading import HeadingClassifierMixin
from texmark.lexer.classifiers.heredoc import HeredocClassifierMixin
from texmark.lexer.classifiers.list import ListClassifierMixin
from texmark.lexer.classifiers.macro import MacroClassifierMixin

__all__ = [
    "HeadingClassifierMixin",
    "HeredocClassifierMixin",
    "ListClassifierMixin",
    "MacroClassifierMixin",
]
