"""Text processing utilities for texmark.

Provides the escaping rules used when words become LaTeX.

Example:
    >>> from texmark.utils.text import escape_latex
    >>> escape_latex("50% of R&D")
    '50\\\\% of R\\\\&D'
"""

from __future__ import annotations

import re

# Characters with a special meaning in LaTeX text mode, except the
# backslash and braces, which authors use to write commands directly
_SPECIALS: dict[str, str] = {
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

# A special character not already escaped by a backslash
_SPECIAL_RE = re.compile(r"(?<!\\)[&%$#_~^]")

# A backslash that would open math mode; only an unclosed opener reaches a word
_MATH_OPENER_RE = re.compile(r"(?<!\\)\\(?=[(\[])")

_URL_SPECIAL_RE = re.compile(r"(?<!\\)[%#]")


def escape_latex(text: str) -> str:
    """Escape LaTeX special characters in running text.

    Backslash sequences are passed through, so ``\\emph{x}`` stays a
    command and an already-escaped ``\\%`` is not escaped twice. The
    exceptions are the math openers ``\\(`` and ``\\[``: their backslash
    is written as ``\\textbackslash{}`` so an unclosed opener stays text.

    Args:
        text: Plain text

    Returns:
        Text safe to place in a LaTeX paragraph

    Examples:
        >>> escape_latex("a_b")
        'a\\\\_b'
        >>> escape_latex("\\\\alpha")
        '\\\\alpha'
    """
    if not text:
        return ""
    text = _SPECIAL_RE.sub(lambda m: _SPECIALS[m.group(0)], text)
    return _MATH_OPENER_RE.sub(r"\\textbackslash{}", text)


def escape_url(url: str) -> str:
    """Escape the characters ``\\href`` and ``\\includegraphics`` cannot take raw."""
    return _URL_SPECIAL_RE.sub(lambda m: "\\" + m.group(0), url)


def substitute_params(body: str, params: tuple[str, ...]) -> str:
    """Replace parameter names in a macro body with ``#1``, ``#2``, ...

    Names are matched as whole words and never inside a command name,
    so ``x`` in ``\\mathbf{x}`` is replaced but the ``x`` of ``\\max`` is not.

    Example:
        >>> substitute_params("\\\\frac{a}{b}", ("a", "b"))
        '\\\\frac{#1}{#2}'
    """
    for index, name in enumerate(params, start=1):
        body = re.sub(rf"(?<![\\\w]){re.escape(name)}(?!\w)", f"#{index}", body)
    return body
