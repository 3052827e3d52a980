"""Output accumulator for the LaTeX renderer.

Collects output fragments in a list and joins them once in ``build()``.
On top of plain appends it knows the three LaTeX shapes the renderer
emits: ``\\name{arg}...`` commands, ``\\begin{env}[opt]`` / ``\\end{env}``
pairs on their own lines, and line breaks that never double up.

Thread Safety:
    A builder belongs to one render() call and is never shared.
"""

from __future__ import annotations


class StringBuilder:
    """Chainable LaTeX output buffer.

    Usage:
        >>> sb = StringBuilder()
        >>> _ = sb.command("textbf", "Hello").append(" world")
        >>> sb.build()
        '\\\\textbf{Hello} world'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, text: str) -> StringBuilder:
        """Add ``text`` as is. Empty strings are dropped."""
        if text:
            self._parts.append(text)
        return self

    def append_line(self, text: str = "") -> StringBuilder:
        """Add ``text`` and a newline."""
        self.append(text)
        self._parts.append("\n")
        return self

    def ensure_newline(self) -> StringBuilder:
        """Start a new line unless at the start of output or of a line."""
        if self._parts and not self._parts[-1].endswith("\n"):
            self._parts.append("\n")
        return self

    def command(self, name: str, *args: str) -> StringBuilder:
        """Add ``\\name`` followed by one ``{arg}`` group per argument."""
        self._parts.append(f"\\{name}")
        self._parts.extend(f"{{{arg}}}" for arg in args)
        return self

    def begin(self, environment: str, options: str = "") -> StringBuilder:
        """Open ``environment`` on a fresh line, with ``[options]`` if given."""
        self.ensure_newline()
        self.command("begin", environment)
        if options:
            self._parts.append(f"[{options}]")
        self._parts.append("\n")
        return self

    def end(self, environment: str) -> StringBuilder:
        self.ensure_newline()
        return self.command("end", environment).append("\n")

    def build(self) -> str:
        return "".join(self._parts)
