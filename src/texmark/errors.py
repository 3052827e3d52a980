"""Diagnostics and exception classes for texmark.

Lexing and parsing never raise on bad input. Problems are recorded as
Diagnostic values on the Lexer or Parser and carried through to the
Document; callers decide what to do with them.

Exceptions are reserved for the layers around the core: rendering,
the one-call ``convert()`` helper, and configuration loading.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from texmark.location import Position


class ErrorKind(Enum):
    """Categories of diagnostics."""

    UNRECOGNIZED_CHAR = auto()  # lexer: no rule starts with this char
    UNEXPECTED_CHAR = auto()  # lexer: construct saw the wrong char
    UNCLOSED_SEQUENCE = auto()  # lexer: opening delimiter never closed
    UNRECOGNIZED_TOKEN = auto()  # parser: no dispatch rule for token


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A problem found while lexing or parsing.

    Attributes:
        kind: Diagnostic category
        position: Where the problem starts
        fatal: Whether the output should be treated as unusable
        subject: The offending text (a character, delimiter or token kind)
        expected: What would have been valid here, if known
        hint: Optional advice for the author; may span several lines

    """

    kind: ErrorKind
    position: Position
    fatal: bool
    subject: str = ""
    expected: str | None = None
    hint: str | None = None

    @property
    def message(self) -> str:
        """One-line human description."""
        match self.kind:
            case ErrorKind.UNRECOGNIZED_CHAR:
                return f"unrecognized character {self.subject!r}"
            case ErrorKind.UNEXPECTED_CHAR:
                return f"unexpected character {self.subject!r}, expected {self.expected!r}"
            case ErrorKind.UNCLOSED_SEQUENCE:
                return (
                    f"expected a '{self.expected}' to close the sequence "
                    f"'{self.subject}' started here, but found none"
                )
            case ErrorKind.UNRECOGNIZED_TOKEN:
                return f"unrecognized token {self.subject}"
        return self.subject

    @property
    def label(self) -> str:
        """Short category name, e.g. ``UnclosedSequence``."""
        return "".join(part.capitalize() for part in self.kind.name.split("_"))

    def __str__(self) -> str:
        return f"{self.position}: {self.label}: {self.message}"


class TexmarkError(Exception):
    """Base exception for all texmark errors.

    Subclass this for specific error categories.
    """

    pass


class RenderError(TexmarkError):
    """Error during LaTeX rendering.

    Raised when the renderer encounters a node it has no rule for.
    """

    def __init__(
        self,
        message: str,
        row: int | None = None,
        col: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize render error with optional location.

        Args:
            message: Error description
            row: Line number of the offending node (1-indexed)
            col: Column of the offending node (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.row = row
        self.col = col
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if row is not None:
            location += f"{row}:"
            if col is not None:
                location += f"{col}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class ConversionError(TexmarkError):
    """Fatal diagnostics prevented a conversion from producing output."""

    def __init__(self, diagnostics: Sequence[Diagnostic], source_file: str | None = None) -> None:
        self.diagnostics = tuple(diagnostics)
        self.source_file = source_file
        first = self.diagnostics[0] if self.diagnostics else None
        if first is None:
            summary = "conversion failed"
        else:
            where = first.position.format(source_file)
            summary = f"{where} {first.label}: {first.message}"
            if len(self.diagnostics) > 1:
                summary += f" (and {len(self.diagnostics) - 1} more)"
        super().__init__(summary)


class ConfigError(TexmarkError, ValueError):
    """Invalid configuration value or table."""

    pass
