"""Human-readable diagnostic reports.

Formats a Diagnostic against its source text, showing the offending line
with one line of context on either side and a caret under the column:

    notes.tm:3:5: UnclosedSequence: expected a '$' to close ...
      2 | Some text
      3 | see $x + y
        |     ^
      4 | more text
    Hint: ...

"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from texmark.errors import Diagnostic


def format_diagnostic(diagnostic: Diagnostic, source: str, source_file: str | None = None) -> str:
    """Render one diagnostic with a source excerpt.

    Args:
        diagnostic: The diagnostic to report
        source: Full source text the diagnostic positions refer to
        source_file: Name shown in the header line (optional)

    Returns:
        Multi-line report without a trailing newline.
    """
    position = diagnostic.position
    lines = source.split("\n")
    header = f"{position.format(source_file)}: {diagnostic.label}: {diagnostic.message}"

    first = max(position.row - 1, 1)
    last = min(position.row + 1, len(lines))
    width = len(str(last))

    report = [header]
    for row in range(first, last + 1):
        report.append(f"{row:>{width}} | {lines[row - 1]}".rstrip())
        if row == position.row:
            report.append(f"{'':>{width}} | {' ' * (position.col - 1)}^")

    if diagnostic.hint:
        report.extend(f"Hint: {line}" for line in diagnostic.hint.splitlines())

    return "\n".join(report)


def format_diagnostics(
    diagnostics: Iterable[Diagnostic], source: str, source_file: str | None = None
) -> str:
    """Render several diagnostics, separated by blank lines."""
    return "\n\n".join(format_diagnostic(d, source, source_file) for d in diagnostics)


__all__ = ["format_diagnostic", "format_diagnostics"]
