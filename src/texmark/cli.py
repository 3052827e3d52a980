"""
Converts a texmark file to LaTeX.
Writes to DEST when given, otherwise to stdout. Diagnostics go to stderr.
"""

from __future__ import annotations

from pathlib import Path

import click

from texmark import __version__
from texmark.config import apply_overrides, load_config
from texmark.errors import ConfigError, RenderError
from texmark.lexer import Lexer
from texmark.parser import Parser
from texmark.renderers import ASTRenderer, LatexRenderer
from texmark.reporting import format_diagnostic
from texmark.serialization import to_json, tokens_to_json
from texmark.utils.logger import enable_debug_logging

__all__ = ["cli"]


@click.command()
@click.version_option(__version__)
@click.option(
    "--standalone/--fragment",
    default=None,
    help="Wrap output in a complete LaTeX document (overrides config)",
)
@click.option("--at-command", help="Command used for @name references")
@click.option(
    "--dump",
    type=click.Choice(["tokens", "ast"]),
    help="Print the token list or AST as JSON instead of LaTeX",
)
@click.option("--force", is_flag=True, help="Do not fail on fatal diagnostics")
@click.option("-v", "--verbose", is_flag=True, help="Log lexer and parser activity")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.argument("dest", type=click.Path(dir_okay=False, writable=True), required=False)
def cli(
    source: str,
    dest: str | None = None,
    standalone: bool | None = None,
    at_command: str | None = None,
    dump: str | None = None,
    force: bool = False,
    verbose: bool = False,
):
    """
    Entry point for converting a texmark file to LaTeX.

    Args:
        source: Path to the markup file to convert.
        dest: Output path; stdout when omitted.
        standalone: Override for standalone document output.
        at_command: Override for the ``@name`` reference command.
        dump: Emit ``tokens`` or ``ast`` JSON instead of LaTeX.
        force: Render or dump despite fatal diagnostics.
        verbose: Enable debug logging.

    Raises:
        click.BadParameter: If the configuration file is invalid.
        click.ClickException: If the source cannot be read, has fatal
            diagnostics (without ``--force``), or cannot be rendered.

    Examples:
        texmark notes.tm notes.tex --standalone
    """
    if verbose:
        enable_debug_logging()

    path = Path(source)
    try:
        config = apply_overrides(
            load_config(path.parent),
            standalone=standalone,
            at_command=at_command,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise click.ClickException(f"cannot read {source}: {error}") from error

    strict = config.suppress_on_fatal and not force

    if dump == "tokens":
        lexer = Lexer(text, source)
        _emit(tokens_to_json(lexer.tokenize(), indent=2) + "\n", dest)
        _report(lexer.diagnostics, text, source)
        _check_fatal(lexer.diagnostics, source, strict)
        return

    doc = Parser(text, source_file=source).parse()
    _report(doc.diagnostics, text, source)

    if dump == "ast":
        _emit(to_json(doc, indent=2) + "\n", dest)
        _check_fatal(doc.diagnostics, source, strict)
        return

    _check_fatal(doc.diagnostics, source, strict)

    renderer: ASTRenderer = LatexRenderer(config)

    try:
        latex = renderer.render(doc)
    except RenderError as error:
        raise click.ClickException(str(error)) from error

    _emit(latex, dest)


def _report(diagnostics, text: str, source: str) -> None:
    for diagnostic in diagnostics:
        click.echo(format_diagnostic(diagnostic, text, source), err=True)


def _check_fatal(diagnostics, source: str, strict: bool) -> None:
    """Exit with status 1 when ``strict`` and any diagnostic is fatal.

    Dumps are written before this check, so they are complete either way.
    """
    count = sum(1 for diagnostic in diagnostics if diagnostic.fatal)
    if strict and count:
        noun = "diagnostic" if count == 1 else "diagnostics"
        raise click.ClickException(f"{count} fatal {noun} in {source}; use --force to ignore")


def _emit(output: str, dest: str | None) -> None:
    if dest is None:
        click.echo(output, nl=False)
        return
    try:
        Path(dest).write_text(output, encoding="utf-8")
    except OSError as error:
        raise click.ClickException(f"cannot write {dest}: {error}") from error


if __name__ == "__main__":
    cli()
