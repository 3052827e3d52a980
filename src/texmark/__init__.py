"""
Texmark: lightweight markup to LaTeX for Python 3.12+

Lexes and parses a small Markdown-like dialect (headings, emphasis,
links, images, lists, inline and display math, raw TeX heredocs and
macro definitions) into a typed AST, then renders it as LaTeX.

Quick Start:
    >>> from texmark import parse, render
    >>> doc = parse("# Hello **World**")
    >>> print(render(doc), end="")
    \\section{Hello \\textbf{World}}

    >>> # Or do both in one step, raising on fatal diagnostics
    >>> from texmark import convert
    >>> convert("see $x^2$")
    'see $x^2$\\n'

Diagnostics:
    Lexing and parsing never raise. Problems are collected on
    ``Document.diagnostics``; ``convert()`` raises ``ConversionError``
    when any of them is fatal.

Installation:
    pip install texmark
"""

from texmark.config import (
    TexmarkConfig,
    apply_overrides,
    config_context,
    get_config,
    load_config,
    reset_config,
    set_config,
)
from texmark.errors import (
    ConfigError,
    ConversionError,
    Diagnostic,
    ErrorKind,
    RenderError,
    TexmarkError,
)
from texmark.lexer import Lexer, LexResult
from texmark.location import Position
from texmark.nodes import (
    Branch,
    BranchKind,
    Document,
    Leaf,
    LeafKind,
    MacroDef,
    Node,
    find_all,
    iter_nodes,
    text_of,
)
from texmark.parser import Parser
from texmark.renderers.latex import LatexRenderer, render_macro
from texmark.renderers.protocol import ASTRenderer
from texmark.reporting import format_diagnostic, format_diagnostics
from texmark.serialization import from_dict, from_json, to_dict, to_json
from texmark.tokens import Token, TokenKind

__version__ = "0.3.0"


def lex(source: str, *, source_file: str | None = None) -> LexResult:
    """Tokenize source text.

    Args:
        source: Markup source text
        source_file: Optional source file path for messages

    Returns:
        LexResult with the token list (SOF first, EOF last) and any
        lexer diagnostics

    Example:
        >>> [t.kind.name for t in lex("*hi*").tokens]
        ['SOF', 'STAR', 'WORD', 'STAR', 'EOF']
    """
    return Lexer(source, source_file).result()


def parse(source: str, *, source_file: str | None = None) -> Document:
    """Parse source text into a typed AST.

    Args:
        source: Markup source text
        source_file: Optional source file path for messages

    Returns:
        Document AST root; check ``has_fatal`` before trusting it

    Example:
        >>> doc = parse("# Title")
        >>> doc.children[0].kind.name
        'SECTION'
    """
    return Parser(source, source_file=source_file).parse()


def render(doc: Document, *, config: TexmarkConfig | None = None) -> str:
    """Render a Document to LaTeX.

    Args:
        doc: Document AST to render
        config: Render configuration (the active context config if None)

    Returns:
        LaTeX string
    """
    return LatexRenderer(config).render(doc)


def convert(
    source: str,
    *,
    source_file: str | None = None,
    config: TexmarkConfig | None = None,
) -> str:
    """Parse and render in one call.

    Args:
        source: Markup source text
        source_file: Optional source file path for messages
        config: Render configuration (the active context config if None)

    Returns:
        LaTeX string

    Raises:
        ConversionError: If parsing produced fatal diagnostics and the
            config has ``suppress_on_fatal`` set.
    """
    config = config if config is not None else get_config()
    doc = parse(source, source_file=source_file)
    if doc.has_fatal and config.suppress_on_fatal:
        raise ConversionError(doc.fatal_diagnostics, source_file)
    return render(doc, config=config)


__all__ = [
    # Core API
    "convert",
    "lex",
    "parse",
    "render",
    # Classes
    "ASTRenderer",
    "LatexRenderer",
    "LexResult",
    "Lexer",
    "Parser",
    "Position",
    "Token",
    "TokenKind",
    # Config
    "TexmarkConfig",
    "apply_overrides",
    "config_context",
    "get_config",
    "load_config",
    "reset_config",
    "set_config",
    # Errors
    "ConfigError",
    "ConversionError",
    "Diagnostic",
    "ErrorKind",
    "RenderError",
    "TexmarkError",
    # Nodes
    "Branch",
    "BranchKind",
    "Document",
    "Leaf",
    "LeafKind",
    "MacroDef",
    "Node",
    "find_all",
    "iter_nodes",
    "text_of",
    # Helpers
    "format_diagnostic",
    "format_diagnostics",
    "from_dict",
    "from_json",
    "render_macro",
    "to_dict",
    "to_json",
    # Version
    "__version__",
]
