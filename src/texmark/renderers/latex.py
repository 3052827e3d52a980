"""LaTeX renderer for texmark AST.

Walks a Document and emits LaTeX source. Spacing between inline nodes
follows the whitespace recorded on each node, so line structure in the
output mirrors the input.

Mapping:
    PARAGRAPH            children, then a blank line
    SECTION ...          \\section{} \\subsection{} \\subsubsection{} (and * forms)
    BOLD / ITALIC        \\textbf{} / \\textit{}
    UNDERLINE / STRIKE   \\underline{} / \\sout{}
    LINK                 \\href{ref}{text}
    IMAGE                figure with \\includegraphics and \\caption
    ITEMIZE / ENUMERATE  environment with one \\item per LIST_ITEM
    WORD                 escaped text
    AT_DELIM             \\ref{name} (command configurable)
    math                 verbatim, delimiters included
    RAW_TEX              heredoc body, verbatim

Thread Safety:
    LatexRenderer holds only configuration. Each render() call uses its
    own StringBuilder, so one instance can be shared across threads.

"""

from __future__ import annotations

import logging

from texmark.config import TexmarkConfig, get_config
from texmark.errors import RenderError
from texmark.nodes import Branch, BranchKind, Document, Leaf, LeafKind, MacroDef, Node
from texmark.stringbuilder import StringBuilder
from texmark.utils.text import escape_latex, escape_url, substitute_params

logger = logging.getLogger(__name__)

_ROW_COMMANDS: dict[BranchKind, str] = {
    BranchKind.SECTION: "section",
    BranchKind.SUBSECTION: "subsection",
    BranchKind.SUBSUBSECTION: "subsubsection",
    BranchKind.SECTION_STAR: "section*",
    BranchKind.SUBSECTION_STAR: "subsection*",
    BranchKind.SUBSUBSECTION_STAR: "subsubsection*",
}

_EMPHASIS_COMMANDS: dict[BranchKind, str] = {
    BranchKind.BOLD: "textbf",
    BranchKind.ITALIC: "textit",
    BranchKind.UNDERLINE: "underline",
    BranchKind.STRIKETHROUGH: "sout",
}

_LIST_ENVIRONMENTS: dict[BranchKind, str] = {
    BranchKind.ITEMIZE: "itemize",
    BranchKind.ENUMERATE: "enumerate",
}


class LatexRenderer:
    """Render AST to LaTeX using StringBuilder pattern.

    Usage:
        >>> from texmark import parse
        >>> LatexRenderer().render(parse("**bold** move"))
        '\\\\textbf{bold} move\\n'

    Thread Safety:
        Multiple threads can safely share a single LatexRenderer instance.

    """

    __slots__ = ("_config",)

    def __init__(self, config: TexmarkConfig | None = None) -> None:
        """Initialize renderer.

        Args:
            config: Render configuration; the active context config is
                read at render time when omitted
        """
        self._config = config

    @property
    def config(self) -> TexmarkConfig:
        return self._config if self._config is not None else get_config()

    def render(self, node: Document) -> str:
        """Render document AST to a LaTeX string.

        Args:
            node: Document AST root

        Returns:
            LaTeX source. A fragment by default; a complete document with
            preamble when the config asks for standalone output.

        Raises:
            RenderError: If the tree contains a node kind with no mapping.
        """
        config = self.config
        logger.debug(
            "Rendering %d nodes from %s", len(node.children), node.source_file or "<string>"
        )

        sb = StringBuilder()
        for child in node.children:
            self._render_block(child, sb, node)
        body = sb.build().strip()
        body = body + "\n" if body else ""

        if not config.standalone:
            return body
        return self._wrap_document(body, node.macros, config)

    # =========================================================================
    # Blocks
    # =========================================================================

    def _render_block(self, node: Node, sb: StringBuilder, doc: Document) -> None:
        match node:
            case Branch(kind=BranchKind.PARAGRAPH):
                sb.append(self._render_children(node.children, doc).strip())
                sb.append("\n\n")
            case Branch(kind=kind) if kind.is_row:
                title = self._render_children(node.children, doc).strip()
                sb.command(_ROW_COMMANDS[kind], title)
                sb.append("\n\n")
            case _:
                self._render_inline(node, sb, doc)

    # =========================================================================
    # Inline
    # =========================================================================

    def _render_children(self, children: tuple[Node, ...], doc: Document) -> str:
        sb = StringBuilder()
        for child in children:
            self._render_inline(child, sb, doc)
        return sb.build()

    def _render_inline(self, node: Node, sb: StringBuilder, doc: Document) -> None:
        match node:
            case Leaf():
                self._render_leaf(node, sb, doc)
            case Branch(kind=kind) if kind.is_emphasis:
                inner = self._render_children(node.children, doc)
                sb.command(_EMPHASIS_COMMANDS[kind], inner.strip())
                sb.append(node.right_pad)
            case Branch(kind=BranchKind.LINK):
                inner = self._render_children(node.children, doc)
                sb.command("href", escape_url(node.reference or ""), inner.strip())
                sb.append(node.right_pad)
            case Branch(kind=BranchKind.IMAGE):
                self._render_image(node, sb, doc)
            case Branch(kind=kind) if kind.is_list:
                self._render_list(node, sb, doc)
            case Branch(kind=BranchKind.PARAGRAPH):
                sb.append(self._render_children(node.children, doc))
            case Branch(kind=kind) if kind.is_row:
                # Only reachable inside hand-built trees
                sb.ensure_newline()
                self._render_block(node, sb, doc)
            case _:
                raise RenderError(
                    f"no LaTeX rule for {node.kind.name}",
                    row=node.position.row,
                    col=node.position.col,
                    source_file=doc.source_file,
                )

    def _render_leaf(self, leaf: Leaf, sb: StringBuilder, doc: Document) -> None:
        match leaf.kind:
            case LeafKind.WORD:
                sb.append(escape_latex(leaf.content))
            case LeafKind.AT_DELIM:
                sb.command(self.config.at_command, leaf.content)
            case kind if kind.is_math:
                sb.append(leaf.lexeme)
            case LeafKind.RAW_TEX:
                sb.ensure_newline()
                sb.append_line(leaf.content)
                sb.append(leaf.right_pad.lstrip("\n"))
                return
        sb.append(leaf.right_pad)

    def _render_image(self, image: Branch, sb: StringBuilder, doc: Document) -> None:
        caption = self._render_children(image.children, doc).strip()
        sb.begin("figure", self.config.image_placement)
        sb.append_line("\\centering")
        sb.command("includegraphics", escape_url(image.reference or "")).append("\n")
        if caption:
            sb.command("caption", caption).append("\n")
        sb.end("figure")
        sb.append(image.right_pad.lstrip("\n"))

    def _render_list(self, node: Branch, sb: StringBuilder, doc: Document) -> None:
        environment = _LIST_ENVIRONMENTS[node.kind]
        sb.begin(environment)
        for item in node.children:
            match item:
                case Branch(kind=BranchKind.LIST_ITEM):
                    sb.append("\\item ")
                    sb.append(self._render_children(item.children, doc).strip())
                    sb.append("\n")
                case _:
                    self._render_inline(item, sb, doc)
        sb.end(environment)

    # =========================================================================
    # Standalone documents
    # =========================================================================

    def _wrap_document(self, body: str, macros: tuple[MacroDef, ...], config: TexmarkConfig) -> str:
        sb = StringBuilder()
        sb.command("documentclass", config.document_class).append("\n")
        for package in config.packages:
            sb.command("usepackage", package).append("\n")
        if macros:
            sb.append("\n")
            for macro in macros:
                sb.append_line(render_macro(macro))
        sb.append("\n")
        sb.command("begin", "document").append("\n\n")
        sb.append(body)
        sb.append("\n")
        sb.command("end", "document").append("\n")
        return sb.build()


def render_macro(macro: MacroDef) -> str:
    """LaTeX definition for a macro.

    Example:
        >>> from texmark.location import Position
        >>> render_macro(MacroDef("norm", ("x",), "\\\\lVert x \\\\rVert", Position.start()))
        '\\\\newcommand{\\\\norm}[1]{\\\\lVert #1 \\\\rVert}'
    """
    body = substitute_params(macro.body, macro.params)
    arity = f"[{len(macro.params)}]" if macro.params else ""
    return f"\\newcommand{{\\{macro.name}}}{arity}{{{body}}}"
