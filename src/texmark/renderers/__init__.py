"""Renderers for texmark AST."""

from texmark.renderers.latex import LatexRenderer, render_macro
from texmark.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "LatexRenderer", "render_macro"]
