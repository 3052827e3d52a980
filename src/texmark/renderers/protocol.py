"""Renderer protocol for texmark documents.

A renderer turns a parsed Document into target text and exposes the
TexmarkConfig it renders with. ``LatexRenderer`` is the only built-in
implementation; the CLI and ``texmark.render()`` only rely on this shape.

Example:
    from texmark.renderers.protocol import ASTRenderer

    def render_chapter(renderer: ASTRenderer, doc: Document) -> str:
        if doc.has_fatal and renderer.config.suppress_on_fatal:
            raise ConversionError(doc.fatal_diagnostics)
        return renderer.render(doc)

"""

from typing import Protocol

from texmark.config import TexmarkConfig
from texmark.nodes import Document


class ASTRenderer(Protocol):
    """Document-to-text renderer.

    Implementations must not mutate the Document; nodes are frozen and may
    be shared between threads.

    """

    @property
    def config(self) -> TexmarkConfig:
        """Configuration in effect for the next ``render()`` call."""
        ...

    def render(self, node: Document) -> str: ...
