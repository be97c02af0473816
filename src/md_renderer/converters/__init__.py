"""Markdown parsing, traversal and canonical re-rendering."""

from .common import Diagnostic, DiagnosticKind, RenderResult
from .markdown_renderer import (
    MarkdownRenderer,
    RendererState,
    render_markdown,
    render_with_diagnostics,
)
from .nodes import ListData, NodeKind, SyntaxNode
from .parser import build_tree, parse_markdown
from .walker import WalkStatus, walk

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "ListData",
    "MarkdownRenderer",
    "NodeKind",
    "RenderResult",
    "RendererState",
    "SyntaxNode",
    "WalkStatus",
    "build_tree",
    "parse_markdown",
    "render_markdown",
    "render_with_diagnostics",
    "walk",
]
