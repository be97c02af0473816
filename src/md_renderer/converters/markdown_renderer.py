"""Syntax tree to canonical Markdown rendering."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import BinaryIO, Callable

from ..errors import StrictModeError
from .common import Diagnostic, DiagnosticKind, RenderResult
from .nodes import NodeKind, SyntaxNode
from .parser import parse_markdown
from .walker import WalkStatus, walk

logger = logging.getLogger(__name__)

QUOTE_PREFIX = b"> "
LIST_INDENT = b"  "

# Recognised kinds whose rendering is intentionally not implemented
UNSUPPORTED_FEATURES: dict[NodeKind, str] = {
    NodeKind.SOFTBREAK: "Soft breaks not implemented by renderer",
    NodeKind.HTML_SPAN: "HTML elements not implemented by renderer",
    NodeKind.HTML_BLOCK: "HTML elements not implemented by renderer",
    NodeKind.TABLE: "Markdown tables not implemented by renderer",
    NodeKind.TABLE_HEAD: "Markdown tables not implemented by renderer",
    NodeKind.TABLE_BODY: "Markdown tables not implemented by renderer",
    NodeKind.TABLE_ROW: "Markdown tables not implemented by renderer",
    NodeKind.TABLE_CELL: "Markdown tables not implemented by renderer",
}


@dataclass
class RendererState:
    """Nesting context accumulated while walking one document."""

    paragraph_decoration: bytes = b""
    list_nesting_level: int = 0
    ordered_counters: list[int] = field(default_factory=list)
    list_indent: bytes = b""

    @property
    def quote_depth(self) -> int:
        return len(self.paragraph_decoration) // len(QUOTE_PREFIX)

    def is_empty(self) -> bool:
        return (
            not self.paragraph_decoration
            and self.list_nesting_level == 0
            and not self.ordered_counters
            and not self.list_indent
        )


def skip_paragraph_tags(node: SyntaxNode) -> bool:
    """Return True if a paragraph ends without a blank line.

    That is the case inside a block quote, and inside the items of a
    tight list.
    """
    parent = node.parent
    if parent is not None and parent.kind is NodeKind.BLOCK_QUOTE:
        return True

    grandparent = node.grandparent
    if grandparent is None or grandparent.kind is not NodeKind.LIST:
        return False

    return grandparent.list_data is not None and grandparent.list_data.tight


Handler = Callable[[SyntaxNode, bool], WalkStatus]


class MarkdownRenderer:
    """Visitor that writes a syntax tree back out as Markdown.

    One instance holds the state of one traversal at a time; use separate
    instances for documents rendered concurrently.
    """

    NAME = "markdown"

    def __init__(self, diagnostics_logger: logging.Logger | None = None):
        """Initialize renderer.

        Args:
            diagnostics_logger: Logger receiving one warning per dropped
                node. Defaults to this module's logger.
        """
        self.state = RendererState()
        self.diagnostics: list[Diagnostic] = []
        self._log = diagnostics_logger or logger
        self._out: BinaryIO | None = None
        self._dispatch: dict[NodeKind, Handler] = {
            NodeKind.DOCUMENT: self.document,
            NodeKind.BLOCK_QUOTE: self.block_quote,
            NodeKind.LIST: self.list,
            NodeKind.ITEM: self.item,
            NodeKind.PARAGRAPH: self.paragraph,
            NodeKind.HEADING: self.heading,
            NodeKind.HORIZONTAL_RULE: self.horizontal_rule,
            NodeKind.EMPH: self.emphasis,
            NodeKind.STRONG: self.strong,
            NodeKind.DEL: self.strikethrough,
            NodeKind.LINK: self.link,
            NodeKind.IMAGE: self.image,
            NodeKind.CODE: self.codespan,
            NodeKind.TEXT: self.text,
            NodeKind.CODE_BLOCK: self.block_code,
            NodeKind.HARDBREAK: self.linebreak,
        }

    @property
    def supported_kinds(self) -> frozenset[NodeKind]:
        return frozenset(self._dispatch)

    # ------------------------------------------------------------------
    # Traversal entry points
    # ------------------------------------------------------------------

    def reset(self) -> None:
        self.state = RendererState()
        self.diagnostics = []

    def render(self, root: SyntaxNode, out: BinaryIO) -> list[Diagnostic]:
        """Render the tree under ``root`` into ``out``.

        State is reset first, so an instance can be reused for consecutive
        documents.

        Returns:
            Diagnostics recorded for nodes that were dropped.
        """
        self.reset()
        self._out = out
        try:
            self.render_header(root)
            walk(root, self)
            self.render_footer(root)
        finally:
            self._out = None
        return list(self.diagnostics)

    def render_header(self, root: SyntaxNode) -> None:
        """Hook called before the walk; canonical Markdown has no header."""

    def render_footer(self, root: SyntaxNode) -> None:
        """Hook called after the walk; canonical Markdown has no footer."""

    def __call__(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        return self.visit(node, entering)

    def visit(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        handler = self._dispatch.get(node.kind)
        if handler is not None:
            return handler(node, entering)

        if node.kind in UNSUPPORTED_FEATURES:
            self._diagnose(
                DiagnosticKind.UNSUPPORTED_FEATURE,
                node,
                UNSUPPORTED_FEATURES[node.kind],
            )
        else:
            self._diagnose(
                DiagnosticKind.UNKNOWN_NODE_KIND,
                node,
                f"Unknown node type '{node.type_name}'",
            )
        return WalkStatus.SKIP_CHILDREN

    def _write(self, data: bytes) -> None:
        if self._out is None:
            raise RuntimeError("MarkdownRenderer.visit() called outside render()")
        self._out.write(data)

    def _diagnose(
        self, kind: DiagnosticKind, node: SyntaxNode, message: str
    ) -> None:
        self.diagnostics.append(Diagnostic(kind, node.type_name, message))
        self._log.warning(message)

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def document(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        return WalkStatus.GO_TO_NEXT

    def block_quote(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        state = self.state
        if entering:
            state.paragraph_decoration += QUOTE_PREFIX
        else:
            state.paragraph_decoration = state.paragraph_decoration[
                : -len(QUOTE_PREFIX)
            ]
        return WalkStatus.GO_TO_NEXT

    def list(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        state = self.state
        if entering:
            state.ordered_counters.append(0)
            state.list_nesting_level += 1
            if state.list_nesting_level > 1:
                state.list_indent += LIST_INDENT
        else:
            if state.list_nesting_level > 1:
                state.list_indent = state.list_indent[: -len(LIST_INDENT)]
            else:
                self._write(b"\n")
            state.list_nesting_level -= 1
            state.ordered_counters.pop()
        return WalkStatus.GO_TO_NEXT

    def item(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        if not entering:
            return WalkStatus.GO_TO_NEXT

        # Items of a definition list carry their own list data
        list_data = node.list_data or node.parent.list_data
        if list_data.definition or list_data.term:
            self._diagnose(
                DiagnosticKind.UNSUPPORTED_FEATURE,
                node,
                "Definition lists not implemented by renderer",
            )
            return WalkStatus.SKIP_CHILDREN

        self._write(self.state.list_indent)
        if node.parent.list_data.ordered:
            counters = self.state.ordered_counters
            counters[-1] += 1
            self._write(str(counters[-1]).encode("ascii"))
            self._write(list_data.delimiter)
        else:
            self._write(list_data.bullet_char)
        self._write(b" ")
        return WalkStatus.GO_TO_NEXT

    def paragraph(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        if entering:
            self._write(self.state.paragraph_decoration)
        else:
            self._write(b"\n")
            if not skip_paragraph_tags(node):
                self._write(b"\n")
        return WalkStatus.GO_TO_NEXT

    def heading(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        if entering:
            self._write(b"#" * node.level + b" ")
        else:
            self._write(b"\n\n")
        return WalkStatus.GO_TO_NEXT

    def horizontal_rule(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        self._write(b"---\n\n")
        return WalkStatus.GO_TO_NEXT

    def block_code(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        self._write(b"```" + node.info + b"\n")
        self._write(node.literal)
        self._write(b"```\n\n")
        return WalkStatus.GO_TO_NEXT

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def emphasis(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        self._write(b"*")
        return WalkStatus.GO_TO_NEXT

    def strong(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        self._write(b"**")
        return WalkStatus.GO_TO_NEXT

    def strikethrough(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        self._write(b"~~")
        return WalkStatus.GO_TO_NEXT

    def link(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        if entering:
            self._check_title(node)
            self._write(b"[")
        else:
            self._write(b"](" + node.destination + b")")
        return WalkStatus.GO_TO_NEXT

    def image(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        if entering:
            self._check_title(node)
            self._write(b"![")
        else:
            self._write(b"](" + node.destination + b")")
        return WalkStatus.GO_TO_NEXT

    def _check_title(self, node: SyntaxNode) -> None:
        if node.title:
            self._diagnose(
                DiagnosticKind.UNSUPPORTED_FEATURE,
                node,
                "Link titles not implemented by renderer",
            )

    def codespan(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        self._write(b"`" + node.literal + b"`")
        return WalkStatus.GO_TO_NEXT

    def text(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        self._write(node.literal)
        return WalkStatus.GO_TO_NEXT

    def linebreak(self, node: SyntaxNode, entering: bool) -> WalkStatus:
        # Continuation lines of a quoted paragraph need the quote prefix too
        self._write(b"  \n" + self.state.paragraph_decoration)
        return WalkStatus.GO_TO_NEXT


def _render_document(
    markdown_text: str, trailing_newline: bool
) -> tuple[str, list[Diagnostic]]:
    """Parse and render one document, returning text and diagnostics."""
    renderer = MarkdownRenderer()
    out = io.BytesIO()
    diagnostics = renderer.render(parse_markdown(markdown_text), out)
    result = out.getvalue().decode("utf-8")

    if trailing_newline:
        # Blocks end in a blank line; a file ends in exactly one newline.
        # A dropped leading block can leave a bare newline at the start.
        result = result.strip("\n")
        if result:
            result += "\n"

    return result, diagnostics


def render_markdown(markdown_text: str, trailing_newline: bool = True) -> str:
    """
    Normalise Markdown text into its canonical form.

    Args:
        markdown_text: Markdown formatted text
        trailing_newline: Collapse the trailing blank lines of the last
            block into a single newline and drop leading blank lines

    Returns:
        Canonical Markdown text
    """
    result, _ = _render_document(markdown_text, trailing_newline)
    return result


def render_with_diagnostics(
    markdown_text: str,
    strict: bool = False,
    trailing_newline: bool = True,
) -> RenderResult:
    """
    Normalise Markdown text and report content that could not be rendered.

    Args:
        markdown_text: Markdown formatted text
        strict: Raise instead of returning when anything was dropped
        trailing_newline: See ``render_markdown``

    Returns:
        RenderResult with the canonical text and any diagnostics

    Raises:
        StrictModeError: If ``strict`` is set and diagnostics were recorded.
    """
    text, diagnostics = _render_document(markdown_text, trailing_newline)
    if strict and diagnostics:
        raise StrictModeError(diagnostics)

    return RenderResult(
        text=text,
        diagnostics=diagnostics,
        changed=text != markdown_text,
    )
