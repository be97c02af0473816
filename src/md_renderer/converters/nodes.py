"""Syntax tree model consumed by the Markdown renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NodeKind(Enum):
    """Closed set of node kinds the parser can produce."""

    DOCUMENT = "document"
    BLOCK_QUOTE = "block_quote"
    LIST = "list"
    ITEM = "item"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    HORIZONTAL_RULE = "horizontal_rule"
    EMPH = "emph"
    STRONG = "strong"
    DEL = "del"
    LINK = "link"
    IMAGE = "image"
    CODE = "code"
    TEXT = "text"
    CODE_BLOCK = "code_block"
    SOFTBREAK = "softbreak"
    HARDBREAK = "hardbreak"
    HTML_SPAN = "html_span"
    HTML_BLOCK = "html_block"
    TABLE = "table"
    TABLE_HEAD = "table_head"
    TABLE_BODY = "table_body"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    UNKNOWN = "unknown"

    @property
    def is_container(self) -> bool:
        """Containers are visited twice (enter and exit), leaves once."""
        return self not in _LEAF_KINDS


_LEAF_KINDS = frozenset(
    {
        NodeKind.HORIZONTAL_RULE,
        NodeKind.CODE,
        NodeKind.TEXT,
        NodeKind.CODE_BLOCK,
        NodeKind.SOFTBREAK,
        NodeKind.HARDBREAK,
        NodeKind.HTML_SPAN,
        NodeKind.HTML_BLOCK,
    }
)


@dataclass
class ListData:
    """List metadata shared by a list node and its items.

    Attributes:
        ordered: True for numbered lists.
        bullet_char: Marker byte for unordered lists (``-``, ``*``, ``+``).
        delimiter: Byte following the number in ordered lists (``.`` or ``)``).
        tight: True when items render without blank lines between them.
        definition: True for definition lists.
        term: True for the term item of a definition list.
        start: First number of an ordered list, as written in the source.
    """

    ordered: bool = False
    bullet_char: bytes = b"-"
    delimiter: bytes = b"."
    tight: bool = True
    definition: bool = False
    term: bool = False
    start: int = 1


@dataclass(eq=False)
class SyntaxNode:
    """A node of the parsed document tree.

    Only the payload fields relevant to ``kind`` are populated. ``parent``
    is None for the document root only.
    """

    kind: NodeKind
    parent: SyntaxNode | None = field(default=None, repr=False)
    children: list[SyntaxNode] = field(default_factory=list, repr=False)
    level: int = 0
    list_data: ListData | None = None
    destination: bytes = b""
    title: bytes = b""
    info: bytes = b""
    literal: bytes = b""
    raw_type: str = ""

    def append_child(self, child: SyntaxNode) -> SyntaxNode:
        """Attach ``child`` as the last child of this node and return it."""
        child.parent = self
        self.children.append(child)
        return child

    @property
    def grandparent(self) -> SyntaxNode | None:
        if self.parent is None:
            return None
        return self.parent.parent

    @property
    def type_name(self) -> str:
        """Human-readable kind, preferring the parser's original token type."""
        return self.raw_type or self.kind.value
