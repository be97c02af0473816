"""Markdown to syntax tree parsing using the mistune AST renderer."""

import logging
from typing import Any

import mistune

from .nodes import ListData, NodeKind, SyntaxNode

logger = logging.getLogger(__name__)

PLUGINS = ["strikethrough", "table", "def_list"]

# mistune token type -> node kind, for tokens that need no extra payload
_SIMPLE_KINDS: dict[str, NodeKind] = {
    "paragraph": NodeKind.PARAGRAPH,
    # Content of tight list items; rendered like a paragraph
    "block_text": NodeKind.PARAGRAPH,
    "block_quote": NodeKind.BLOCK_QUOTE,
    "thematic_break": NodeKind.HORIZONTAL_RULE,
    "emphasis": NodeKind.EMPH,
    "strong": NodeKind.STRONG,
    "strikethrough": NodeKind.DEL,
    "softbreak": NodeKind.SOFTBREAK,
    "linebreak": NodeKind.HARDBREAK,
    "table": NodeKind.TABLE,
    "table_head": NodeKind.TABLE_HEAD,
    "table_body": NodeKind.TABLE_BODY,
    "table_row": NodeKind.TABLE_ROW,
    "table_cell": NodeKind.TABLE_CELL,
}

# Tokens that carry no content worth keeping
_IGNORED_TOKENS = frozenset({"blank_line"})


def _encode(value: str | None) -> bytes:
    return (value or "").encode("utf-8")


def _list_data(token: dict[str, Any]) -> ListData:
    """Build list metadata from a mistune ``list`` token.

    mistune stores the bullet char of unordered lists and the delimiter of
    ordered lists in the same ``bullet`` field.
    """
    attrs = token.get("attrs", {})
    ordered = bool(attrs.get("ordered", False))
    bullet = token.get("bullet") or ("." if ordered else "-")
    data = ListData(
        ordered=ordered,
        tight=bool(token.get("tight", True)),
        start=int(attrs.get("start", 1)),
    )
    if ordered:
        data.delimiter = _encode(bullet[-1])
    else:
        data.bullet_char = _encode(bullet[-1])
    return data


def _build_node(token: dict[str, Any], parent: SyntaxNode) -> SyntaxNode | None:
    """Convert one mistune token into a node attached to ``parent``."""
    token_type: str = token.get("type") or ""
    attrs = token.get("attrs") or {}

    if token_type in _IGNORED_TOKENS:
        return None

    if token_type in _SIMPLE_KINDS:
        node = SyntaxNode(_SIMPLE_KINDS[token_type])
    elif token_type == "heading":
        node = SyntaxNode(NodeKind.HEADING, level=int(attrs.get("level", 1)))
    elif token_type == "list":
        node = SyntaxNode(NodeKind.LIST, list_data=_list_data(token))
    elif token_type == "list_item":
        node = SyntaxNode(NodeKind.ITEM, list_data=parent.list_data)
    elif token_type == "def_list":
        node = SyntaxNode(
            NodeKind.LIST, list_data=ListData(ordered=False, definition=True)
        )
    elif token_type in ("def_list_head", "def_list_item"):
        node = SyntaxNode(
            NodeKind.ITEM,
            list_data=ListData(
                definition=True, term=token_type == "def_list_head"
            ),
        )
    elif token_type in ("link", "image"):
        node = SyntaxNode(
            NodeKind.LINK if token_type == "link" else NodeKind.IMAGE,
            destination=_encode(attrs.get("url")),
            title=_encode(attrs.get("title")),
        )
    elif token_type == "codespan":
        node = SyntaxNode(NodeKind.CODE, literal=_encode(token.get("raw")))
    elif token_type == "text":
        node = SyntaxNode(NodeKind.TEXT, literal=_encode(token.get("raw")))
    elif token_type == "block_code":
        code = token.get("raw") or ""
        # The closing fence must start on its own line
        if code and not code.endswith("\n"):
            code += "\n"
        node = SyntaxNode(
            NodeKind.CODE_BLOCK,
            info=_encode(attrs.get("info")),
            literal=_encode(code),
        )
    elif token_type == "inline_html":
        node = SyntaxNode(NodeKind.HTML_SPAN, literal=_encode(token.get("raw")))
    elif token_type == "block_html":
        node = SyntaxNode(NodeKind.HTML_BLOCK, literal=_encode(token.get("raw")))
    else:
        logger.debug("Unrecognised mistune token type '%s'", token_type)
        node = SyntaxNode(
            NodeKind.UNKNOWN,
            raw_type=token_type or "<missing>",
            literal=_encode(token.get("raw")),
        )

    parent.append_child(node)
    for child in token.get("children") or []:
        _build_node(child, node)
    return node


def build_tree(tokens: list[dict[str, Any]]) -> SyntaxNode:
    """Build a document tree from a mistune AST token list."""
    document = SyntaxNode(NodeKind.DOCUMENT)
    for token in tokens:
        _build_node(token, document)
    return document


def parse_markdown(markdown_text: str) -> SyntaxNode:
    """
    Parse Markdown text into a syntax tree.

    Args:
        markdown_text: Markdown formatted text

    Returns:
        Document node whose children are the top-level blocks
    """
    markdown = mistune.create_markdown(renderer="ast", plugins=PLUGINS)
    tokens: list[dict[str, Any]] = markdown(markdown_text)  # type: ignore[assignment]
    return build_tree(tokens)
