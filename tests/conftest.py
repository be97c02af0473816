"""Shared pytest fixtures for md-renderer tests."""

import io
from types import SimpleNamespace

import pytest

from md_renderer.converters import (
    ListData,
    MarkdownRenderer,
    NodeKind,
    SyntaxNode,
)


def _node(kind, *children, **payload):
    n = SyntaxNode(kind, **payload)
    for child in children:
        n.append_child(child)
    return n


def _list(*items, ordered=False, tight=True, bullet=b"-", delimiter=b"."):
    data = ListData(
        ordered=ordered, bullet_char=bullet, delimiter=delimiter, tight=tight
    )
    return _node(NodeKind.LIST, *items, list_data=data)


@pytest.fixture
def tree():
    """Builders for hand-made syntax trees."""
    return SimpleNamespace(
        node=_node,
        doc=lambda *c: _node(NodeKind.DOCUMENT, *c),
        text=lambda s: _node(NodeKind.TEXT, literal=s.encode("utf-8")),
        para=lambda *c: _node(NodeKind.PARAGRAPH, *c),
        heading=lambda level, *c: _node(NodeKind.HEADING, *c, level=level),
        quote=lambda *c: _node(NodeKind.BLOCK_QUOTE, *c),
        item=lambda *c: _node(NodeKind.ITEM, *c),
        bullet_list=_list,
        ordered_list=lambda *items, **kw: _list(*items, ordered=True, **kw),
    )


@pytest.fixture
def render_tree():
    """Factory fixture: render a tree, return (output_bytes, renderer)."""

    def _render(root, renderer=None):
        renderer = renderer or MarkdownRenderer()
        out = io.BytesIO()
        renderer.render(root, out)
        return out.getvalue(), renderer

    return _render


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with no config files and no renderer env vars in scope."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MD_RENDERER_CONFIG", raising=False)
    monkeypatch.delenv("MD_RENDERER_STRICT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    return tmp_path
