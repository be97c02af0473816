"""
Tests for end-to-end Markdown normalisation: parse, render, re-parse.
"""

import io
import unittest

from md_renderer.converters import (
    MarkdownRenderer,
    NodeKind,
    RenderResult,
    parse_markdown,
    render_markdown,
    render_with_diagnostics,
)
from md_renderer.errors import StrictModeError


def signature(node):
    """Structural fingerprint: kinds, literals, list ordering.

    Adjacent text nodes are merged, since the parser may split a run of
    text differently without changing the document.
    """
    children = []
    for child in node.children:
        sig = signature(child)
        if (
            sig[0] is NodeKind.TEXT
            and children
            and children[-1][0] is NodeKind.TEXT
        ):
            children[-1] = (NodeKind.TEXT, children[-1][1] + sig[1], ())
        else:
            children.append(sig)

    payload = node.literal
    if node.kind is NodeKind.LIST:
        payload = b"ordered" if node.list_data.ordered else b"bullet"
    elif node.kind is NodeKind.HEADING:
        payload = str(node.level).encode()
    elif node.kind in (NodeKind.LINK, NodeKind.IMAGE):
        payload = node.destination
    elif node.kind is NodeKind.CODE_BLOCK:
        payload = node.info + b"\n" + node.literal
    return (node.kind, payload, tuple(children))


class TestRenderMarkdown(unittest.TestCase):
    """Test string-level normalisation."""

    def test_reference_document(self):
        """Heading, paragraph and tight list render canonically."""
        text = "## Hi\n\na\n\n- x\n- y\n"
        self.assertEqual(render_markdown(text), text)

    def test_setext_heading_becomes_atx(self):
        self.assertEqual(render_markdown("Title\n=====\n"), "# Title\n")

    def test_underscore_emphasis_becomes_star(self):
        self.assertEqual(
            render_markdown("_a_ and __b__"), "*a* and **b**\n"
        )

    def test_bullets_preserved(self):
        self.assertEqual(render_markdown("+ a\n+ b"), "+ a\n+ b\n")

    def test_ordered_list_renumbered(self):
        self.assertEqual(
            render_markdown("1. a\n1. b\n1. c\n"), "1. a\n2. b\n3. c\n"
        )

    def test_thematic_break_normalised(self):
        self.assertEqual(
            render_markdown("a\n\n***\n\nb"), "a\n\n---\n\nb\n"
        )

    def test_indented_code_becomes_fenced(self):
        self.assertEqual(
            render_markdown("    x = 1\n"), "```\nx = 1\n```\n"
        )

    def test_nested_quote(self):
        self.assertEqual(render_markdown("> > deep"), "> > deep\n")

    def test_empty_document(self):
        self.assertEqual(render_markdown(""), "")

    def test_trailing_newline_disabled(self):
        self.assertEqual(
            render_markdown("# T", trailing_newline=False), "# T\n\n"
        )

    def test_nested_list(self):
        text = "- a\n  - b\n- c\n"
        self.assertEqual(render_markdown(text), text)


class TestRenderWithDiagnostics(unittest.TestCase):
    """Test diagnostics reporting and strict mode."""

    def test_returns_render_result(self):
        result = render_with_diagnostics("# Title\n")
        self.assertIsInstance(result, RenderResult)
        self.assertEqual(result.text, "# Title\n")
        self.assertEqual(result.diagnostics, [])
        self.assertFalse(result.changed)

    def test_changed_flag(self):
        result = render_with_diagnostics("Title\n=====\n")
        self.assertTrue(result.changed)

    def test_table_dropped(self):
        """Table produces no output and exactly one diagnostic."""
        markdown = "before\n\n| a | b |\n|---|---|\n| 1 | 2 |\n\nafter\n"
        result = render_with_diagnostics(markdown)
        self.assertEqual(result.text, "before\n\nafter\n")
        self.assertEqual(len(result.diagnostics), 1)
        self.assertEqual(result.diagnostics[0].node_kind, "table")
        self.assertIn("tables not implemented", result.warnings[0])

    def test_soft_break_dropped(self):
        result = render_with_diagnostics("a\nb\n")
        self.assertEqual(result.text, "ab\n")
        self.assertEqual(
            [d.node_kind for d in result.diagnostics], ["softbreak"]
        )

    def test_block_html_dropped(self):
        result = render_with_diagnostics("<div>\nx\n</div>\n\ntext\n")
        self.assertEqual(result.text, "text\n")
        self.assertEqual(len(result.diagnostics), 1)

    def test_link_title_reported(self):
        result = render_with_diagnostics('![a *b*](u "t")\n')
        self.assertEqual(result.text, "![a *b*](u)\n")
        self.assertEqual(
            result.warnings, ["Link titles not implemented by renderer"]
        )

    def test_leading_dropped_block_leaves_no_blank_line(self):
        result = render_with_diagnostics("Term\n: def\n\nafter\n")
        self.assertEqual(result.text, "after\n")
        self.assertTrue(result.diagnostics)

    def test_strict_mode_raises(self):
        with self.assertRaises(StrictModeError) as ctx:
            render_with_diagnostics("a\nb\n", strict=True)
        self.assertEqual(len(ctx.exception.diagnostics), 1)
        self.assertIn("Soft breaks", str(ctx.exception))

    def test_strict_mode_clean_document(self):
        result = render_with_diagnostics("# ok\n", strict=True)
        self.assertEqual(result.text, "# ok\n")


class TestRoundTrip(unittest.TestCase):
    """Rendering then re-parsing preserves the supported subset."""

    DOCUMENTS = [
        "# Title\n\nSome *emphasis* and **strong** and ~~struck~~ words\n",
        "A [link](https://example.com) and ![img](pic.png) here\n",
        "Use `x = 1` here\n\n```python\nprint(1)\n```\n",
        "- one\n- two\n  - nested\n- three\n\n1. first\n2. second\n",
        "para\n\n---\n\nnext\n",
        "line one  \nline two\n",
        "intro\n\n> quoted *text*\n",
        "1. a\n\n2. b\n\n3. c\n",
        "### Deep heading\n\n* star\n* list\n",
    ]

    def test_round_trip(self):
        for text in self.DOCUMENTS:
            with self.subTest(text=text):
                original = parse_markdown(text)
                rendered = render_markdown(text)
                self.assertEqual(
                    signature(parse_markdown(rendered)), signature(original)
                )

    def test_rendering_is_idempotent(self):
        for text in self.DOCUMENTS:
            with self.subTest(text=text):
                once = render_markdown(text)
                self.assertEqual(render_markdown(once), once)

    def test_state_balanced_after_every_document(self):
        renderer = MarkdownRenderer()
        for text in self.DOCUMENTS + ["> > - a\n>   1. b\n"]:
            with self.subTest(text=text):
                renderer.render(parse_markdown(text), io.BytesIO())
                self.assertTrue(renderer.state.is_empty())


if __name__ == "__main__":
    unittest.main()
