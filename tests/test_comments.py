import unittest

from _fakes import (
    NULL_COMMENT,
    CommentKind,
    FakeComment,
    InlineCommandRenderKind,
    full,
    inline,
    paragraph,
    text,
)

from ffistructs.analysis.clang_comments import render_comment, render_inline_command, render_paragraph
from ffistructs.analysis.clang_emit_types import ShapeError


class RenderCommentTests(unittest.TestCase):
    def test_null_comment_is_absent(self) -> None:
        self.assertIsNone(render_comment(NULL_COMMENT))
        self.assertIsNone(render_comment(None))

    def test_text_children_are_verbatim_lines(self) -> None:
        comment = full(text("first line"), text("second `line`"))
        self.assertEqual(
            render_comment(comment),
            "/**\n * first line\n * second `line`\n */",
        )

    def test_paragraphs_are_separated_and_trailing_separator_stripped(self) -> None:
        comment = full(
            paragraph(text(" Diagnostic reporting")),
            paragraph(text(" Second paragraph.")),
        )
        self.assertEqual(
            render_comment(comment),
            "/**\n * Diagnostic reporting\n *\n * Second paragraph.\n */",
        )

    def test_monospaced_inline_command(self) -> None:
        comment = full(
            paragraph(text(" Call "), inline(InlineCommandRenderKind.MONOSPACED, "foo"), text(" first."))
        )
        rendered = render_comment(comment)
        self.assertIn("`foo`", rendered)
        self.assertEqual(rendered, "/**\n * Call `foo` first.\n */")

    def test_inline_styles(self) -> None:
        cases = {
            InlineCommandRenderKind.NORMAL: "arg",
            InlineCommandRenderKind.BOLD: "**arg**",
            InlineCommandRenderKind.MONOSPACED: "`arg`",
            InlineCommandRenderKind.EMPHASIZED: "*arg*",
            InlineCommandRenderKind.ANCHOR: "",
            None: "",
        }
        for style, expected in cases.items():
            with self.subTest(style=style):
                self.assertEqual(render_inline_command(inline(style, "arg")), expected)

    def test_multiple_arguments_render_in_order(self) -> None:
        command = inline(InlineCommandRenderKind.BOLD, "a", "b", "c")
        self.assertEqual(render_inline_command(command), "**a****b****c**")

    def test_nested_paragraph_is_fatal(self) -> None:
        comment = full(paragraph(text(" outer"), paragraph(text(" inner"))))
        with self.assertRaises(ShapeError):
            render_comment(comment)
        with self.assertRaises(ShapeError):
            render_paragraph(paragraph(paragraph()))

    def test_top_level_inline_command_is_fatal(self) -> None:
        comment = full(inline(InlineCommandRenderKind.BOLD, "x"))
        with self.assertRaises(ShapeError):
            render_comment(comment)

    def test_unknown_child_kind_is_skipped_and_logged(self) -> None:
        messages = []
        comment = full(
            paragraph(text(" Summary.")),
            FakeComment(CommentKind.BLOCK_COMMAND),
            text("tail"),
        )
        rendered = render_comment(comment, log=messages.append)
        self.assertEqual(rendered, "/**\n * Summary.\n *\n * tail\n */")
        self.assertEqual(len(messages), 1)
        self.assertIn("BLOCK_COMMAND", messages[0])

    def test_unknown_child_kind_without_log(self) -> None:
        comment = full(FakeComment(CommentKind.PARAM_COMMAND), paragraph(text(" Only.")))
        self.assertEqual(render_comment(comment), "/**\n * Only.\n */")

    def test_rendering_is_deterministic(self) -> None:
        comment = full(paragraph(text(" A "), inline(InlineCommandRenderKind.EMPHASIZED, "b")))
        self.assertEqual(render_comment(comment), render_comment(comment))


if __name__ == "__main__":
    unittest.main()
