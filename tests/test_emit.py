import unittest

import _fakes  # noqa: F401

from ffistructs.analysis.clang_emit import join_blocks, render_enum, render_struct
from ffistructs.analysis.clang_emit_types import EnumConstant, EnumDecl, FieldInfo, StructDecl


class RenderStructTests(unittest.TestCase):
    def test_struct_without_docs(self) -> None:
        decl = StructDecl(
            name="Pair",
            size=16,
            fields=[FieldInfo("x", "int", 0), FieldInfo("y", "ptr(char)", 8)],
        )
        self.assertEqual(
            render_struct(decl),
            "export const PairT = {\n"
            "  // Byte size: 16\n"
            "  struct: [\n"
            "    /** x, offset 0 */ int,\n"
            "    /** y, offset 8 */ ptr(char),\n"
            "  ],\n"
            "} as const;\n",
        )

    def test_struct_with_docs(self) -> None:
        decl = StructDecl(
            name="CXString",
            size=16,
            fields=[
                FieldInfo("data", "ptr(void)", 0, doc="/**\n * Payload.\n */"),
                FieldInfo("private_flags", "uint", 8),
            ],
            doc="/**\n * A character string.\n */",
        )
        self.assertEqual(
            render_struct(decl),
            "/**\n"
            " * A character string.\n"
            " */\n"
            "export const CXStringT = {\n"
            "  // Byte size: 16\n"
            "  struct: [\n"
            "    /**\n"
            "     * Payload.\n"
            "     */\n"
            "    /** data, offset 0 */ ptr(void),\n"
            "    /** private_flags, offset 8 */ uint,\n"
            "  ],\n"
            "} as const;\n",
        )

    def test_empty_struct(self) -> None:
        text = render_struct(StructDecl(name="Empty", size=0, fields=[]))
        self.assertIn("// Byte size: 0", text)
        self.assertIn("  struct: [\n  ],", text)


class RenderEnumTests(unittest.TestCase):
    def test_enum_block(self) -> None:
        decl = EnumDecl(
            name="CXErrorCode",
            integer_type="uint",
            constants=[
                EnumConstant("CXError_Success", 0, doc="/**\n * No error.\n */"),
                EnumConstant("CXError_Failure", 1),
            ],
            doc="/**\n * Error codes.\n */",
        )
        self.assertEqual(
            render_enum(decl),
            "/**\n"
            " * Error codes.\n"
            " */\n"
            "export const enum CXErrorCode {\n"
            "  /**\n"
            "   * No error.\n"
            "   */\n"
            "  CXError_Success = 0,\n"
            "  CXError_Failure = 1,\n"
            "}\n"
            "export const CXErrorCodeT = uint;\n",
        )


class JoinBlocksTests(unittest.TestCase):
    def test_single_blank_line_between_blocks(self) -> None:
        self.assertEqual(join_blocks(["a\n", "b\n"]), "a\n\nb\n")
        self.assertEqual(join_blocks([]), "")


if __name__ == "__main__":
    unittest.main()
