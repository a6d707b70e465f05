"""
Unit tests for traversal.py

Tests node classification, document-order discovery and member scoping.
"""

import unittest

from extraction.models import DeclarationKind, TypeKind
from extraction.parser import parse_bytes
from extraction.traversal import (
    classify_node,
    extract_types_from_tree,
    iter_declaration_nodes,
    iter_direct_members,
)


def _types(source: str, **kwargs):
    source_bytes = source.encode("utf-8")
    tree = parse_bytes(source_bytes)
    return extract_types_from_tree(tree, source_bytes, **kwargs)


class TestClassification(unittest.TestCase):
    """Test the tagged classification of syntax nodes."""

    def test_classify_kinds(self):
        source = b"class A { A() {} void M() {} int f; }"
        tree = parse_bytes(source)
        seen = {}
        for node, decl_kind, type_kind in iter_declaration_nodes(tree.root_node):
            seen.setdefault(node.type, (decl_kind, type_kind))

        self.assertEqual(seen["class_declaration"], (DeclarationKind.TYPE, TypeKind.CLASS))
        self.assertEqual(seen["constructor_declaration"], (DeclarationKind.CONSTRUCTOR, None))
        self.assertEqual(seen["method_declaration"], (DeclarationKind.METHOD, None))
        self.assertEqual(seen["field_declaration"], (DeclarationKind.OTHER, None))
        self.assertEqual(classify_node(tree.root_node), (DeclarationKind.OTHER, None))


class TestTypeDiscovery(unittest.TestCase):
    """Test which types are found and in which order."""

    def test_document_order_with_nesting_and_namespaces(self):
        source = """
namespace N1
{
    class Outer
    {
        class Inner { }
    }
    interface IFirst { }
}
namespace N2.Sub
{
    struct S { }
    record R(int X);
}
"""
        records = _types(source)
        self.assertEqual([r.name for r in records], ["Outer", "Inner", "IFirst", "S", "R"])
        self.assertEqual(
            [r.kind for r in records],
            [TypeKind.CLASS, TypeKind.CLASS, TypeKind.INTERFACE, TypeKind.STRUCT, TypeKind.RECORD],
        )

    def test_file_scoped_namespace(self):
        records = _types("namespace Darwin.Domain;\n\npublic class Customer { public void Rename(string name) { } }")
        self.assertEqual([r.name for r in records], ["Customer"])
        self.assertEqual(records[0].members[0].signature_line, "public void Rename(string name)")

    def test_enums_and_delegates_are_not_types(self):
        records = _types("enum Color { Red } delegate void Handler(); class Keep { }")
        self.assertEqual([r.name for r in records], ["Keep"])

    def test_empty_source(self):
        self.assertEqual(_types(""), [])

    def test_start_lines(self):
        records = _types("\n\nclass A\n{\n    void M() { }\n}")
        self.assertEqual(records[0].start_line, 3)
        self.assertEqual(records[0].members[0].start_line, 5)


class TestMemberScoping(unittest.TestCase):
    """Test that members stay with the type that directly declares them."""

    def test_nested_type_members_not_leaked(self):
        source = """
class Outer
{
    public Outer() { }
    public void A() { }
    class Inner
    {
        public void B() { }
    }
    public void C() { }
}
"""
        outer, inner = _types(source)
        self.assertEqual(
            [m.signature_line for m in outer.members],
            ["public Outer()", "public void A()", "public void C()"],
        )
        self.assertEqual([m.signature_line for m in inner.members], ["public void B()"])

    def test_constructor_flag(self):
        records = _types("class A { public A() { } public void M() { } }")
        self.assertEqual([m.is_constructor for m in records[0].members], [True, False])

    def test_properties_fields_and_local_functions_ignored(self):
        source = """
class A
{
    private int _x;
    public int X { get; set; }
    public event System.EventHandler Changed;
    public void M()
    {
        int Local() => 1;
        Local();
    }
}
"""
        records = _types(source)
        self.assertEqual([m.signature_line for m in records[0].members], ["public void M()"])

    def test_interface_members(self):
        records = _types("public interface IRepo { Task SaveAsync(Order order); int Count { get; } }")
        self.assertEqual([m.signature_line for m in records[0].members], ["Task SaveAsync(Order order)"])

    def test_members_inside_preprocessor_block(self):
        source = """
class A
{
#if DEBUG
    public void DebugOnly() { }
#endif
    public void Always() { }
}
"""
        records = _types(source)
        names = [m.name for m in records[0].members]
        self.assertIn("Always", names)
        self.assertIn("DebugOnly", names)

    def test_iter_direct_members_without_body(self):
        source = b"public record R(int X);"
        tree = parse_bytes(source)
        record = tree.root_node.named_children[0]
        self.assertEqual(list(iter_direct_members(record)), [])


class TestCommentFlags(unittest.TestCase):
    """Test that comment flags gate what is attached."""

    SOURCE = """
/// <summary>Type doc.</summary>
public class A
{
    /// <summary>Method doc.</summary>
    public void M() { }
}
"""

    def test_defaults_attach_type_comment_only(self):
        record = _types(self.SOURCE)[0]
        self.assertEqual(record.comment, "Type doc.")
        self.assertIsNone(record.members[0].comment)

    def test_all_flags(self):
        record = _types(self.SOURCE, include_type_comments=True, include_member_comments=True)[0]
        self.assertEqual(record.comment, "Type doc.")
        self.assertEqual(record.members[0].comment, "Method doc.")

    def test_no_flags(self):
        record = _types(self.SOURCE, include_type_comments=False, include_member_comments=False)[0]
        self.assertIsNone(record.comment)
        self.assertIsNone(record.members[0].comment)


if __name__ == "__main__":
    unittest.main()
