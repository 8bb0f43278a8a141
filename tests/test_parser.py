"""Tests for the nested-struct parser."""

import pytest

from nestedstruct.core.model import ExternalType, NestedMarker, NestedType
from nestedstruct.exceptions import ConfigurationError, StructSyntaxError
from nestedstruct.parsers.struct_parser import StructParser, parse_struct


class TestParserBasics:
    """Headers, fields and external types."""

    def test_empty_struct(self):
        root = parse_struct("struct TestStruct {}")
        assert root.name == "TestStruct"
        assert root.visibility == ""
        assert root.fields == []

    def test_header_attributes_and_visibility(self):
        root = parse_struct("#[derive(Debug)]\n#[repr(C)]\npub(crate) struct S { a: u8 }")
        assert [a.text for a in root.struct_attributes] == ["#[derive(Debug)]", "#[repr(C)]"]
        assert root.visibility == "pub(crate)"

    def test_external_field_types(self):
        root = parse_struct(
            """
            struct S {
                a: u32,
                pub b: HashMap<String, Vec<u8>>,
                c: [u8; 4],
                d: fn(u8) -> u8,
                e: &'static str,
                f: std::fmt::Result,
            }
            """
        )
        types = [f.type_ref.text for f in root.fields]
        assert types == [
            "u32",
            "HashMap<String, Vec<u8>>",
            "[u8; 4]",
            "fn(u8) -> u8",
            "&'static str",
            "std::fmt::Result",
        ]
        assert root.fields[1].visibility == "pub"
        assert all(isinstance(f.type_ref, ExternalType) for f in root.fields)

    def test_fields_separated_by_newlines(self):
        root = parse_struct(
            """
            struct S {
                a: u8
                b: Vec<u8>
                c: Inner {
                    d: bool
                }
                e: String
            }
            """
        )
        assert [f.name for f in root.fields] == ["a", "b", "c", "e"]
        assert [f.name for f in root.fields[2].child.fields] == ["d"]

    def test_field_attributes_and_doc_comments(self):
        root = parse_struct(
            """
            struct S {
                /// The count
                #[serde(rename = "n")]
                count: u32,
            }
            """
        )
        field = root.fields[0]
        assert [a.text for a in field.field_attributes] == [
            "/// The count",
            '#[serde(rename = "n")]',
        ]

    def test_block_doc_comments(self):
        root = parse_struct(
            """
            /** A struct */
            struct S {
                /** the a field */
                a: u8
                /// the b field
                b: u8,
            }
            """
        )
        assert [a.text for a in root.struct_attributes] == ["/** A struct */"]
        assert [f.name for f in root.fields] == ["a", "b"]
        assert [a.text for a in root.fields[0].field_attributes] == ["/** the a field */"]
        assert [a.text for a in root.fields[1].field_attributes] == ["/// the b field"]

    def test_positions_are_recorded(self):
        root = parse_struct("struct S {\n    alpha: u8,\n}")
        assert (root.fields[0].line, root.fields[0].column) == (2, 5)


class TestParserNesting:
    """Named and anonymous nested bodies."""

    def test_named_nested_struct(self):
        root = parse_struct("struct TestStruct { field: NestedField { field: u32 } }")
        field = root.fields[0]
        assert isinstance(field.type_ref, NestedType)
        assert field.child.name == "NestedField"
        assert field.child.fields[0].type_ref.text == "u32"

    def test_anonymous_nested_struct(self):
        root = parse_struct("struct S { inner: { x: u8 } }")
        assert root.fields[0].child.name is None
        assert root.fields[0].child.is_anonymous

    def test_child_inherits_field_visibility(self):
        root = parse_struct("pub struct S { pub inner: Inner { x: u8 }, other: { y: u8 } }")
        assert root.fields[0].child.visibility == "pub"
        assert root.fields[1].child.visibility == ""

    def test_nested_header_attributes(self):
        root = parse_struct("struct S { inner: #[derive(Debug)] Inner { x: u8 } }")
        child = root.fields[0].child
        assert [a.text for a in child.struct_attributes] == ["#[derive(Debug)]"]

    def test_deep_nesting(self):
        root = parse_struct("struct A { b: B { c: C { d: D { e: E { f: F { g: u8 } } } } } }")
        assert [spec.name for spec in root.walk()] == ["A", "B", "C", "D", "E", "F"]

    def test_markers_are_kept_in_leading_run(self):
        root = parse_struct(
            """
            struct S {
                #[doc = "x"]
                @nested(#[derive(Clone)] #[derive(Debug)])
                @nested()
                inner: Inner { x: u8 },
            }
            """
        )
        field = root.fields[0]
        assert [type(item).__name__ for item in field.leading] == [
            "Attribute",
            "NestedMarker",
            "NestedMarker",
        ]
        marker = field.leading[1]
        assert isinstance(marker, NestedMarker)
        assert [a.text for a in marker.attributes] == ["#[derive(Clone)]", "#[derive(Debug)]"]
        assert [a.text for a in field.field_attributes] == ['#[doc = "x"]']

    def test_anonymous_nesting_disabled(self):
        parser = StructParser(anonymous_nesting=False)
        with pytest.raises(ConfigurationError) as exc_info:
            parser.parse("struct S {\n    inner: { x: u8 },\n}")
        assert exc_info.value.field_name == "inner"
        assert exc_info.value.line == 2

    def test_named_nesting_allowed_when_anonymous_disabled(self):
        root = StructParser(anonymous_nesting=False).parse("struct S { inner: Inner { x: u8 } }")
        assert root.fields[0].child.name == "Inner"


class TestParserErrors:
    """Malformed input is rejected with a located StructSyntaxError."""

    def test_missing_colon(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct("struct S {\n    a u32,\n}")
        err = exc_info.value
        assert "expected ':'" in err.message
        assert (err.line, err.column) == (2, 7)
        assert err.field_name == "a"

    def test_unterminated_body(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct("struct S { a: Inner { b: u8 }")
        assert "unterminated '{'" in exc_info.value.message
        assert exc_info.value.column == 10

    def test_unterminated_attribute(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct("struct S { #[derive(Clone] a: u8 }")
        assert "mismatched" in exc_info.value.message

    def test_trailing_marker_without_field(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct("struct S { a: u8, @nested(#[derive(Clone)]) }")
        assert "not followed by a field" in exc_info.value.message

    def test_trailing_attribute_without_field(self):
        with pytest.raises(StructSyntaxError):
            parse_struct("struct S { a: u8, #[doc = \"x\"] }")

    def test_unknown_marker(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct("struct S { @flatten(#[a]) a: A { x: u8 } }")
        assert "unknown marker" in exc_info.value.message

    def test_marker_with_non_attribute_content(self):
        with pytest.raises(StructSyntaxError):
            parse_struct("struct S { @nested(derive(Clone)) a: A { x: u8 } }")

    def test_missing_type(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct("struct S { a: , b: u8 }")
        assert "expected a type" in exc_info.value.message

    def test_missing_struct_keyword(self):
        with pytest.raises(StructSyntaxError):
            parse_struct("enum S { A }")

    def test_trailing_input(self):
        with pytest.raises(StructSyntaxError):
            parse_struct("struct S { a: u8 } struct T {}")

    def test_fields_on_one_line_need_commas(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct("struct S { a: Inner { x: u8 } b: u8 }")
        assert "expected ','" in exc_info.value.message

    def test_header_attributes_require_nested_body(self):
        with pytest.raises(StructSyntaxError):
            parse_struct("struct S { a: #[derive(Debug)] u8 }")

    def test_brace_inside_external_type(self):
        with pytest.raises(StructSyntaxError):
            parse_struct("struct S { a: Vec<T> { x: u8 } }")

    def test_external_fields_on_one_line_need_commas(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct("struct S { a: u8 b: u8 }")
        assert "expected ','" in exc_info.value.message
        assert exc_info.value.field_name == "a"
        assert exc_info.value.column == 18

    def test_doc_comment_after_type_on_same_line(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct("struct S {\n    a: u8 /// note\n    b: u8\n}")
        assert exc_info.value.line == 2
        assert exc_info.value.field_name == "a"

    def test_doc_comment_inside_delimited_type(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct("struct S {\n    a: [u8; /// four\n    4],\n}")
        assert "doc comment inside" in exc_info.value.message

    def test_inner_doc_comment_rejected(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct("struct S {\n    //! inner\n    a: u8,\n}")
        assert "inner doc comments" in exc_info.value.message

    def test_excessive_nesting_depth(self):
        source = "leaf: u8"
        for level in range(2000):
            source = f"f{level}: T{level} {{ {source} }}"
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct(f"struct Root {{ {source} }}")
        assert "too deep" in exc_info.value.message

    def test_doc_comment_inside_generic_arguments(self):
        with pytest.raises(StructSyntaxError) as exc_info:
            parse_struct("struct S {\n    a: Vec<\n    /// item\n    u8>,\n}")
        assert exc_info.value.message == "doc comment inside field type"
        assert exc_info.value.line == 3
