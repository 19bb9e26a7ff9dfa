#!/usr/bin/env python3
"""
Tests for the declaration reader: one (name, optional, raw type) contract
for class, interface and type-alias declarations.
"""

import pytest

from tsshape.analysis.reader import (
    RawField, ClassSource, InterfaceSource, TypeAliasSource, declaration_source, read_fields,
)
from tsshape.shared.errors import UnsupportedConstruct
from tsshape.shared.nodes import (
    DeclarationKind, KeywordTypeNode, TypeReferenceNode, MergedTypeNode, IMPLICIT_TYPE_NODE,
)
from tests.test_utils import parse_declaration, forms


def _triples(decl):
    return [(f.name, f.optional, f.raw_type) for f in read_fields(decl)]


@pytest.mark.unit
class TestReaderContract:
    """The three forms are indistinguishable after reading"""

    def test_same_fields_for_every_form(self, parser):
        tree = parser.parse(forms("    a?: string;\n    b;\n    c: Foo;"), "<test>")
        results = [_triples(decl) for decl in tree.declarations]
        expected = [
            ("a", True, KeywordTypeNode("string")),
            ("b", False, IMPLICIT_TYPE_NODE),
            ("c", False, TypeReferenceNode("Foo")),
        ]
        assert results == [expected, expected, expected]

    def test_source_order_is_kept(self, parser):
        decl = parse_declaration("interface I { z: string; a: string; m: string }", parser)
        assert [f.name for f in read_fields(decl)] == ["z", "a", "m"]

    def test_adapter_per_form(self, parser):
        tree = parser.parse(forms("x: string;"), "<test>")
        adapters = [declaration_source(d) for d in tree.declarations]
        assert [type(a) for a in adapters] == [ClassSource, InterfaceSource, TypeAliasSource]
        assert [a.kind for a in adapters] == [
            DeclarationKind.CLASS, DeclarationKind.INTERFACE, DeclarationKind.TYPE_ALIAS,
        ]

    def test_optionality_comes_from_marker_only(self, parser):
        decl = parse_declaration("interface I { a: string | undefined; b?: string }", parser)
        assert [(f.name, f.optional) for f in read_fields(decl)] == [("a", False), ("b", True)]

    def test_fields_carry_locations(self, parser):
        decl = parse_declaration("class C {\n    a: string;\n}", parser)
        field = next(iter(read_fields(decl)))
        assert isinstance(field, RawField)
        assert field.location.line == 2

    def test_empty_declaration(self, parser):
        tree = parser.parse(forms(""), "<test>")
        assert all(_triples(d) == [] for d in tree.declarations)


@pytest.mark.unit
class TestClassMembers:
    """Only instance properties describe a class shape"""

    def test_static_members_and_methods_skipped(self, parser):
        decl = parse_declaration(
            "class C {\n"
            "    static count: number = 0;\n"
            "    constructor(public id: string) { }\n"
            "    name: string;\n"
            "    greet(): string { return this.name; }\n"
            "}",
            parser,
        )
        assert _triples(decl) == [("name", False, KeywordTypeNode("string"))]

    def test_access_modifiers_do_not_change_fields(self, parser):
        decl = parse_declaration(
            "class C { private a: string; protected readonly b?: number; public c; }",
            parser,
        )
        assert [(f.name, f.optional) for f in read_fields(decl)] == [("a", False), ("b", True), ("c", False)]

    def test_index_signature_is_unsupported(self, parser):
        decl = parse_declaration("class C { [key: string]: number; }", parser)
        with pytest.raises(UnsupportedConstruct) as exc_info:
            list(read_fields(decl))
        assert exc_info.value.construct == "index signature"


@pytest.mark.unit
class TestInterfaceMembers:

    def test_method_signatures_skipped(self, parser):
        decl = parse_declaration("interface I { run(): void; a: string }", parser)
        assert [f.name for f in read_fields(decl)] == ["a"]

    def test_heritage_not_expanded(self, parser):
        decl = parse_declaration("interface I extends Base { a: string }", parser)
        assert [f.name for f in read_fields(decl)] == ["a"]

    def test_index_signature_is_unsupported(self, parser):
        decl = parse_declaration("interface I { a: string; [k: string]: any }", parser)
        with pytest.raises(UnsupportedConstruct):
            list(read_fields(decl))


@pytest.mark.unit
class TestTypeAliasShapes:
    """Which type-alias right-hand sides describe a shape"""

    def test_parenthesized_literal(self, parser):
        decl = parse_declaration("type T = ({ a: string })", parser)
        assert _triples(decl) == [("a", False, KeywordTypeNode("string"))]

    def test_intersection_of_literals_merges_keys(self, parser):
        decl = parse_declaration(
            "type T = { a: string; b?: number } & { b?: number; c: boolean }",
            parser,
        )
        fields = list(read_fields(decl))
        assert [f.name for f in fields] == ["a", "b", "c"]
        b = fields[1]
        assert b.optional is True
        assert b.raw_type == MergedTypeNode((KeywordTypeNode("number"), KeywordTypeNode("number")))

    def test_merged_key_optional_only_if_optional_everywhere(self, parser):
        decl = parse_declaration("type T = { a?: string } & { a: string }", parser)
        (a,) = read_fields(decl)
        assert a.optional is False

    def test_key_repeated_within_one_literal_passes_through(self, parser):
        decl = parse_declaration("type T = { a: string; a: number } & { b: string }", parser)
        assert [f.name for f in read_fields(decl)] == ["a", "a", "b"]

    @pytest.mark.parametrize("rhs", [
        "string",
        "{ a: string } | { b: string }",
        "Foo",
        "{ a: string } & Foo",
        "[string, number]",
    ])
    def test_non_shape_alias_is_unsupported(self, parser, rhs):
        decl = parse_declaration(f"type T = {rhs}", parser)
        with pytest.raises(UnsupportedConstruct) as exc_info:
            list(read_fields(decl))
        assert exc_info.value.construct == "type alias without an object shape"

    def test_mapped_alias_names_the_construct(self, parser):
        decl = parse_declaration("type Flags = { [K in Keys]: boolean }", parser)
        with pytest.raises(UnsupportedConstruct) as exc_info:
            list(read_fields(decl))
        assert exc_info.value.construct == "mapped type"
        assert exc_info.value.detail == "over `K` in `Flags`"

    def test_variable_declaration_has_no_shape(self, parser):
        decl = parse_declaration("declare const x: string;", parser)
        with pytest.raises(UnsupportedConstruct):
            declaration_source(decl)
