#!/usr/bin/env python3
"""
Tests for type normalization: written syntax to canonical TypeExpr.
"""

import pytest

from tsshape.analysis.normalizer import TypeNormalizer, CanonicalTransformer, make_union, make_intersection, merge_shapes, merge_types
from tsshape.shared.errors import UnsupportedConstruct
from tsshape.shared.nodes import MergedTypeNode, KeywordTypeNode, TypeLiteralNode, PropertyNode
from tsshape.shared.types import (
    PrimitiveType, ArrayType, TupleElement, TupleType, UnionType, IntersectionType,
    ObjectField, ObjectShapeType, GenericType, TypeQueryType, LiteralType,
    STRING, NUMBER, BOOLEAN, ANY, NULL, UNDEFINED, IMPLICIT,
)
from tests.test_utils import normalize_text


@pytest.mark.unit
class TestNormalizePrimitives:

    @pytest.mark.parametrize("keyword", ["string", "number", "boolean", "any", "null", "unknown", "undefined"])
    def test_keyword(self, parser, keyword):
        assert normalize_text(keyword, parser) == PrimitiveType(keyword)

    def test_reference_without_arguments(self, parser):
        assert normalize_text("SomeType", parser) == GenericType("SomeType")

    def test_generic_reference(self, parser):
        assert normalize_text("Map<string, number>", parser) == GenericType("Map", (STRING, NUMBER))

    def test_type_query_is_recorded(self, parser):
        assert normalize_text("typeof defaults", parser) == TypeQueryType("defaults")

    def test_literals(self, parser):
        assert normalize_text("'on'", parser) == LiteralType("on")
        assert normalize_text("42", parser) == LiteralType(42)
        assert normalize_text("true", parser) == LiteralType(True)
        assert normalize_text("true", parser) != LiteralType(1)

    def test_parentheses_are_transparent(self, parser):
        assert normalize_text("((string))", parser) == STRING


@pytest.mark.unit
class TestNormalizeArraysAndTuples:

    def test_array_forms_agree(self, parser):
        assert normalize_text("string[]", parser) == ArrayType(STRING)
        assert normalize_text("Array<string>", parser) == ArrayType(STRING)
        assert normalize_text("(string)[]", parser) == ArrayType(STRING)

    def test_array_with_wrong_arity_stays_generic(self, parser):
        assert normalize_text("Array<string, number>", parser) == GenericType("Array", (STRING, NUMBER))

    def test_optional_tuple_element(self, parser):
        assert normalize_text("[string?]", parser) == TupleType((TupleElement(STRING, optional=True),))

    def test_array_of_tuples_differs_from_tuple_of_arrays(self, parser):
        array_of_tuple = normalize_text("[string?][]", parser)
        tuple_of_array = normalize_text("[string[]?]", parser)
        assert array_of_tuple == ArrayType(TupleType((TupleElement(STRING, True),)))
        assert tuple_of_array == TupleType((TupleElement(ArrayType(STRING), True),))
        assert array_of_tuple != tuple_of_array

    def test_tuple_order_matters(self, parser):
        assert normalize_text("[string, number]", parser) != normalize_text("[number, string]", parser)

    def test_tuple_optionality_matters(self, parser):
        assert normalize_text("[string]", parser) != normalize_text("[string?]", parser)

    def test_array_of_union(self, parser):
        assert normalize_text("(string | null)[]", parser) == ArrayType(UnionType([STRING, NULL]))


@pytest.mark.unit
class TestNormalizeUnions:

    def test_order_independent(self, parser):
        assert normalize_text("string | number", parser) == normalize_text("number | string", parser)

    def test_duplicates_collapse(self, parser):
        assert normalize_text("string | number | string", parser) == UnionType([STRING, NUMBER])

    def test_single_survivor_unwrapped(self, parser):
        assert normalize_text("string | string", parser) == STRING

    def test_nested_unions_flatten(self, parser):
        assert normalize_text("string | (number | (boolean | string))", parser) == UnionType([STRING, NUMBER, BOOLEAN])

    def test_undefined_member_is_kept(self, parser):
        assert normalize_text("string | undefined", parser) == UnionType([STRING, UNDEFINED])

    def test_make_union_directly(self):
        assert make_union([UnionType([STRING, NUMBER]), NUMBER]) == UnionType([STRING, NUMBER])
        assert make_union([ANY]) == ANY


@pytest.mark.unit
class TestNormalizeIntersections:

    def test_object_members_merge(self, parser):
        merged = normalize_text("{ a: string; b: number } & { b: number; c: boolean }", parser)
        assert merged == ObjectShapeType([
            ObjectField("a", False, STRING),
            ObjectField("b", False, NUMBER),
            ObjectField("c", False, BOOLEAN),
        ])
        assert merged.names == ("a", "b", "c")

    def test_two_key_merge(self, parser):
        merged = normalize_text("{ data1: string } & { data2: number }", parser)
        assert isinstance(merged, ObjectShapeType)
        assert set(merged.names) == {"data1", "data2"}

    def test_conflicting_key_keeps_both(self, parser):
        merged = normalize_text("{ a: string } & { a: number }", parser)
        assert merged.get("a").type == UnionType([STRING, NUMBER])

    def test_nested_objects_merge_recursively(self, parser):
        merged = normalize_text("{ o: { x: string } } & { o: { y?: number } }", parser)
        assert merged.get("o").type == ObjectShapeType([
            ObjectField("x", False, STRING),
            ObjectField("y", True, NUMBER),
        ])

    def test_merged_optionality(self, parser):
        merged = normalize_text("{ a?: string; b?: string } & { a?: string; b: string }", parser)
        assert merged.get("a").optional is True
        assert merged.get("b").optional is False

    def test_non_object_members_stay(self, parser):
        result = normalize_text("Foo & { a: string } & Bar & { b: number }", parser)
        assert isinstance(result, IntersectionType)
        assert result.members[0] == GenericType("Foo")
        assert result.members[1] == ObjectShapeType([ObjectField("a", False, STRING), ObjectField("b", False, NUMBER)])
        assert result == normalize_text("Bar & { b: number; a: string } & Foo", parser)

    def test_make_intersection_flattens(self):
        inner = IntersectionType([GenericType("A"), GenericType("B")])
        assert make_intersection([inner, GenericType("A")]) == IntersectionType([GenericType("A"), GenericType("B")])
        assert make_intersection([GenericType("A")]) == GenericType("A")


@pytest.mark.unit
class TestMergePolicy:
    """Right-biased merge of two candidates for one key"""

    def test_equal_types_collapse(self):
        assert merge_types(STRING, STRING) == STRING

    def test_shapes_merge(self):
        left = ObjectShapeType([ObjectField("a", False, STRING)])
        right = ObjectShapeType([ObjectField("b", True, NUMBER)])
        assert merge_types(left, right) == ObjectShapeType([
            ObjectField("a", False, STRING), ObjectField("b", True, NUMBER),
        ])

    def test_conflict_is_union(self):
        assert merge_types(STRING, ArrayType(STRING)) == UnionType([STRING, ArrayType(STRING)])

    def test_first_position_kept(self):
        left = ObjectShapeType([ObjectField("a", False, STRING), ObjectField("b", False, STRING)])
        right = ObjectShapeType([ObjectField("c", False, STRING), ObjectField("a", False, STRING)])
        assert merge_shapes(left, right).names == ("a", "b", "c")

    def test_merged_type_node(self):
        node = MergedTypeNode((KeywordTypeNode("string"), KeywordTypeNode("number")))
        assert TypeNormalizer().normalize(node) == UnionType([STRING, NUMBER])


@pytest.mark.unit
class TestNormalizeObjects:

    def test_object_literal(self, parser):
        assert normalize_text("{ a: string; b?: number; c }", parser) == ObjectShapeType([
            ObjectField("a", False, STRING),
            ObjectField("b", True, NUMBER),
            ObjectField("c", False, IMPLICIT),
        ])

    def test_field_order_irrelevant(self, parser):
        assert normalize_text("{ a: string; b: number }", parser) == normalize_text("{ b: number, a: string }", parser)

    def test_methods_skipped(self, parser):
        assert normalize_text("{ a: string; run(): void }", parser) == ObjectShapeType([ObjectField("a", False, STRING)])

    def test_empty_object(self, parser):
        assert normalize_text("{}", parser) == ObjectShapeType(())

    def test_index_signature_unsupported(self, parser):
        with pytest.raises(UnsupportedConstruct):
            normalize_text("{ [key: string]: number }", parser)

    def test_direct_literal_node(self):
        node = TypeLiteralNode((PropertyNode("a", type_annotation=KeywordTypeNode("any")),))
        assert TypeNormalizer().normalize(node) == ObjectShapeType([ObjectField("a", False, ANY)])


@pytest.mark.unit
class TestUnsupportedTypes:

    def test_keyof(self, parser):
        with pytest.raises(UnsupportedConstruct) as exc_info:
            normalize_text("keyof Foo", parser)
        assert "keyof" in exc_info.value.construct

    def test_indexed_access(self, parser):
        with pytest.raises(UnsupportedConstruct) as exc_info:
            normalize_text("Foo['bar']", parser)
        assert exc_info.value.location is not None

    def test_unsupported_inside_union(self, parser):
        with pytest.raises(UnsupportedConstruct):
            normalize_text("string | keyof Foo", parser)

    @pytest.mark.parametrize("text, construct", [
        ("(a: string) => void", "function type"),
        ("() => { ok: boolean }", "function type"),
        ("`id-${string}`", "template literal type"),
        ("{ [K in Keys]?: string }", "mapped type"),
    ])
    def test_other_type_syntax(self, parser, text, construct):
        with pytest.raises(UnsupportedConstruct) as exc_info:
            normalize_text(text, parser)
        assert exc_info.value.construct == construct
        assert exc_info.value.location is not None


@pytest.mark.unit
class TestCanonicalTransformer:
    """Rewrites of union / intersection members keep the canonical form"""

    class _QueryToShape(CanonicalTransformer):
        def __init__(self, replacement):
            self.replacement = replacement

        def visit_type_query_type(self, ty):
            return self.replacement

    def test_union_unwraps_and_flattens(self):
        union = UnionType([STRING, TypeQueryType("x")])
        assert self._QueryToShape(STRING).transform(union) == STRING
        nested = self._QueryToShape(UnionType([NUMBER, NULL])).transform(union)
        assert nested == UnionType([STRING, NUMBER, NULL])

    def test_intersection_merges_object_members(self):
        left = ObjectShapeType([ObjectField("a", False, STRING)])
        right = ObjectShapeType([ObjectField("b", False, NUMBER)])
        result = self._QueryToShape(right).transform(IntersectionType([left, TypeQueryType("x")]))
        assert result == ObjectShapeType([ObjectField("a", False, STRING), ObjectField("b", False, NUMBER)])


@pytest.mark.unit
class TestDeterminism:

    def test_same_text_same_result(self, parser):
        text = "Map<string, [number, { a?: string | null }]> | Foo[] | typeof bar"
        first = normalize_text(text, parser)
        second = normalize_text(text, parser)
        assert first == second
        assert hash(first) == hash(second)

    def test_normalizer_keeps_no_state(self, parser):
        normalizer = TypeNormalizer()
        before = normalizer.normalize(KeywordTypeNode("string"))
        normalize_text("{ a: string } & { a: number }", parser)
        assert normalizer.normalize(KeywordTypeNode("string")) == before
