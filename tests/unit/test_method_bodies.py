#!/usr/bin/env python3
"""
Tests for method-body blanking ahead of the grammar.
"""

import pytest

from tsshape.frontend.method_bodies import blank_method_bodies, matching_brace, skip_trivia


@pytest.mark.unit
class TestBlankMethodBodies:

    def test_text_after_nested_block(self):
        inner = " if (p) { return 1; } return 2; "
        source = f"class A {{ m() {{{inner}}} }}"
        assert blank_method_bodies(source) == f"class A {{ m() {{{' ' * len(inner)}}} }}"

    def test_positions_are_kept(self):
        source = "class A {\n    m() {\n        go();\n    }\n    x: string;\n}"
        out = blank_method_bodies(source)
        assert len(out) == len(source)
        assert out.split("\n")[4] == "    x: string;"
        assert "go" not in out

    def test_braces_in_strings_and_comments(self):
        source = "class A { m() { const s = \"}\"; /* { */ return s; } after: string; }"
        out = blank_method_bodies(source)
        assert "return" not in out
        assert out.endswith("after: string; }")

    def test_object_return_type_is_kept(self):
        out = blank_method_bodies("class A { m(): { a: string } { return { a: '' }; } }")
        assert "{ a: string }" in out
        assert "return" not in out

    def test_constructor_and_modifiers(self):
        out = blank_method_bodies("class A { constructor(private o: string) { this.o = o; } static async run(): Promise<void> { await x; } }")
        assert "this.o" not in out
        assert "await" not in out

    @pytest.mark.parametrize("source", [
        "class A { x = { a: 1 }; y: { b: number }; }",
        "class A { cb: () => { ok: boolean }; }",
        "class A { m(): void; n(a: { k: string }): void; }",
        "interface I { m(): void; o: { a: string } }\ntype T = { f(): void };",
        "declare const d: { a: string };",
    ])
    def test_type_braces_are_untouched(self, source):
        assert blank_method_bodies(source) == source

    def test_class_header_braces(self):
        out = blank_method_bodies("class A<T extends { a: string }> extends B<{ c: 1 }> { m() { go(); } }")
        assert "{ a: string }" in out
        assert "{ c: 1 }" in out
        assert "go" not in out

    def test_property_named_class_is_not_a_class(self):
        source = "interface I { class: string; o: { a: string } }"
        assert blank_method_bodies(source) == source

    def test_unbalanced_body_is_left_alone(self):
        source = "class A { m() { "
        assert blank_method_bodies(source) == source


@pytest.mark.unit
class TestScanHelpers:

    @pytest.mark.parametrize("text, end", [
        ("// x\ny", 4),
        ("/* } */x", 7),
        ("'a\\'b' c", 6),
        ("`a${b}` c", 7),
        ("abc", 0),
    ])
    def test_skip_trivia(self, text, end):
        assert skip_trivia(text, 0) == end

    def test_matching_brace(self):
        assert matching_brace("{ '}' { } } tail", 0) == 10
        assert matching_brace("{ {", 0) is None
