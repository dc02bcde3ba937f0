"""Tests for the shorthand generic declaration rewriter."""

from __future__ import annotations

import pytest

from c6.errors import MalformedTemplateParameter
from c6.generics import (
    GenericParameter,
    TemplateHeader,
    parse_parameter,
    rewrite_generics,
    split_parameters,
)


class TestRewrite:
    def test_constraint_and_default(self):
        out = rewrite_generics("class Box<T requires Comparable, U = int> {")
        assert out == "template<typename T, typename U = int>\nrequires Comparable\nclass Box {"

    def test_constraints_are_combined(self):
        out = rewrite_generics("class P<A requires Hashable, B requires Printable> {")
        assert out == (
            "template<typename A, typename B>\nrequires Hashable && Printable\nclass P {"
        )

    def test_no_constraints_no_requires_line(self):
        assert rewrite_generics("class Box<T> {") == "template<typename T>\nclass Box {"

    def test_body_is_preserved(self):
        source = "class Box<T> {\n    T value;\n};\n"
        assert rewrite_generics(source) == "template<typename T>\nclass Box {\n    T value;\n};\n"

    def test_struct(self):
        assert rewrite_generics("struct S<T> {};") == "template<typename T>\nstruct S {};"

    def test_non_type_parameter(self):
        out = rewrite_generics("class Arr<T, int N = 4> {")
        assert out == "template<typename T, int N = 4>\nclass Arr {"

    def test_class_kind_kept(self):
        assert rewrite_generics("class H<class T> {") == "template<class T>\nclass H {"

    def test_explicit_typename(self):
        out = rewrite_generics("class H<typename T = std::string> {")
        assert out == "template<typename T = std::string>\nclass H {"

    def test_template_template_parameter(self):
        out = rewrite_generics("class W<class C<typename>> {")
        assert out == "template<template<typename> class C>\nclass W {"

    def test_nested_default_with_comma(self):
        out = rewrite_generics("class M<K, V = std::pair<int, int>> {")
        assert out == "template<typename K, typename V = std::pair<int, int>>\nclass M {"

    def test_constraint_with_arguments(self):
        out = rewrite_generics("class S<T requires Sortable<T>> {")
        assert out == "template<typename T>\nrequires Sortable<T>\nclass S {"

    def test_multiple_declarations(self):
        source = "class A<T> {};\nclass B<U> {};\n"
        assert rewrite_generics(source) == (
            "template<typename T>\nclass A {};\ntemplate<typename U>\nclass B {};\n"
        )

    def test_plain_class_untouched(self):
        source = "class Plain {\n};\n"
        assert rewrite_generics(source) == source

    def test_partial_specialization_untouched(self):
        source = "template<typename T>\nclass Box<T*> {\n};\n"
        assert rewrite_generics(source) == source

    def test_include_before_declaration_does_not_block_rewrite(self):
        source = "#include <vector>\nclass Box<T> {};"
        assert rewrite_generics(source) == "#include <vector>\ntemplate<typename T>\nclass Box {};"


class TestMalformed:
    def test_name_starting_with_digit(self):
        with pytest.raises(MalformedTemplateParameter) as exc_info:
            rewrite_generics("class Box<1bad> {")
        assert exc_info.value.parameter == "1bad"

    def test_empty_list(self):
        with pytest.raises(MalformedTemplateParameter, match="empty"):
            rewrite_generics("class Box<> {")

    def test_trailing_comma(self):
        with pytest.raises(MalformedTemplateParameter):
            rewrite_generics("class Box<T,> {")

    def test_missing_constraint(self):
        with pytest.raises(MalformedTemplateParameter):
            rewrite_generics("class Box<T requires> {")

    def test_whole_text_fails(self):
        with pytest.raises(MalformedTemplateParameter):
            rewrite_generics("class Good<T> {};\nclass Bad<T U V> {};")

    def test_position_of_declaration(self):
        with pytest.raises(MalformedTemplateParameter) as exc_info:
            rewrite_generics("int x;\n  class Box<1bad> {};")
        pos = exc_info.value.position
        assert (pos.line, pos.column) == (2, 3)


class TestParseParameter:
    def test_full_parameter(self):
        p = parse_parameter("T requires Foo<T> = int")
        assert p == GenericParameter(
            raw="T requires Foo<T> = int",
            name="T",
            constraint="Foo<T>",
            default="int",
        )
        assert p.is_typename
        assert not p.is_class

    def test_kind_word(self):
        p = parse_parameter("size_t N = 8")
        assert (p.kind, p.name, p.default) == ("size_t", "N", "8")
        assert not p.is_typename
        assert p.render() == "size_t N = 8"

    def test_template_class_flags(self):
        p = parse_parameter("class C<typename, typename>")
        assert p.is_class and p.is_template_class
        assert p.render() == "template<typename, typename> class C"

    def test_negative_default(self):
        assert parse_parameter("int N = -1").render() == "int N = -1"

    def test_constraint_not_rendered_inline(self):
        assert parse_parameter("class T requires Foo").render() == "class T"

    def test_reserved_name_rejected(self):
        with pytest.raises(MalformedTemplateParameter):
            parse_parameter("typename class")


class TestTemplateHeader:
    def test_render(self):
        header = TemplateHeader(
            "class",
            "Box",
            (
                GenericParameter("T requires A", "T", constraint="A"),
                GenericParameter("U requires B", "U", constraint="B"),
            ),
        )
        assert header.constraints == ["A", "B"]
        assert header.render() == "template<typename T, typename U>\nrequires A && B\nclass Box {"


class TestSplitParameters:
    def test_top_level_commas_only(self):
        assert split_parameters("A, B<C, D>, E") == ["A", "B<C, D>", "E"]

    def test_single(self):
        assert split_parameters(" T ") == ["T"]

    def test_empty_items_kept(self):
        assert split_parameters("T,") == ["T", ""]
