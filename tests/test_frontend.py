"""
Tests for the Go front end: lexing, semicolon insertion and AST building.

These tests verify:
- Automatic semicolon insertion in const blocks
- Integer, float, rune and string literal decoding
- Trailing line comments attached to const specs
- var/func/struct declarations skipped without errors
"""

import pytest
from fractions import Fraction

from lark import UnexpectedInput

from enumslices.internals.parser import parse_to_ast
from enumslices.semantics.ast import (
    IntLit, FloatLit, RuneLit, StringLit, Name, Selector, Call, Index,
    UnaryOp, BinaryOp, TypeName, OpaqueType,
)
from enumslices.semantics.ast_builder import LegacyOctalError


def const_values(sf):
    """Flatten (name, first value expr) pairs of every const spec."""
    out = []
    for block in sf.const_blocks:
        for spec in block.specs:
            value = spec.values[0] if spec.values else None
            out.append((spec.names[0], value))
    return out


class TestSemicolons:
    """Tests for automatic semicolon insertion."""

    def test_grouped_const_block(self, parse_go):
        sf = parse_go("package p\nconst (\n\tA = iota\n\tB\n\tC\n)\n")
        assert sf.package == "p"
        assert len(sf.const_blocks) == 1
        assert [s.names for s in sf.const_blocks[0].specs] == [["A"], ["B"], ["C"]]

    def test_explicit_semicolons_on_one_line(self, parse_go):
        sf = parse_go("package p; const ( A = 1; B = 2 )")
        assert [s.names for s in sf.const_blocks[0].specs] == [["A"], ["B"]]

    def test_missing_final_newline(self, parse_go):
        sf = parse_go("package p\nconst A = 1")
        assert sf.const_blocks[0].specs[0].names == ["A"]

    def test_blank_lines_and_leading_comments(self, parse_go):
        sf = parse_go("// Package p.\n\n// more\npackage p\n\n\nconst A = 1\n\n")
        assert sf.package == "p"

    def test_single_line_block(self, parse_go):
        sf = parse_go("package p\nconst (A = 1)\n")
        assert sf.const_blocks[0].specs[0].names == ["A"]

    def test_each_const_keyword_is_a_block(self, parse_go):
        sf = parse_go("package p\nconst A = 1\nconst (\n\tB = 2\n)\nconst C = 3\n")
        assert len(sf.const_blocks) == 3


class TestLiterals:
    """Tests for literal decoding."""

    @pytest.mark.parametrize("text,value", [
        ("42", 42),
        ("1_000", 1000),
        ("0x1F", 31),
        ("0XfF", 255),
        ("0o17", 15),
        ("0755", 493),
        ("0b1010", 10),
        ("0", 0),
    ])
    def test_integers(self, parse_go, text, value):
        sf = parse_go(f"package p\nconst A = {text}\n")
        lit = const_values(sf)[0][1]
        assert isinstance(lit, IntLit)
        assert lit.value == value

    def test_legacy_octal_with_bad_digit(self):
        with pytest.raises(LegacyOctalError) as exc_info:
            parse_to_ast("package p\nconst A = 09\n")
        assert exc_info.value.literal == "09"

    @pytest.mark.parametrize("text,value", [
        ("1.5", Fraction(3, 2)),
        ("1e3", Fraction(1000)),
        (".25", Fraction(1, 4)),
        ("2.", Fraction(2)),
    ])
    def test_floats_are_exact(self, parse_go, text, value):
        lit = const_values(parse_go(f"package p\nconst A = {text}\n"))[0][1]
        assert isinstance(lit, FloatLit)
        assert lit.value == value

    @pytest.mark.parametrize("text,value", [
        ("'a'", 97),
        ("'\\n'", 10),
        ("'\\x41'", 65),
        ("'\\101'", 65),
        ("'\\u00e9'", 0xE9),
        ("'é'", 0xE9),
        ("'\\''", 39),
    ])
    def test_runes(self, parse_go, text, value):
        lit = const_values(parse_go(f"package p\nconst A = {text}\n"))[0][1]
        assert isinstance(lit, RuneLit)
        assert lit.value == value

    def test_interpreted_string(self, parse_go):
        lit = const_values(parse_go('package p\nconst A = "a\\tb\\"c\\u00e9"\n'))[0][1]
        assert isinstance(lit, StringLit)
        assert lit.value == 'a\tb"cé'

    def test_raw_string(self, parse_go):
        lit = const_values(parse_go("package p\nconst A = `a\\nb`\n"))[0][1]
        assert lit.value == "a\\nb"


class TestExpressions:
    """Tests for expression trees."""

    def test_precedence(self, parse_go):
        expr = const_values(parse_go("package p\nconst A = 1 + 2 * 3\n"))[0][1]
        assert isinstance(expr, BinaryOp) and expr.op == "+"
        assert isinstance(expr.right, BinaryOp) and expr.right.op == "*"

    def test_left_associative(self, parse_go):
        expr = const_values(parse_go("package p\nconst A = 8 - 4 - 2\n"))[0][1]
        assert expr.op == "-"
        assert isinstance(expr.left, BinaryOp) and expr.left.op == "-"
        assert expr.right.value == 2

    def test_unary_and_iota(self, parse_go):
        expr = const_values(parse_go("package p\nconst A = -2 + iota\n"))[0][1]
        assert isinstance(expr.left, UnaryOp) and expr.left.op == "-"
        assert isinstance(expr.right, Name) and expr.right.id == "iota"

    def test_shift_and_bit_clear(self, parse_go):
        expr = const_values(parse_go("package p\nconst A = 1 << iota &^ 2\n"))[0][1]
        assert expr.op == "&^"
        assert expr.left.op == "<<"

    def test_conversion_call(self, parse_go):
        expr = const_values(parse_go("package p\nconst A = Day(3)\n"))[0][1]
        assert isinstance(expr, Call)
        assert expr.func.id == "Day"
        assert [a.value for a in expr.args] == [3]

    def test_selector_and_index(self, parse_go):
        sf = parse_go("package p\nconst (\n\tA = time.Second\n\tB = \"abc\"[1]\n)\n")
        (_, a), (_, b) = const_values(sf)
        assert isinstance(a, Selector) and a.name == "Second" and a.expr.id == "time"
        assert isinstance(b, Index)

    def test_parenthesised(self, parse_go):
        expr = const_values(parse_go("package p\nconst A = (1 + 2) * 3\n"))[0][1]
        assert expr.op == "*"
        assert expr.left.op == "+"


class TestDeclarations:
    """Tests for the declarations the generator reads and the ones it skips."""

    def test_multi_name_spec(self, parse_go):
        spec = parse_go("package p\nconst A, B Day = 1, 2\n").const_blocks[0].specs[0]
        assert spec.names == ["A", "B"]
        assert isinstance(spec.ty, TypeName) and spec.ty.name == "Day"
        assert [v.value for v in spec.values] == [1, 2]

    def test_type_only_spec(self, parse_go):
        spec = parse_go("package p\nconst (\n\tA Day = 1\n\tB Day\n)\n").const_blocks[0].specs[1]
        assert spec.values is None
        assert spec.ty.name == "Day"

    def test_types(self, parse_go):
        sf = parse_go(
            "package p\n"
            "type (\n"
            "\tDay int\n"
            "\tAlias = Day\n"
            "\tDur time.Duration\n"
            "\tPtr *int\n"
            "\tList[T any] []T\n"
            "\tBox[T any] struct{ v T }\n"
            "\tGen Wrapper[int]\n"
            ")\n"
        )
        by_name = {t.name: t for t in sf.types}
        assert by_name["Day"].ty.name == "int" and not by_name["Day"].is_alias
        assert by_name["Alias"].is_alias and by_name["Alias"].ty.name == "Day"
        assert by_name["Dur"].ty.package == "time"
        assert isinstance(by_name["Ptr"].ty, OpaqueType) and by_name["Ptr"].ty.kind == "pointer"
        assert isinstance(by_name["List"].ty, OpaqueType)
        assert isinstance(by_name["Box"].ty, OpaqueType)
        assert by_name["Gen"].ty.has_type_args

    def test_imports(self, parse_go):
        sf = parse_go('package p\nimport "fmt"\nimport (\n\tf "strings"\n\t. "math"\n)\n')
        assert [(i.path, i.alias) for i in sf.imports] == [("fmt", None), ("strings", "f"), ("math", ".")]

    def test_skips_var_and_func(self, parse_go):
        sf = parse_go(
            "package p\n"
            "\n"
            "var x = map[string]int{\"a\": 1}\n"
            "\n"
            "var (\n"
            "\ty int\n"
            "\tz = []int{1, 2, 3}\n"
            ")\n"
            "\n"
            "func (d Day) String() string {\n"
            "\tswitch d {\n"
            "\tcase A:\n"
            "\t\treturn \"A\"\n"
            "\t}\n"
            "\tfor i := 0; i < 3; i++ {\n"
            "\t\tx[\"k\"] += i\n"
            "\t}\n"
            "\treturn fmt.Sprintf(\"%d\", int(d))\n"
            "}\n"
            "\n"
            "const A Day = 1\n"
        )
        assert sf.types == []
        assert const_values(sf)[0][0] == "A"

    def test_syntax_error(self):
        with pytest.raises(UnexpectedInput):
            parse_to_ast("package p\nconst (\n\tA = \n")


class TestComments:
    """Tests for trailing comments attached to const specs."""

    def test_line_comment(self, parse_go):
        specs = parse_go("package p\nconst (\n\tA = iota // first\n\tB\n)\n").const_blocks[0].specs
        assert specs[0].comment == "first"
        assert specs[1].comment is None

    def test_block_comment(self, parse_go):
        spec = parse_go("package p\nconst A = 1 /* one */\n").const_blocks[0].specs[0]
        assert spec.comment == "one"

    def test_comment_on_previous_line_not_attached(self, parse_go):
        specs = parse_go("package p\nconst (\n\t// doc\n\tA = 1\n)\n").const_blocks[0].specs
        assert specs[0].comment is None

    def test_comment_on_inherited_line(self, parse_go):
        specs = parse_go("package p\nconst (\n\tA = iota\n\tB // bee\n)\n").const_blocks[0].specs
        assert specs[1].comment == "bee"
