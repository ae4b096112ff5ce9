"""Const declaration parsing.

Each `const` keyword opens one ConstBlock. The block keeps its specs in
source order; template inheritance and iota are resolved later by the
constant collector, not here.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional
from lark import Tree
from enumslices.semantics.ast import ConstBlock, ConstSpec, Expr, TypeExpr
from enumslices.semantics.ast_builder.utils.tree_navigation import first_tree, names, trees
from enumslices.internals.report import span_of

if TYPE_CHECKING:
    from enumslices.semantics.ast_builder.builder import ASTBuilder


def parse_const_decl(t: Tree, ast_builder: 'ASTBuilder') -> ConstBlock:
    specs = [parse_const_spec(s, ast_builder) for s in trees(t.children, "const_spec")]
    return ConstBlock(specs=specs, loc=span_of(t))


def parse_const_spec(t: Tree, ast_builder: 'ASTBuilder') -> ConstSpec:
    ident_list = first_tree(t.children, "ident_list")
    idents = names(ident_list.children)

    ty: Optional[TypeExpr] = None
    const_type = first_tree(t.children, "const_type")
    if const_type is not None:
        ty = ast_builder._parse_type(const_type.children[0])

    values: Optional[List[Expr]] = None
    const_value = first_tree(t.children, "const_value")
    if const_value is not None:
        expr_list = first_tree(const_value.children, "expr_list")
        values = [ast_builder._expr(c) for c in expr_list.children]

    loc = span_of(t)
    comment = None
    if loc is not None:
        comment = ast_builder.trailing_comment(loc.end_line, loc.end_col)

    return ConstSpec(
        names=[str(n) for n in idents],
        name_spans=[span_of(n) for n in idents],
        ty=ty,
        values=values,
        comment=comment,
        loc=loc,
    )
