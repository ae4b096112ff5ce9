"""Operator expression parsing (unary and binary)."""
from __future__ import annotations
from typing import TYPE_CHECKING, cast
from lark import Tree, Token
from enumslices.semantics.ast import Expr, UnaryOp, BinaryOp, UnOp, BINARY_OPS
from enumslices.internals.report import span_of
from enumslices.internals import errors as er

if TYPE_CHECKING:
    from enumslices.semantics.ast_builder.builder import ASTBuilder


def expr_unary(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    """Handle prefix operators: + - ! ^ and the non-constant * & <-."""
    tok, sub = t.children
    op = cast(UnOp, str(tok))
    rhs = ast_builder._expr(sub)
    return UnaryOp(op=op, expr=rhs, loc=span_of(t))


def bin_chain(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    """Lower binary operator chains left-associatively."""
    items: list[Expr | str] = []
    for c in t.children:
        if isinstance(c, Token) and str(c) in BINARY_OPS:
            items.append(str(c))
        else:
            items.append(ast_builder._expr(c))

    if not items:
        er.raise_internal_error("IE0002", node=f"empty {t.data}")

    lhs = items[0]
    i = 1
    while i + 1 < len(items):
        op = items[i]
        rhs = items[i + 1]
        lhs = BinaryOp(op=op, left=lhs, right=rhs, loc=span_of(t))
        i += 2

    return lhs  # type: ignore[return-value]
