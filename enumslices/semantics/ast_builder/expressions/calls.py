"""Postfix expression parsing: selectors, calls/conversions and index."""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree
from enumslices.semantics.ast import Expr, Selector, Call, Index
from enumslices.semantics.ast_builder.utils.tree_navigation import first_tree
from enumslices.internals.report import span_of

if TYPE_CHECKING:
    from enumslices.semantics.ast_builder.builder import ASTBuilder


def expr_selector(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    base, name = t.children
    return Selector(expr=ast_builder._expr(base), name=str(name), loc=span_of(t))


def expr_call(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    func = ast_builder._expr(t.children[0])
    args_node = first_tree(t.children[1:], "call_args")
    args = [ast_builder._expr(a) for a in args_node.children] if args_node is not None else []
    return Call(func=func, args=args, loc=span_of(t))


def expr_index(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    base, index = t.children
    return Index(expr=ast_builder._expr(base), index=ast_builder._expr(index), loc=span_of(t))
