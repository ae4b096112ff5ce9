"""Main expression parser coordinating specialized expression parsers."""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree, Token
from enumslices.semantics.ast import Expr
from enumslices.semantics.ast_builder.expressions import literals, operators, calls
from enumslices.internals import errors as er

if TYPE_CHECKING:
    from enumslices.semantics.ast_builder.builder import ASTBuilder


class ExpressionParser:
    """Coordinates expression parsing across specialized parsers."""

    def __init__(self, ast_builder: 'ASTBuilder'):
        """Initialize ExpressionParser with reference to ASTBuilder for recursive parsing."""
        self.ast_builder = ast_builder

    def parse_expr(self, t: Tree | Token) -> Expr:
        """Parse an expression node into an Expr object.

        Main dispatcher for all expression types.
        """
        # Tokens: delegate to literals parser
        if isinstance(t, Token):
            return literals.expr_from_token(t, self.ast_builder)

        tag = t.data

        # Binary operator chains
        if tag in {"or_expr", "and_expr", "rel_expr", "add_expr", "mul_expr"}:
            return operators.bin_chain(t, self.ast_builder)

        if tag == "unary_expr":
            return operators.expr_unary(t, self.ast_builder)

        if tag == "selector":
            return calls.expr_selector(t, self.ast_builder)

        if tag == "call":
            return calls.expr_call(t, self.ast_builder)

        if tag == "index":
            return calls.expr_index(t, self.ast_builder)

        er.raise_internal_error("IE0002", node=tag)
