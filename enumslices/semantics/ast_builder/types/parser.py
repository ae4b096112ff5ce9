"""Type expression parsing.

Only named types matter to the generator; every composite type collapses to
an OpaqueType tagged with its kind.
"""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree, Token
from enumslices.semantics.ast import TypeExpr, TypeName, OpaqueType
from enumslices.semantics.ast_builder.utils.tree_navigation import names, first_tree
from enumslices.internals.report import span_of
from enumslices.internals import errors as er

if TYPE_CHECKING:
    from enumslices.semantics.ast_builder.builder import ASTBuilder


_OPAQUE_KINDS = {
    "pointer_type": "pointer",
    "array_type": "array",
    "map_type": "map",
    "chan_type": "chan",
    "func_type": "func",
    "struct_type": "struct",
    "interface_type": "interface",
}


class TypeParser:
    def __init__(self, ast_builder: 'ASTBuilder'):
        self.ast_builder = ast_builder

    def parse_type(self, t: Tree | Token) -> TypeExpr:
        if isinstance(t, Tree) and t.data == "type_name":
            parts = names(t.children)
            has_args = first_tree(t.children, "type_args") is not None
            if len(parts) == 2:
                return TypeName(name=str(parts[1]), package=str(parts[0]),
                                has_type_args=has_args, loc=span_of(t))
            return TypeName(name=str(parts[0]), has_type_args=has_args, loc=span_of(t))

        if isinstance(t, Tree) and t.data in _OPAQUE_KINDS:
            return OpaqueType(kind=_OPAQUE_KINDS[t.data], loc=span_of(t))

        er.raise_internal_error("IE0002", node=getattr(t, "data", getattr(t, "type", t)))
