"""Type declaration parsing."""
from __future__ import annotations
from typing import TYPE_CHECKING, List
from lark import Tree
from enumslices.semantics.ast import TypeSpec
from enumslices.semantics.ast_builder.utils.tree_navigation import first_name
from enumslices.internals.report import span_of

if TYPE_CHECKING:
    from enumslices.semantics.ast_builder.builder import ASTBuilder


def parse_type_decl(t: Tree, ast_builder: 'ASTBuilder') -> List[TypeSpec]:
    """Parse `type T U`, `type T = U` or a grouped type declaration."""
    specs: List[TypeSpec] = []
    for spec in t.children:
        if not isinstance(spec, Tree) or spec.data not in ("type_def", "type_alias"):
            continue
        name = first_name(spec.children)
        ty = ast_builder._parse_type(spec.children[-1])
        specs.append(TypeSpec(
            name=str(name),
            ty=ty,
            is_alias=spec.data == "type_alias",
            loc=span_of(spec),
        ))
    return specs
