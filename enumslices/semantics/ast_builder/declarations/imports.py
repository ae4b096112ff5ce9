"""Import declaration parsing."""
from __future__ import annotations
from typing import TYPE_CHECKING, List
from lark import Tree, Token
from enumslices.semantics.ast import ImportSpec
from enumslices.semantics.ast_builder.utils.tree_navigation import first_name, first_tree, trees
from enumslices.internals.report import span_of

if TYPE_CHECKING:
    from enumslices.semantics.ast_builder.builder import ASTBuilder


def parse_import_decl(t: Tree, ast_builder: 'ASTBuilder') -> List[ImportSpec]:
    """Parse `import "p"` or a grouped import declaration."""
    specs: List[ImportSpec] = []
    for spec in trees(t.children, "import_spec"):
        path_tok = next(c for c in spec.children if isinstance(c, Token) and c.type in ("STRING", "RAW_STRING"))
        alias_node = first_tree(spec.children, "import_alias")
        alias = None
        if alias_node is not None:
            name = first_name(alias_node.children)
            alias = str(name) if name is not None else "."
        specs.append(ImportSpec(path=str(path_tok)[1:-1], alias=alias, loc=span_of(spec)))
    return specs
