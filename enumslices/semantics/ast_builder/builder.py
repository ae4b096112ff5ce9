"""Main ASTBuilder orchestrator for the Go front end.

This module contains the ASTBuilder class that turns the Lark parse tree of
one Go file into a `SourceFile`. The builder delegates to specialized
parsers:

- Type parsing: semantics.ast_builder.types
- Expression parsing: semantics.ast_builder.expressions
- Declaration parsing: semantics.ast_builder.declarations

Only the declarations the generator reads are built (package clause,
imports, type specs, const blocks). var and func declarations are dropped.
"""
from __future__ import annotations
from typing import List, Optional, Sequence

from lark import Tree, Token

from enumslices.semantics.ast import (
    SourceFile, ImportSpec, TypeSpec, ConstBlock, Expr, TypeExpr,
)
from enumslices.internals.report import span_of
from enumslices.semantics.ast_builder.utils.tree_navigation import first_name


class ASTBuilder:
    def __init__(self, comments: Optional[Sequence[Token]] = None, filename: str = "<input>"):
        """Initialize ASTBuilder with lazy-loaded parsers.

        Args:
            comments: COMMENT / BLOCK_COMMENT tokens collected by the lexer,
                used to attach trailing line comments to const specs.
            filename: Name recorded on the resulting SourceFile.
        """
        self.filename = filename
        self.comments = list(comments or [])
        self._type_parser = None
        self._expr_parser = None

    @property
    def type_parser(self):
        """Lazy-load TypeParser on first use."""
        if self._type_parser is None:
            from enumslices.semantics.ast_builder.types.parser import TypeParser
            self._type_parser = TypeParser(self)
        return self._type_parser

    @property
    def expr_parser(self):
        """Lazy-load ExpressionParser on first use."""
        if self._expr_parser is None:
            from enumslices.semantics.ast_builder.expressions.parser import ExpressionParser
            self._expr_parser = ExpressionParser(self)
        return self._expr_parser

    def build(self, tree: Tree) -> SourceFile:
        """Build SourceFile AST from parse tree."""
        from enumslices.semantics.ast_builder.declarations import imports, types, constants

        assert isinstance(tree, Tree) and tree.data == "start"
        package = ""
        imports_list: List[ImportSpec] = []
        types_list: List[TypeSpec] = []
        const_blocks: List[ConstBlock] = []

        for node in tree.children:
            if not isinstance(node, Tree):
                continue
            if node.data == "package_clause":
                package = str(first_name(node.children))
            elif node.data == "import_decl":
                imports_list.extend(imports.parse_import_decl(node, self))
            elif node.data == "type_decl":
                types_list.extend(types.parse_type_decl(node, self))
            elif node.data == "const_decl":
                const_blocks.append(constants.parse_const_decl(node, self))
            # var_decl / func_decl carry nothing the generator needs

        return SourceFile(
            package=package,
            imports=imports_list,
            types=types_list,
            const_blocks=const_blocks,
            filename=self.filename,
            loc=span_of(tree),
        )

    # --- delegation helpers ---

    def _parse_type(self, type_node: Tree | Token) -> TypeExpr:
        """Parse a type node. Delegates to TypeParser."""
        return self.type_parser.parse_type(type_node)

    def _expr(self, t: Tree | Token) -> Expr:
        """Parse an expression node. Delegates to ExpressionParser."""
        return self.expr_parser.parse_expr(t)

    def trailing_comment(self, line: int, after_col: int) -> Optional[str]:
        """Text of the comment starting on `line` after column `after_col`."""
        for tok in self.comments:
            if tok.line == line and tok.column >= after_col:
                text = str(tok)
                if text.startswith("//"):
                    return text[2:].strip()
                return text[2:-2].strip()
        return None
