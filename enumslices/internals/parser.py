"""Lark parser setup and AST construction."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from lark import Lark, Token, UnexpectedInput

from enumslices.internals.semicolons import SemicolonInserter
from enumslices.semantics.ast import SourceFile
from enumslices.semantics.ast_builder import ASTBuilder

GRAMMAR_PATH = Path(__file__).parent.parent / "grammar.lark"


@lru_cache(maxsize=1)
def _grammar_text() -> str:
    return GRAMMAR_PATH.read_text(encoding="utf-8")


def improve_parse_error(e: UnexpectedInput) -> str:
    """Shorten lark's error text to its first line plus a hint for common cases."""
    error_text = str(e).strip()
    first_line = error_text.split('\n', 1)[0]

    token = getattr(e, "token", None)
    if token is not None and getattr(token, "type", None) == "$END":
        return f"{first_line} (unexpected end of file; unbalanced brackets?)"
    if token is not None:
        return f"{first_line} (unexpected '{token}')"
    return first_line


def parse_to_ast(src: str, filename: str = "<input>", dump_parse: bool = False) -> tuple[SourceFile, object]:
    """Parse Go source code into a SourceFile AST.

    A fresh parser is built per call: the comment list filled by the lexer
    callback belongs to one file only.

    Returns:
        Tuple of (ast, parse_tree).
    """
    comments: List[Token] = []
    kwargs = dict(
        parser="lalr",
        propagate_positions=True,
        maybe_placeholders=False,
        postlex=SemicolonInserter(),
        lexer="basic",
        lexer_callbacks={"COMMENT": comments.append, "BLOCK_COMMENT": comments.append},
    )
    parser = Lark(_grammar_text(), **kwargs)
    tree = parser.parse(src)
    if dump_parse:
        print(tree.pretty())

    ast_builder = ASTBuilder(comments=comments, filename=filename)
    return ast_builder.build(tree), tree
