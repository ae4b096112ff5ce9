"""
AST Builder module for the enumslices Go front end.

Exports:
    ASTBuilder: Main class for building typed AST from Lark parse trees
    Exceptions: Custom exceptions for AST building errors
"""
# Main ASTBuilder class
from enumslices.semantics.ast_builder.builder import ASTBuilder

# Exception classes
from enumslices.semantics.ast_builder.exceptions import LegacyOctalError

__all__ = [
    'ASTBuilder',
    'LegacyOctalError',
]
