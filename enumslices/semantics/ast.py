# semantics/ast.py
from __future__ import annotations
from dataclasses import dataclass, field
from fractions import Fraction
from typing import List, Optional, Literal

from enumslices.internals.report import Span

# === Core node base ===

@dataclass
class Node:
    loc: Optional[Span]

# === Expressions ===

@dataclass
class Expr(Node):
    pass

@dataclass
class IntLit(Expr):
    value: int
    radix: int = 10

@dataclass
class FloatLit(Expr):
    value: Fraction              # exact, Go untyped float constants are arbitrary precision

@dataclass
class ImagLit(Expr):
    text: str

@dataclass
class RuneLit(Expr):
    value: int                   # code point

@dataclass
class StringLit(Expr):
    value: str

@dataclass
class Name(Expr):
    id: str

@dataclass
class Selector(Expr):
    expr: Expr                   # usually a package Name
    name: str

@dataclass
class Call(Expr):
    func: Expr                   # conversion target or builtin
    args: List[Expr]

@dataclass
class Index(Expr):
    expr: Expr
    index: Expr

UnOp = Literal["+", "-", "!", "^", "*", "&", "<-"]

@dataclass
class UnaryOp(Expr):
    op: str
    expr: Expr

@dataclass
class BinaryOp(Expr):
    op: str
    left: Expr
    right: Expr

BINARY_OPS = frozenset({
    "||", "&&",
    "==", "!=", "<", "<=", ">", ">=",
    "+", "-", "|", "^",
    "*", "/", "%", "<<", ">>", "&", "&^",
})

# === Types ===

@dataclass
class TypeExpr(Node):
    pass

@dataclass
class TypeName(TypeExpr):
    name: str
    package: Optional[str] = None      # set for qualified names (pkg.T)
    has_type_args: bool = False

    def __str__(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name

@dataclass
class OpaqueType(TypeExpr):
    """Any composite type (pointer, slice, map, func, struct...)."""
    kind: str

    def __str__(self) -> str:
        return self.kind

# === Declarations ===

@dataclass
class ImportSpec(Node):
    path: str
    alias: Optional[str] = None

@dataclass
class TypeSpec(Node):
    name: str
    ty: TypeExpr
    is_alias: bool = False

@dataclass
class ConstSpec(Node):
    """One line of a const declaration: names, optional type, optional values."""
    names: List[str]
    name_spans: List[Optional[Span]]
    ty: Optional[TypeExpr]
    values: Optional[List[Expr]]
    comment: Optional[str] = None      # trailing line comment text, if any

@dataclass
class ConstBlock(Node):
    """One `const` declaration: the scope of one iota counter."""
    specs: List[ConstSpec]

@dataclass
class SourceFile(Node):
    package: str
    imports: List[ImportSpec] = field(default_factory=list)
    types: List[TypeSpec] = field(default_factory=list)
    const_blocks: List[ConstBlock] = field(default_factory=list)
    filename: str = "<input>"
