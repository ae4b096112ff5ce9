# semantics/passes/collect.py
"""Package-wide symbol collection.

Two tables are built from the parsed files of one package:

- TypeTable: every `type` declaration, with alias canonicalisation and
  underlying integer kind resolution.
- ConstantTable: every constant spec line, flattened per identifier, with
  the block's iota value and the type/expression template in effect for
  the line already applied.

Both are rebuilt for each invocation; nothing here is cached globally.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from enumslices.internals.report import Reporter, Span
from enumslices.internals import errors as er
from enumslices.semantics.ast import SourceFile, TypeSpec, TypeName, TypeExpr, ConstSpec, Expr
from enumslices.semantics.typesys import IntKind, TargetType, builtin_int_kinds, is_builtin_type

DISCARD = "_"


@dataclass
class TypeEntry:
    spec: TypeSpec
    filename: str


class TypeTable:
    """Named types declared in the package."""

    def __init__(self, files: Sequence[SourceFile], word_size: int = 64) -> None:
        self.word_size = word_size
        self.builtins = builtin_int_kinds(word_size)
        self.by_name: Dict[str, TypeEntry] = {}
        for f in files:
            for spec in f.types:
                self.by_name.setdefault(spec.name, TypeEntry(spec, f.filename))

    def is_type_name(self, name: str) -> bool:
        return name in self.by_name or is_builtin_type(name, self.word_size)

    def canonical(self, name: str) -> str:
        """Follow `type A = B` aliases to the name they denote."""
        seen = set()
        while name in self.by_name and self.by_name[name].spec.is_alias and name not in seen:
            seen.add(name)
            ty = self.by_name[name].spec.ty
            if not isinstance(ty, TypeName) or ty.package is not None:
                break
            name = ty.name
        return name

    def kind_of(self, name: str) -> Optional[IntKind]:
        """Underlying integer kind of `name`, or None (no diagnostics)."""
        try:
            return self._underlying(name, [])
        except _RecursiveType:
            return None

    def resolve_target(self, name: str, package: str, reporter: Reporter) -> Optional[TargetType]:
        """Resolve a requested type name, emitting CE0101/CE0102/CE0106 on failure."""
        entry = self.by_name.get(name)
        if entry is None:
            er.emit(reporter, er.ERR.CE0101, None, name=name, package=package)
            return None

        try:
            kind = self._underlying(name, [])
        except _RecursiveType as exc:
            er.emit(reporter, er.ERR.CE0106, entry.spec.loc, filename=entry.filename,
                    name=name, chain=" -> ".join(exc.chain))
            return None

        if kind is None:
            er.emit(reporter, er.ERR.CE0102, entry.spec.loc, filename=entry.filename,
                    name=name, underlying=str(entry.spec.ty))
            return None
        return TargetType(name=name, kind=kind)

    def _underlying(self, name: str, chain: List[str]) -> Optional[IntKind]:
        if name in chain:
            raise _RecursiveType(chain + [name])
        entry = self.by_name.get(name)
        if entry is None:
            return self.builtins.get(name)
        ty = entry.spec.ty
        if not isinstance(ty, TypeName) or ty.package is not None or ty.has_type_args:
            return None
        return self._underlying(ty.name, chain + [name])


class _RecursiveType(Exception):
    def __init__(self, chain: List[str]):
        super().__init__(" -> ".join(chain))
        self.chain = chain


@dataclass(frozen=True)
class ConstSymbol:
    """One identifier of one const spec line, with its template resolved."""
    name: str
    iota: int
    ty: Optional[TypeExpr]           # explicit or inherited type
    expr: Optional[Expr]             # own or inherited expression; None when missing
    value_count: int                 # length of the expression list in effect
    position: int                    # index of the identifier within its spec
    inherited: bool                  # the line omitted both type and values
    spec: ConstSpec
    filename: str
    decl_order: int

    @property
    def span(self) -> Optional[Span]:
        if self.position < len(self.spec.name_spans):
            return self.spec.name_spans[self.position]
        return self.spec.loc

    @property
    def is_discard(self) -> bool:
        return self.name == DISCARD


@dataclass
class ConstantTable:
    """Every constant of the package, in declaration order."""
    symbols: List[ConstSymbol] = field(default_factory=list)
    by_name: Dict[str, ConstSymbol] = field(default_factory=dict)

    @classmethod
    def build(cls, files: Sequence[SourceFile]) -> "ConstantTable":
        table = cls()
        order = 0
        for f in files:
            for block in f.const_blocks:
                # Template state threaded forward through one block only
                last_ty: Optional[TypeExpr] = None
                last_values: Optional[List[Expr]] = None
                for iota, spec in enumerate(block.specs):
                    if spec.values is not None:
                        ty, values, inherited = spec.ty, spec.values, False
                        last_ty, last_values = spec.ty, spec.values
                    elif spec.ty is None:
                        ty, values, inherited = last_ty, last_values, True
                    else:
                        ty, values, inherited = spec.ty, None, False

                    for position, name in enumerate(spec.names):
                        expr = None
                        if values is not None and position < len(values):
                            expr = values[position]
                        sym = ConstSymbol(
                            name=name,
                            iota=iota,
                            ty=ty,
                            expr=expr,
                            value_count=len(values) if values is not None else 0,
                            position=position,
                            inherited=inherited,
                            spec=spec,
                            filename=f.filename,
                            decl_order=order,
                        )
                        order += 1
                        table.symbols.append(sym)
                        if not sym.is_discard:
                            table.by_name.setdefault(name, sym)
        return table
