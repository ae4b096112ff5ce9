# semantics/passes/constants.py
"""Declaration collection: the constants of one target type.

Walks every constant of the package in declaration order, keeps the lines
whose static type is the target, evaluates them and produces the ordered
ConstantEntry list the backend tabulates.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from enumslices.internals.report import Reporter
from enumslices.internals import errors as er
from enumslices.semantics.passes.collect import ConstantTable, ConstSymbol, TypeTable
from enumslices.semantics.passes.const_eval import (
    ConstantEvaluator, ConstEvalError, ConstOverflowError, ConstCycleError,
)
from enumslices.semantics.typesys import TargetType


@dataclass(frozen=True)
class ConstantEntry:
    """One named constant of the target type."""
    identifier: str
    value: int
    decl_order: int
    name: str  # text placed in the name table


@dataclass(frozen=True)
class NamingOptions:
    trim_prefix: str = ""
    line_comment: bool = False


def table_name(sym: ConstSymbol, options: NamingOptions) -> str:
    """Table text for a constant: identifier minus prefix, or its line comment."""
    name = sym.name
    if options.trim_prefix and name.startswith(options.trim_prefix):
        name = name[len(options.trim_prefix):]
    if options.line_comment and sym.spec.comment is not None:
        name = sym.spec.comment
    return name


def collect_constants(target: TargetType, types: TypeTable, consts: ConstantTable,
                      reporter: Reporter, options: Optional[NamingOptions] = None) -> Optional[List[ConstantEntry]]:
    """Entries of `target` in declaration order, or None if any of its lines failed.

    Every failing line is reported before giving up so one run shows all of
    a type's problems. Lines of other types are never evaluated. A chain of
    references too deep to follow abandons the type at once.
    """
    options = options or NamingOptions()
    evaluator = ConstantEvaluator(types, consts)
    target_name = types.canonical(target.name)

    entries: List[ConstantEntry] = []
    failed = False

    for sym in consts.symbols:
        try:
            if evaluator.type_of_symbol(sym) != target_name:
                continue
        except RecursionError:
            _report_too_deep(reporter, sym, target)
            return None

        if sym.expr is None:
            if sym.value_count == 0:
                er.emit(reporter, er.ERR.CE0108, sym.span, filename=sym.filename,
                        ident=sym.name, type=target.name)
            else:
                er.emit(reporter, er.ERR.CE0109, sym.span, filename=sym.filename,
                        ident=sym.name, type=target.name,
                        names=len(sym.spec.names), values=sym.value_count)
            failed = True
            continue

        try:
            value = evaluator.evaluate_symbol(sym).value
        except ConstCycleError as e:
            er.emit(reporter, er.ERR.CE0107, sym.span, filename=sym.filename,
                    ident=sym.name, type=target.name, chain=" -> ".join(e.chain))
            failed = True
            continue
        except ConstOverflowError as e:
            er.emit(reporter, er.ERR.CE0105, sym.span, filename=sym.filename,
                    ident=sym.name, value=e.value, type=e.type_name, kind=e.kind)
            failed = True
            continue
        except ConstEvalError as e:
            er.emit(reporter, er.ERR.CE0104, e.span or sym.span, filename=sym.filename,
                    ident=sym.name, type=target.name, reason=e.reason)
            failed = True
            continue
        except RecursionError:
            _report_too_deep(reporter, sym, target)
            return None

        if sym.is_discard:
            continue

        entries.append(ConstantEntry(
            identifier=sym.name,
            value=value,
            decl_order=sym.decl_order,
            name=table_name(sym, options),
        ))

    if failed:
        return None
    return entries


def _report_too_deep(reporter: Reporter, sym: ConstSymbol, target: TargetType) -> None:
    er.emit(reporter, er.ERR.CE0104, sym.span, filename=sym.filename,
            ident=sym.name, type=target.name, reason="chain of constant references is too deep")
