# semantics/passes/const_eval.py
"""Compile-time constant expression evaluator for Go const declarations.

Constants are folded to Python values (int, Fraction, bool, str) together
with the static type Go gives them. Untyped constants carry no type name;
arithmetic is exact (Go's untyped constants are arbitrary precision).
Representability is checked when a value is converted to an integer type,
and after every operation whose result has a signed integer type.

Design:
- Stateless apart from the evaluation stacks and per-run memos
- Raises ConstEvalError (and subclasses) for non-evaluable expressions; the
  caller turns them into diagnostics with the offending constant's context
- Tracks constant dependencies for cycle detection

Allowed Operations:
- Literals: integer, float, rune, string
- iota, true, false
- References to other package constants (with cycle detection)
- Conversions T(x) to integer, float, string and bool types
- Builtins: len (strings), min, max
- Arithmetic: + - * / %  (integer division truncates toward zero)
- Bitwise: & | ^ &^ << >> and unary ^
- Logical / comparison: && || ! == != < <= > >=

Forbidden Operations:
- References to other packages (pkg.Name)
- Function calls other than conversions and the builtins above
- Index expressions, pointer/channel operators, complex numbers
"""
from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, List, Optional, Union

from enumslices.internals.report import Span
from enumslices.semantics.ast import (
    Expr, IntLit, FloatLit, ImagLit, RuneLit, StringLit, Name, Selector,
    Call, Index, UnaryOp, BinaryOp, TypeName, OpaqueType,
)
from enumslices.semantics.typesys import IntKind, FLOAT_TYPES
from enumslices.semantics.passes.collect import ConstantTable, ConstSymbol, TypeTable

Value = Union[int, Fraction, bool, str]

_COMPARISONS = ("==", "!=", "<", "<=", ">", ">=")

# Largest shift count Go accepts in a constant expression
MAX_SHIFT_COUNT = 1074


@dataclass(frozen=True)
class ConstantValue:
    """Compile-time constant value with its Go type (None when untyped)."""
    value: Value
    type_name: Optional[str] = None


class ConstEvalError(Exception):
    """A value expression cannot be statically evaluated."""
    def __init__(self, reason: str, span: Optional[Span] = None):
        super().__init__(reason)
        self.reason = reason
        self.span = span


class ConstOverflowError(ConstEvalError):
    """A value does not fit the signed integer type it has or is converted to."""
    def __init__(self, value: int, type_name: str, kind: IntKind, span: Optional[Span] = None):
        super().__init__(f"{value} overflows {type_name}", span)
        self.value = value
        self.type_name = type_name
        self.kind = kind


class ConstCycleError(ConstEvalError):
    """Constant initialisers refer to each other in a loop."""
    def __init__(self, chain: List[str], span: Optional[Span] = None):
        super().__init__("initialization cycle: " + " -> ".join(chain), span)
        self.chain = chain


class ConstantEvaluator:
    """Evaluates Go constant expressions of one package.

    One evaluator is created per generated type; its memo never outlives
    that run.
    """

    def __init__(self, types: TypeTable, consts: ConstantTable):
        self.types = types
        self.consts = consts
        self.evaluation_stack: List[ConstSymbol] = []  # For cycle detection
        self._typing_stack: List[ConstSymbol] = []
        self._memo: Dict[int, ConstantValue] = {}
        self._type_memo: Dict[int, Optional[str]] = {}

    # ------------------------------------------------------------------
    # Static types
    # ------------------------------------------------------------------

    def type_of_symbol(self, sym: ConstSymbol) -> Optional[str]:
        """Static type of a constant: its (inherited) explicit type, else its expression's."""
        if sym.ty is not None:
            return self._type_expr_name(sym.ty)
        key = id(sym)
        if key in self._type_memo:
            return self._type_memo[key]
        if sym.expr is None or any(s is sym for s in self._typing_stack):
            return None
        self._typing_stack.append(sym)
        try:
            type_name = self.infer_type(sym.expr)
        finally:
            self._typing_stack.pop()
        # Inner results may be cut short by a cycle; only outermost ones are final
        if not self._typing_stack:
            self._type_memo[key] = type_name
        return type_name

    def infer_type(self, expr: Expr) -> Optional[str]:
        """Static type of an expression without evaluating it; None means untyped or unknown."""
        if isinstance(expr, Name):
            sym = self.consts.by_name.get(expr.id)
            return self.type_of_symbol(sym) if sym is not None else None

        if isinstance(expr, Call):
            callee = expr.func
            if isinstance(callee, Name):
                if self.types.is_type_name(callee.id):
                    return self.types.canonical(callee.id)
                if callee.id == "len":
                    return "int"
                if callee.id in ("min", "max"):
                    return self._unify_static([self.infer_type(a) for a in expr.args])
            if isinstance(callee, Selector) and isinstance(callee.expr, Name):
                return f"{callee.expr.id}.{callee.name}"
            return None

        if isinstance(expr, UnaryOp):
            return self.infer_type(expr.expr)

        if isinstance(expr, BinaryOp):
            if expr.op in _COMPARISONS:
                return None
            if expr.op in ("<<", ">>"):
                return self.infer_type(expr.left)
            return self._unify_static([self.infer_type(expr.left), self.infer_type(expr.right)])

        return None

    def _unify_static(self, names: List[Optional[str]]) -> Optional[str]:
        return next((n for n in names if n is not None), None)

    def _type_expr_name(self, ty) -> str:
        if isinstance(ty, TypeName):
            if ty.package is not None:
                return f"{ty.package}.{ty.name}"
            return self.types.canonical(ty.name)
        if isinstance(ty, OpaqueType):
            return ty.kind
        return str(ty)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate_symbol(self, sym: ConstSymbol) -> ConstantValue:
        """Evaluate a constant at its own iota and convert it to its static type."""
        key = id(sym)
        if key in self._memo:
            return self._memo[key]

        if any(s is sym for s in self.evaluation_stack):
            chain = [s.name for s in self.evaluation_stack] + [sym.name]
            raise ConstCycleError(chain, sym.span)

        if sym.expr is None:
            raise ConstEvalError(f"constant {sym.name} has no value", sym.span)

        self.evaluation_stack.append(sym)
        try:
            result = self.evaluate(sym.expr, sym.iota)
            type_name = self.type_of_symbol(sym)
            if type_name is not None:
                result = self.convert(result, type_name, sym.expr.loc)
        finally:
            self.evaluation_stack.pop()

        self._memo[key] = result
        return result

    def evaluate(self, expr: Expr, iota: int) -> ConstantValue:
        """Evaluate an expression to a compile-time constant.

        Raises:
            ConstEvalError: the expression is not a constant expression.
        """
        # Literals
        if isinstance(expr, IntLit):
            return ConstantValue(expr.value)
        elif isinstance(expr, RuneLit):
            return ConstantValue(expr.value)
        elif isinstance(expr, FloatLit):
            return ConstantValue(expr.value)
        elif isinstance(expr, StringLit):
            return ConstantValue(expr.value)
        elif isinstance(expr, ImagLit):
            raise ConstEvalError(f"complex constant {expr.text} is not supported", expr.loc)

        # Names: iota, predeclared booleans, other constants
        elif isinstance(expr, Name):
            return self._evaluate_name(expr, iota)

        elif isinstance(expr, Selector):
            raise ConstEvalError(f"reference to external symbol {_describe(expr)}", expr.loc)

        elif isinstance(expr, Call):
            return self._evaluate_call(expr, iota)

        elif isinstance(expr, UnaryOp):
            return self._representable(self._evaluate_unary_op(expr, iota), expr.loc)

        elif isinstance(expr, BinaryOp):
            return self._representable(self._evaluate_binary_op(expr, iota), expr.loc)

        elif isinstance(expr, Index):
            raise ConstEvalError(f"{_describe(expr)} is not constant", expr.loc)

        raise ConstEvalError(f"unsupported expression {type(expr).__name__}", expr.loc)

    def _evaluate_name(self, expr: Name, iota: int) -> ConstantValue:
        if expr.id == "iota":
            return ConstantValue(iota)
        if expr.id in ("true", "false"):
            return ConstantValue(expr.id == "true")

        sym = self.consts.by_name.get(expr.id)
        if sym is None:
            raise ConstEvalError(f"undefined: {expr.id}", expr.loc)
        return self.evaluate_symbol(sym)

    def _evaluate_call(self, expr: Call, iota: int) -> ConstantValue:
        callee = expr.func
        if isinstance(callee, Selector):
            raise ConstEvalError(f"call to external function {_describe(callee)}", expr.loc)
        if not isinstance(callee, Name):
            raise ConstEvalError(f"{_describe(expr)} is not constant", expr.loc)

        name = callee.id
        if self.types.is_type_name(name):
            if len(expr.args) != 1:
                raise ConstEvalError(f"conversion to {name} needs exactly one argument", expr.loc)
            value = self.evaluate(expr.args[0], iota)
            return self.convert(value, self.types.canonical(name), expr.loc)

        if name == "len":
            if len(expr.args) != 1:
                raise ConstEvalError("len needs exactly one argument", expr.loc)
            arg = self.evaluate(expr.args[0], iota)
            if not isinstance(arg.value, str):
                raise ConstEvalError("len of a non-string is not constant", expr.loc)
            return ConstantValue(len(arg.value.encode("utf-8", "surrogateescape")), "int")

        if name in ("min", "max"):
            if not expr.args:
                raise ConstEvalError(f"{name} needs at least one argument", expr.loc)
            values = [self.evaluate(a, iota) for a in expr.args]
            type_name = self._unify(values, expr.loc)
            if not (all(_is_numeric(v.value) for v in values)
                    or all(isinstance(v.value, str) for v in values)):
                raise ConstEvalError(f"invalid arguments to {name}: mixed or non-ordered operands", expr.loc)
            pick = min if name == "min" else max
            return ConstantValue(pick(v.value for v in values), type_name)

        raise ConstEvalError(f"function call {name}(...) is not constant", expr.loc)

    def _evaluate_unary_op(self, expr: UnaryOp, iota: int) -> ConstantValue:
        operand = self.evaluate(expr.expr, iota)
        value = operand.value

        if expr.op == "+" and _is_numeric(value):
            return operand
        if expr.op == "-" and _is_numeric(value):
            return ConstantValue(-value, operand.type_name)
        if expr.op == "!" and isinstance(value, bool):
            return ConstantValue(not value, operand.type_name)
        if expr.op == "^" and _is_integer(value):
            kind = self.types.kind_of(operand.type_name) if operand.type_name else None
            if kind is not None and not kind.signed:
                # Unsigned complement flips exactly bit_width bits
                return ConstantValue(value ^ kind.max_value, operand.type_name)
            return ConstantValue(~value, operand.type_name)

        raise ConstEvalError(f"invalid operation: operator {expr.op} on {_describe(expr.expr)}", expr.loc)

    def _evaluate_binary_op(self, expr: BinaryOp, iota: int) -> ConstantValue:
        op = expr.op
        left = self.evaluate(expr.left, iota)
        right = self.evaluate(expr.right, iota)
        a, b = left.value, right.value

        # Logical operations (booleans only)
        if op in ("&&", "||"):
            if not (isinstance(a, bool) and isinstance(b, bool)):
                raise ConstEvalError(f"operator {op} not defined on non-boolean operands", expr.loc)
            return ConstantValue(a and b if op == "&&" else a or b)

        # Comparisons produce untyped booleans
        if op in _COMPARISONS:
            self._unify([left, right], expr.loc)
            if isinstance(a, bool) != isinstance(b, bool) or isinstance(a, str) != isinstance(b, str):
                raise ConstEvalError(f"mismatched operands for {op}", expr.loc)
            return ConstantValue(_compare(op, a, b))

        # Shifts: result has the left operand's type
        if op in ("<<", ">>"):
            count = _as_integer(b)
            if count is None or not _is_numeric(a):
                raise ConstEvalError(f"invalid shift {_describe(expr)}", expr.loc)
            if count < 0:
                raise ConstEvalError(f"negative shift count {count}", expr.loc)
            if count > MAX_SHIFT_COUNT:
                raise ConstEvalError(f"shift count {count} too large", expr.loc)
            base = _as_integer(a)
            if base is None:
                raise ConstEvalError(f"shifted operand {a} must be an integer", expr.loc)
            return ConstantValue(base << count if op == "<<" else base >> count, left.type_name)

        type_name = self._unify([left, right], expr.loc)

        if op == "+" and isinstance(a, str) and isinstance(b, str):
            return ConstantValue(a + b, type_name)
        if not (_is_numeric(a) and _is_numeric(b)):
            raise ConstEvalError(f"operator {op} not defined on {_describe(expr)}", expr.loc)

        if op == "+":
            return self._numeric(a + b, type_name)
        if op == "-":
            return self._numeric(a - b, type_name)
        if op == "*":
            return self._numeric(a * b, type_name)
        if op == "/":
            if b == 0:
                raise ConstEvalError("division by zero", expr.loc)
            if _is_integer(a) and _is_integer(b) and not self._is_float_type(type_name):
                return ConstantValue(_trunc_div(a, b), type_name)
            return self._numeric(Fraction(a) / Fraction(b), type_name)

        # Remaining operators are integer-only
        ia, ib = _as_integer(a), _as_integer(b)
        if ia is None or ib is None:
            raise ConstEvalError(f"operator {op} not defined on non-integer operands", expr.loc)
        if op == "%":
            if ib == 0:
                raise ConstEvalError("division by zero", expr.loc)
            return ConstantValue(ia - ib * _trunc_div(ia, ib), type_name)
        if op == "&":
            return ConstantValue(ia & ib, type_name)
        if op == "|":
            return ConstantValue(ia | ib, type_name)
        if op == "^":
            return ConstantValue(ia ^ ib, type_name)
        if op == "&^":
            return ConstantValue(ia & ~ib, type_name)

        raise ConstEvalError(f"unsupported operator {op}", expr.loc)

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def convert(self, cv: ConstantValue, type_name: str, span: Optional[Span]) -> ConstantValue:
        """Convert a constant to `type_name`.

        Integer targets require an integral value. Values outside the
        target's range wrap modulo 2**bit_width for unsigned kinds and raise
        ConstOverflowError for signed kinds.
        """
        value = cv.value
        kind = self.types.kind_of(type_name)

        if kind is not None:
            as_int = _as_integer(value)
            if as_int is None:
                raise ConstEvalError(f"cannot convert {_show(value)} to integer type {type_name}", span)
            if not kind.contains(as_int):
                if kind.signed:
                    raise ConstOverflowError(as_int, type_name, kind, span)
                as_int = kind.wrap(as_int)
            return ConstantValue(as_int, type_name)

        base = self._builtin_underlying(type_name)
        if base in FLOAT_TYPES and _is_numeric(value):
            return ConstantValue(Fraction(value), type_name)
        if base == "string":
            if isinstance(value, str):
                return ConstantValue(value, type_name)
            if _is_integer(value):
                code = int(value)
                return ConstantValue(chr(code) if 0 <= code <= 0x10FFFF else "�", type_name)
        if base == "bool" and isinstance(value, bool):
            return ConstantValue(value, type_name)

        raise ConstEvalError(f"cannot convert {_show(value)} to type {type_name}", span)

    def _builtin_underlying(self, type_name: str) -> Optional[str]:
        seen = set()
        name = type_name
        while name in self.types.by_name and name not in seen:
            seen.add(name)
            ty = self.types.by_name[name].spec.ty
            if not isinstance(ty, TypeName) or ty.package is not None:
                return None
            name = ty.name
        return name

    def _is_float_type(self, type_name: Optional[str]) -> bool:
        return type_name is not None and self._builtin_underlying(type_name) in FLOAT_TYPES

    def _representable(self, cv: ConstantValue, span: Optional[Span]) -> ConstantValue:
        """Typed signed integer results must fit their type after every operation."""
        if cv.type_name is None or not _is_integer(cv.value):
            return cv
        kind = self.types.kind_of(cv.type_name)
        if kind is not None and kind.signed and not kind.contains(cv.value):
            raise ConstOverflowError(cv.value, cv.type_name, kind, span)
        return cv

    def _unify(self, values: List[ConstantValue], span: Optional[Span]) -> Optional[str]:
        """Common type of operands: the typed one wins; two different types are an error."""
        typed = {v.type_name for v in values if v.type_name is not None}
        if len(typed) > 1:
            raise ConstEvalError("mismatched types " + " and ".join(sorted(typed)), span)
        return typed.pop() if typed else None

    def _numeric(self, value: Union[int, Fraction], type_name: Optional[str]) -> ConstantValue:
        if isinstance(value, Fraction) and value.denominator == 1 and not self._is_float_type(type_name):
            value = int(value)
        return ConstantValue(value, type_name)


def _is_integer(value: Value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_numeric(value: Value) -> bool:
    return _is_integer(value) or isinstance(value, Fraction)


def _as_integer(value: Value) -> Optional[int]:
    """Exact integer value of a numeric constant, or None if it has a fractional part."""
    if _is_integer(value):
        return value  # type: ignore[return-value]
    if isinstance(value, Fraction) and value.denominator == 1:
        return int(value)
    return None


def _trunc_div(a: int, b: int) -> int:
    """Integer division truncated toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _compare(op: str, a, b) -> bool:
    if op == "==":
        return a == b
    if op == "!=":
        return a != b
    if op == "<":
        return a < b
    if op == "<=":
        return a <= b
    if op == ">":
        return a > b
    return a >= b


def _show(value: Value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return repr(value)
    if isinstance(value, Fraction):
        return str(float(value))
    return str(value)


def _describe(expr: Expr) -> str:
    """Short Go-like rendering of an expression for messages."""
    if isinstance(expr, Name):
        return expr.id
    if isinstance(expr, Selector):
        return f"{_describe(expr.expr)}.{expr.name}"
    if isinstance(expr, Call):
        return f"{_describe(expr.func)}(...)"
    if isinstance(expr, Index):
        return f"{_describe(expr.expr)}[...]"
    if isinstance(expr, IntLit):
        return str(expr.value)
    if isinstance(expr, StringLit):
        return repr(expr.value)
    if isinstance(expr, UnaryOp):
        return f"{expr.op}{_describe(expr.expr)}"
    if isinstance(expr, BinaryOp):
        return f"{_describe(expr.left)} {expr.op} {_describe(expr.right)}"
    return type(expr).__name__
