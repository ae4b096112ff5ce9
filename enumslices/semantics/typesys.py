# semantics/typesys.py
"""Go integer kinds and the value domain they define."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class IntKind:
    """Underlying integer kind of a named type: signedness and bit width."""
    name: str
    signed: bool
    bit_width: int

    @property
    def min_value(self) -> int:
        return -(1 << (self.bit_width - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        if self.signed:
            return (1 << (self.bit_width - 1)) - 1
        return (1 << self.bit_width) - 1

    def contains(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    def wrap(self, value: int) -> int:
        """Reduce `value` modulo 2**bit_width (unsigned kinds only)."""
        return value % (1 << self.bit_width)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TargetType:
    """A named integer type whose constants are being tabulated."""
    name: str
    kind: IntKind


FLOAT_TYPES = frozenset({"float32", "float64"})
COMPLEX_TYPES = frozenset({"complex64", "complex128"})
OTHER_BUILTIN_TYPES = frozenset({"bool", "string", "error", "any"}) | FLOAT_TYPES | COMPLEX_TYPES


def builtin_int_kinds(word_size: int = 64) -> Dict[str, IntKind]:
    """Go's predeclared integer types; `int`, `uint` and `uintptr` take `word_size` bits."""
    kinds = {
        "int8": IntKind("int8", True, 8),
        "int16": IntKind("int16", True, 16),
        "int32": IntKind("int32", True, 32),
        "int64": IntKind("int64", True, 64),
        "uint8": IntKind("uint8", False, 8),
        "uint16": IntKind("uint16", False, 16),
        "uint32": IntKind("uint32", False, 32),
        "uint64": IntKind("uint64", False, 64),
        "int": IntKind("int", True, word_size),
        "uint": IntKind("uint", False, word_size),
        "uintptr": IntKind("uintptr", False, word_size),
    }
    kinds["byte"] = kinds["uint8"]
    kinds["rune"] = kinds["int32"]
    return kinds


def is_builtin_type(name: str, word_size: int = 64) -> bool:
    return name in OTHER_BUILTIN_TYPES or name in builtin_int_kinds(word_size)
