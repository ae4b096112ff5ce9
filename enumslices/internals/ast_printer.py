from __future__ import annotations
from dataclasses import is_dataclass, fields
from fractions import Fraction
from typing import Any

_SKIPPED = ("loc", "name_spans")

def _pp(node: Any, indent: int) -> str:
    ind = "  " * indent
    if isinstance(node, list):
        return "\n".join(_pp(n, indent) for n in node)
    if isinstance(node, Fraction):
        return ind + str(node)
    if not is_dataclass(node):
        return ind + repr(node)
    name = node.__class__.__name__
    lines = [f"{ind}{name}"]
    for f in fields(node):
        if f.name in _SKIPPED:
            continue
        val = getattr(node, f.name)
        if is_dataclass(val) or (isinstance(val, list) and val):
            lines.append(f"{ind}  {f.name}:")
            lines.append(_pp(val, indent + 2))
        elif isinstance(val, Fraction):
            lines.append(f"{ind}  {f.name}: {val}")
        else:
            lines.append(f"{ind}  {f.name}: {val!r}")
    return "\n".join(lines)

def dump_ast(node: Any) -> str:
    return _pp(node, 0)
