"""Go source emission for generated name tables.

Output is already gofmt-formatted: tab indentation, one element per line
with trailing commas.
"""
from __future__ import annotations
from typing import List, Sequence

from enumslices.backend.table import GeneratedArtifact

_ESCAPES = {
    "\a": "\\a", "\b": "\\b", "\f": "\\f", "\n": "\\n",
    "\r": "\\r", "\t": "\\t", "\v": "\\v", "\\": "\\\\", '"': '\\"',
}


def go_quote(s: str) -> str:
    """Interpreted Go string literal for `s` (printable characters kept as-is)."""
    out: List[str] = ['"']
    for ch in s:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif 0xDC80 <= ord(ch) <= 0xDCFF:
            # Invalid UTF-8 byte carried through surrogateescape
            out.append(f"\\x{ord(ch) - 0xDC00:02x}")
        elif ch.isprintable():
            out.append(ch)
        elif ord(ch) < 0x80:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) <= 0xFFFF:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    out.append('"')
    return "".join(out)


def render_type(artifact: GeneratedArtifact) -> str:
    """Name table, key slice, value slice and accessor method for one type."""
    t = artifact.type_name
    lines = [
        "",
        f"const _{t}_name = {go_quote(artifact.blob)}",
        "",
        f"var _{t}_key_slice = []interface{{}}{{",
    ]
    lines.extend(f"\t{t}({value})," for value in artifact.key_sequence)
    lines.append("}")
    lines.append("")
    lines.append(f"var _{t}_val_slice = []string{{")
    lines.extend(f"\t_{t}_name[{start}:{end}]," for start, end in artifact.val_sequence)
    lines.append("}")
    lines.append("")
    lines.append(f"func (i {t}) GetEnumSlices() ([]interface{{}}, []string) {{")
    lines.append(f"\treturn _{t}_key_slice, _{t}_val_slice")
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_file(package: str, args: Sequence[str], fragments: Sequence[str]) -> str:
    """Complete output file: generated-code header, package clause, fragments."""
    header = f'// Code generated by "enumslices {" ".join(args)}"; DO NOT EDIT.\n\npackage {package}\n'
    return header + "".join(fragments)
