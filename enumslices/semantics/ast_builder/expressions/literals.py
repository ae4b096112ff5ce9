"""Literal expression parsing (integers, floats, runes, strings, names)."""
from __future__ import annotations
from fractions import Fraction
from typing import TYPE_CHECKING
from lark import Token
from enumslices.semantics.ast import Expr, IntLit, FloatLit, ImagLit, RuneLit, StringLit, Name
from enumslices.semantics.ast_builder.exceptions import LegacyOctalError
from enumslices.internals.report import span_of
from enumslices.internals import errors as er

if TYPE_CHECKING:
    from enumslices.semantics.ast_builder.builder import ASTBuilder


_SIMPLE_ESCAPES = {
    "a": 0x07, "b": 0x08, "f": 0x0C, "n": 0x0A, "r": 0x0D,
    "t": 0x09, "v": 0x0B, "\\": 0x5C, "'": 0x27, '"': 0x22,
}


def expr_from_token(tok: Token, ast_builder: 'ASTBuilder') -> Expr:
    """Map a single token to an Expr (literals and names).

    Handles: INT, FLOAT, IMAG, RUNE, STRING, RAW_STRING, NAME
    """
    t = tok.type

    if t == "INT":
        return parse_int_token(tok)

    if t == "FLOAT":
        return FloatLit(value=Fraction(tok.value.replace('_', '')), loc=span_of(tok))

    if t == "IMAG":
        return ImagLit(text=str(tok.value), loc=span_of(tok))

    if t == "RUNE":
        return RuneLit(value=decode_rune(tok.value[1:-1]), loc=span_of(tok))

    if t == "STRING":
        raw = decode_escapes(tok.value[1:-1])
        return StringLit(value=raw.decode("utf-8", "surrogateescape"), loc=span_of(tok))

    if t == "RAW_STRING":
        # Carriage returns are discarded from raw string literals
        return StringLit(value=tok.value[1:-1].replace("\r", ""), loc=span_of(tok))

    if t == "NAME":
        return Name(id=str(tok.value), loc=span_of(tok))

    er.raise_internal_error("IE0002", node=t)


def parse_int_token(tok: Token) -> IntLit:
    text = tok.value.replace('_', '')
    prefix = text[:2].lower()

    if prefix == "0x":
        return IntLit(value=int(text[2:], 16), radix=16, loc=span_of(tok))
    if prefix == "0b":
        return IntLit(value=int(text[2:], 2), radix=2, loc=span_of(tok))
    if prefix == "0o":
        return IntLit(value=int(text[2:], 8), radix=8, loc=span_of(tok))

    if len(text) > 1 and text[0] == '0':
        # Legacy octal: 0755
        if any(ch in "89" for ch in text):
            raise LegacyOctalError(tok.value, span=span_of(tok))
        return IntLit(value=int(text, 8), radix=8, loc=span_of(tok))

    return IntLit(value=int(text), radix=10, loc=span_of(tok))


def decode_rune(body: str) -> int:
    """Code point of a rune literal body (the text between the quotes)."""
    if not body.startswith("\\"):
        return ord(body)
    data = decode_escapes(body)
    if body[1] in "xX01234567":
        return data[0]
    return ord(data.decode("utf-8"))


def decode_escapes(body: str) -> bytes:
    """Decode Go escape sequences of an interpreted string body into bytes.

    \\x and octal escapes denote single bytes; \\u and \\U denote code points
    encoded as UTF-8.
    """
    out = bytearray()
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch != "\\":
            out += ch.encode("utf-8")
            i += 1
            continue
        esc = body[i + 1]
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
            i += 2
        elif esc == "x":
            out.append(int(body[i + 2:i + 4], 16))
            i += 4
        elif esc == "u":
            out += chr(int(body[i + 2:i + 6], 16)).encode("utf-8", "surrogatepass")
            i += 6
        elif esc == "U":
            out += chr(int(body[i + 2:i + 10], 16)).encode("utf-8", "surrogatepass")
            i += 10
        else:
            out.append(int(body[i + 1:i + 4], 8) & 0xFF)
            i += 4
    return bytes(out)
