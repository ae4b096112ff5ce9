# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from enumslices.internals.report import Span, Reporter


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    GENERAL   = "general"
    TYPE      = "type"
    CONSTANT  = "constant"
    SYNTAX    = "syntax"
    PACKAGE   = "package"
    INTERNAL  = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], filename: Optional[str] = None, **kwargs) -> None:
    text = _fmt(em.code, **kwargs)
    if em.severity == Severity.ERROR:
        r.error(em.code, text, span, filename=filename)
    else:
        r.warn(em.code, text, span, filename=filename)

def raise_internal_error(code: str, **kwargs) -> None:
    """Raise a RuntimeError for internal generator errors.

    Internal errors (IE codes) indicate generator bugs, not problems in the
    Go source being read. They are raised as Python exceptions.

    Args:
        code: Error code (e.g., "IE0001")
        **kwargs: Format parameters for the error message

    Raises:
        RuntimeError: Always raises with formatted error message
    """
    text = _fmt(code, **kwargs)
    raise RuntimeError(f"{code}: {text}")


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Target type resolution - CE01xx range
_add(ErrorMessage("CE0101", Severity.ERROR,
    "type '{name}' is not declared in package '{package}'",
    Category.TYPE, "The requested type has no `type` declaration in the loaded files."))

_add(ErrorMessage("CE0102", Severity.ERROR,
    "type '{name}' does not have an integer underlying type (underlying: {underlying})",
    Category.TYPE, "Only named integer types can have name tables generated."))

_add(ErrorMessage("CE0103", Severity.ERROR,
    "no constants of type '{name}' found",
    Category.TYPE, "The type is declared but no constant of that type was found."))

_add(ErrorMessage("CE0104", Severity.ERROR,
    "cannot evaluate constant '{ident}' of type '{type}': {reason}",
    Category.CONSTANT, "The value expression is not a constant expression the generator can evaluate."))

_add(ErrorMessage("CE0105", Severity.ERROR,
    "constant '{ident}' value {value} overflows type '{type}' ({kind})",
    Category.CONSTANT, "Signed values must fit the type; unsigned values wrap around."))

_add(ErrorMessage("CE0106", Severity.ERROR,
    "invalid recursive type '{name}': {chain}",
    Category.TYPE, "The named type refers back to itself through its underlying type chain."))

_add(ErrorMessage("CE0107", Severity.ERROR,
    "constant '{ident}' of type '{type}' depends on itself: {chain}",
    Category.CONSTANT, "Constant initialisers form a cycle."))

_add(ErrorMessage("CE0108", Severity.ERROR,
    "missing init expression for constant '{ident}' of type '{type}'",
    Category.CONSTANT, "The first spec of a const block, and any spec with an explicit type, needs a value."))

_add(ErrorMessage("CE0109", Severity.ERROR,
    "constant '{ident}' of type '{type}' has no matching value ({names} names, {values} values)",
    Category.CONSTANT, "The identifier list and the (possibly inherited) expression list differ in length."))

# Syntax - CE2xxx range
_add(ErrorMessage("CE2001", Severity.ERROR,
    "syntax error: {detail}",
    Category.SYNTAX, "The Go file could not be parsed."))

_add(ErrorMessage("CE2002", Severity.ERROR,
    "invalid integer literal '{literal}'",
    Category.SYNTAX, "Legacy octal literals may only contain digits 0-7."))

# Package loading - CE3xxx range
_add(ErrorMessage("CE3001", Severity.ERROR,
    "no Go files found in '{path}'",
    Category.PACKAGE, "The directory contains no non-test .go files."))

_add(ErrorMessage("CE3002", Severity.ERROR,
    "cannot read '{path}': {reason}",
    Category.PACKAGE, "The file does not exist or could not be read."))

_add(ErrorMessage("CE3003", Severity.ERROR,
    "found packages '{first}' and '{other}' in one directory",
    Category.PACKAGE, "All files handed to the generator must belong to the same package."))

_add(ErrorMessage("CE3004", Severity.ERROR,
    "files must all be in one directory; have '{first}' and '{other}'",
    Category.PACKAGE, "File arguments are treated as one package and must share a directory."))

# Internal errors (generator bugs) - IE range
_add(ErrorMessage("IE0001", Severity.ERROR,
    "name table invariant violated: {message}",
    Category.INTERNAL, "Ranges do not tile the blob; the table builder is broken."))

_add(ErrorMessage("IE0002", Severity.ERROR,
    "unhandled parse tree node '{node}'",
    Category.INTERNAL, "The AST builder met a tree shape the grammar should not produce."))
