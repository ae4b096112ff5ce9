"""Shared parse exception handling for the loader."""
from __future__ import annotations

from lark import UnexpectedInput

from enumslices.internals.report import Span
from enumslices.semantics.ast_builder import LegacyOctalError


def handle_parse_exception(exc: Exception, reporter, source_path=None) -> bool:
    """Handle a parse exception by emitting diagnostics through the reporter.

    Args:
        exc: The exception to handle.
        reporter: Reporter for error/warning collection.
        source_path: Optional path the diagnostic is attributed to.

    Returns:
        True if the exception was handled, False otherwise.
    """
    from enumslices.internals import errors as er
    from enumslices.internals.parser import improve_parse_error

    filename = str(source_path) if source_path else None

    if isinstance(exc, LegacyOctalError):
        er.emit(reporter, er.ERR.CE2002, exc.span, filename=filename, literal=exc.literal)
        return True

    if isinstance(exc, UnexpectedInput):
        line = getattr(exc, "line", -1)
        col = getattr(exc, "column", -1)
        span = Span(line, col, line, col) if line and line > 0 else None
        er.emit(reporter, er.ERR.CE2001, span, filename=filename, detail=improve_parse_error(exc))
        return True

    return False
