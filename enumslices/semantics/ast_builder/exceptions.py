"""Custom exceptions for AST building errors."""
from __future__ import annotations
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from enumslices.internals.report import Span


class LegacyOctalError(Exception):
    """Exception raised when a leading-zero literal contains the digits 8 or 9."""
    def __init__(self, literal: str, span: Optional['Span'] = None):
        message = f"invalid digit in octal literal '{literal}'"
        super().__init__(message)
        self.literal = literal
        self.span = span
