from __future__ import annotations
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Any

from lark import Token

class C:
    """ANSI color/style escape codes."""
    RESET = "\x1b[0m"
    BOLD  = "\x1b[1m"
    DIM   = "\x1b[2m"
    RED   = "\x1b[31m"
    YELLOW = "\x1b[33m"
    CYAN  = "\x1b[36m"
    GRAY  = "\x1b[90m"

@dataclass
class Span:
    line: int
    col: int
    end_line: int
    end_col: int

@dataclass
class Diagnostic:
    kind: str
    code: str
    message: str
    span: Optional[Span] = None
    filename: Optional[str] = None  # Go file the span points into

def span_of(t: Any) -> Optional[Span]:
    m = getattr(t, "meta", None)
    if m is not None and not getattr(m, "empty", False):
        return Span(m.line, m.column, m.end_line, m.end_column)
    if isinstance(t, Token):
        line = getattr(t, "line", None)
        col = getattr(t, "column", None)
        end_line = getattr(t, "end_line", None)
        end_col = getattr(t, "end_column", None)
        if line is not None and col is not None:
            return Span(line, col, end_line or line, end_col or col)
    return None


def _display_path(filename: str) -> str:
    """Render `filename` relative to the working directory when possible."""
    try:
        rel_path = Path(filename).resolve().relative_to(Path.cwd())
        return f"./{rel_path}"
    except (ValueError, OSError):
        return Path(filename).name


class Reporter:
    def __init__(self, source: Optional[str] = None, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.items: List[Diagnostic] = []
        # Sources of other files diagnostics may point into (filename -> text).
        self.sources: Dict[str, str] = {}
        if source is not None:
            self.sources[filename] = source

    def error(self, code: str, msg: str, span: Optional[Span], filename: Optional[str] = None):
        self.items.append(Diagnostic("error", code, msg, span, filename=filename or self.filename))

    def warn(self, code: str, msg: str, span: Optional[Span], filename: Optional[str] = None):
        self.items.append(Diagnostic("warning", code, msg, span, filename=filename or self.filename))

    def merge(self, other: "Reporter") -> None:
        """Append diagnostics (and known sources) collected by another reporter."""
        self.items.extend(other.items)
        for name, text in other.sources.items():
            self.sources.setdefault(name, text)

    @property
    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.items)

    def _line_text(self, d: Diagnostic) -> str:
        src = self.sources.get(d.filename or self.filename)
        if src is None and d.filename and d.filename != self.filename:
            try:
                src = Path(d.filename).read_text(encoding="utf-8")
            except OSError:
                src = None
        if src is None:
            return ""
        lines = src.splitlines()
        line_idx = d.span.line - 1
        return lines[line_idx] if 0 <= line_idx < len(lines) else ""

    def format(self, use_color: bool = True, use_unicode: bool = True) -> str:
        """Render all diagnostics.

        use_color   → ANSI colorize location/kind/guide/markers
        use_unicode → use │ / ╰ / ╯ and a separate caret line above the guide
        """
        out: List[str] = []

        for d in self.items:
            filename = _display_path(d.filename or self.filename)
            loc = f"{filename}:{d.span.line}:{d.span.col}" if d.span else filename

            message = d.message if d.message.endswith('.') else f"{d.message}."

            if use_color:
                kind = f"{C.BOLD}{C.RED}error{C.RESET}" if d.kind == "error" else f"{C.BOLD}{C.YELLOW}warning{C.RESET}"
                head = f"{C.CYAN}{loc}{C.RESET}: {kind} [{C.DIM}{d.code}{C.RESET}]: {message}"
            else:
                head = f"{loc}: {d.kind} [{d.code}]: {message}"

            if not d.span:
                out.append(head)
                continue

            line_text = self._line_text(d)
            start = max(1, d.span.col)

            if use_unicode:
                gray = (lambda s: f"{C.GRAY}{s}{C.RESET}") if use_color else (lambda s: s)
                mark_color = C.RED if d.kind == "error" else C.YELLOW
                caret = " " * (start - 1) + "┯"
                guide = "─" * start

                out.append(f"{gray('  ╭──┤ ')}{head}")
                out.append(f"{gray('  │')}  {line_text}")
                if use_color:
                    out.append(f"{gray('  │')}  {mark_color}{caret}{C.RESET}")
                    out.append(f"{gray('  ╰')}{C.GRAY}{guide}{C.RESET}{mark_color}╯{C.RESET}")
                else:
                    out.append(f"  │  {caret}")
                    out.append(f"  ╰{guide}╯")
            else:
                # ASCII fallback: header on top, then source and caret
                out.append(head)
                out.append(f"  | {line_text}")
                out.append(f"  ` {' ' * (start - 1) + '^'}")

        return "\n".join(out)

    def print(self, stream=None, use_color: Optional[bool] = None, use_unicode: Optional[bool] = None) -> None:
        """Print diagnostics to `stream` (default: sys.stderr).

        Color is auto-enabled for TTY unless NO_COLOR or TERM=dumb.
        Unicode prefixes (│ / ╰) are auto-enabled for TTY unless NO_UNICODE or TERM=dumb.
        """
        stream = stream or sys.stderr
        is_tty = getattr(stream, "isatty", lambda: False)()
        dumb = os.getenv("TERM") == "dumb"

        if use_color is None:
            use_color = bool(is_tty and os.getenv("NO_COLOR") is None and not dumb)

        if use_unicode is None:
            use_unicode = bool(is_tty and os.getenv("NO_UNICODE") is None and not dumb)

        text = self.format(use_color=use_color, use_unicode=use_unicode)
        if text:
            print(text, file=stream)
