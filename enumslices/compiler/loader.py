"""Go package discovery and source file loading."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from enumslices.internals import errors as er
from enumslices.internals.ast_printer import dump_ast
from enumslices.internals.parser import parse_to_ast
from enumslices.internals.parse_errors import handle_parse_exception
from enumslices.internals.report import Reporter
from enumslices.semantics.ast import SourceFile


def get_effective_cwd() -> Path:
    """Get the effective current working directory for path resolution.

    Checks for the ENUMSLICES_CWD environment variable. If present, uses that
    directory. Otherwise falls back to os.getcwd().
    """
    enumslices_cwd = os.environ.get('ENUMSLICES_CWD')
    if enumslices_cwd:
        return Path(enumslices_cwd)
    return Path.cwd()


@dataclass
class LoadedPackage:
    """Parsed files of one Go package."""
    name: str
    directory: Path
    files: List[SourceFile] = field(default_factory=list)


def resolve_go_files(paths: Sequence[str], reporter: Reporter) -> Optional[tuple[Path, List[Path]]]:
    """Turn command-line arguments into (package directory, Go files).

    A single directory argument stands for all its non-test `.go` files in
    name order; otherwise every argument is a file and all of them must
    share one directory.
    """
    cwd = get_effective_cwd()
    resolved = [(cwd / p).resolve() for p in (paths or ["."])]

    if len(resolved) == 1 and resolved[0].is_dir():
        directory = resolved[0]
        files = sorted(
            p for p in directory.glob("*.go")
            if p.is_file() and not p.name.endswith("_test.go")
        )
        if not files:
            er.emit(reporter, er.ERR.CE3001, None, filename=str(directory), path=str(directory))
            return None
        return directory, files

    directory = resolved[0].parent
    for p in resolved[1:]:
        if p.parent != directory:
            er.emit(reporter, er.ERR.CE3004, None, filename=str(p),
                    first=str(directory), other=str(p.parent))
            return None
    return directory, resolved


def load_file(path: Path, reporter: Reporter, dump_parse: bool = False,
              dump_ast_flag: bool = False) -> Optional[SourceFile]:
    """Read and parse one Go file, reporting problems into `reporter`."""
    try:
        src = path.read_text(encoding="utf-8-sig")  # Go skips a leading BOM
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        er.emit(reporter, er.ERR.CE3002, None, filename=str(path), path=str(path), reason=reason)
        return None

    # File-specific reporter, merged into the main one afterwards
    file_reporter = Reporter(source=src, filename=str(path))

    try:
        source_file, _ = parse_to_ast(src, filename=str(path), dump_parse=dump_parse)
    except Exception as exc:
        if handle_parse_exception(exc, file_reporter, source_path=path):
            reporter.merge(file_reporter)
            return None
        raise

    if dump_ast_flag:
        print(dump_ast(source_file))
        print()

    reporter.merge(file_reporter)
    return source_file


def load_package(paths: Sequence[str], reporter: Reporter, dump_parse: bool = False,
                 dump_ast_flag: bool = False) -> Optional[LoadedPackage]:
    """Load every file of the package named by `paths`.

    Returns None when any file is missing, unreadable or unparsable, or when
    the files disagree on the package name.
    """
    found = resolve_go_files(paths, reporter)
    if found is None:
        return None
    directory, file_paths = found

    files: List[SourceFile] = []
    ok = True
    for path in file_paths:
        source_file = load_file(path, reporter, dump_parse=dump_parse, dump_ast_flag=dump_ast_flag)
        if source_file is None:
            ok = False
            continue
        files.append(source_file)

    if not ok:
        return None

    first = files[0]
    for other in files[1:]:
        if other.package != first.package:
            er.emit(reporter, er.ERR.CE3003, other.loc, filename=other.filename,
                    first=first.package, other=other.package)
            return None

    return LoadedPackage(name=first.package, directory=directory, files=files)
