"""Per-type generation orchestration."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from enumslices.backend.emitter import render_type
from enumslices.backend.table import GeneratedArtifact, build_artifact
from enumslices.compiler.loader import LoadedPackage
from enumslices.internals import errors as er
from enumslices.internals.report import Reporter
from enumslices.semantics.passes.collect import ConstantTable, TypeTable
from enumslices.semantics.passes.constants import ConstantEntry, NamingOptions, collect_constants
from enumslices.semantics.typesys import TargetType


@dataclass
class GenerateOptions:
    """Settings shared by every requested type of one run."""
    type_names: List[str] = field(default_factory=list)
    trim_prefix: str = ""
    line_comment: bool = False
    word_size: int = 64

    @property
    def naming(self) -> NamingOptions:
        return NamingOptions(trim_prefix=self.trim_prefix, line_comment=self.line_comment)


@dataclass
class GenerationContext:
    """State of one target type's run; nothing in it is shared between types."""
    type_name: str
    reporter: Reporter
    target: Optional[TargetType] = None
    entries: Optional[List[ConstantEntry]] = None
    artifact: Optional[GeneratedArtifact] = None
    fragment: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.fragment is not None and not self.reporter.has_errors


def generate_type(type_name: str, package: LoadedPackage, options: GenerateOptions) -> GenerationContext:
    """Run collection, tabulation and emission for one type.

    Diagnostics land in the context's own reporter; a failed type leaves
    `fragment` unset.
    """
    ctx = GenerationContext(type_name=type_name, reporter=Reporter(filename=str(package.directory)))

    types = TypeTable(package.files, word_size=options.word_size)
    ctx.target = types.resolve_target(type_name, package.name, ctx.reporter)
    if ctx.target is None:
        return ctx

    consts = ConstantTable.build(package.files)
    ctx.entries = collect_constants(ctx.target, types, consts, ctx.reporter, options.naming)
    if ctx.entries is None:
        return ctx

    if not ctx.entries:
        entry = types.by_name[type_name]
        er.emit(ctx.reporter, er.ERR.CE0103, entry.spec.loc, filename=entry.filename, name=type_name)
        return ctx

    ctx.artifact = build_artifact(ctx.target.name, ctx.target.kind, ctx.entries)
    ctx.fragment = render_type(ctx.artifact)
    return ctx


def generate_package(package: LoadedPackage, options: GenerateOptions,
                     reporter: Reporter) -> tuple[List[str], int]:
    """Generate every requested type of `package`.

    Returns:
        (fragments of the types that succeeded in request order, exit code),
        exit code 0 when all types succeeded and 2 otherwise.
    """
    fragments: List[str] = []
    failed = 0
    for type_name in _unique(options.type_names):
        ctx = generate_type(type_name, package, options)
        reporter.merge(ctx.reporter)
        if ctx.succeeded:
            fragments.append(ctx.fragment)
        else:
            failed += 1
    return fragments, (2 if failed else 0)


def _unique(names: Sequence[str]) -> List[str]:
    seen = set()
    out = []
    for n in names:
        if n not in seen:
            seen.add(n)
            out.append(n)
    return out
