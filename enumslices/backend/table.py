"""Name table construction: deduplication, ordering and blob packing.

The three stages are pure functions over ConstantEntry sequences; each
target type runs them once on its own entries.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from enumslices.internals import errors as er
from enumslices.semantics.passes.constants import ConstantEntry
from enumslices.semantics.typesys import IntKind


@dataclass(frozen=True)
class NameTable:
    """All table names packed into one string, with per-name byte ranges."""
    blob: str
    ranges: Tuple[Tuple[int, int], ...]

    def name_at(self, i: int) -> str:
        start, end = self.ranges[i]
        return self.blob.encode("utf-8", "surrogateescape")[start:end].decode("utf-8", "surrogateescape")


@dataclass(frozen=True)
class GeneratedArtifact:
    """Everything the emitter needs for one type."""
    type_name: str
    kind: IntKind
    blob: str
    key_sequence: Tuple[int, ...]
    val_sequence: Tuple[Tuple[int, int], ...]


def deduplicate(entries: Iterable[ConstantEntry]) -> List[ConstantEntry]:
    """Keep one entry per value: the one declared first.

    Aliases (several identifiers sharing a value) are normal Go usage and
    are dropped without a diagnostic.
    """
    survivors = {}
    for entry in entries:
        kept = survivors.get(entry.value)
        if kept is None or entry.decl_order < kept.decl_order:
            survivors[entry.value] = entry
    return sorted(survivors.values(), key=lambda e: e.decl_order)


def sort_entries(entries: Iterable[ConstantEntry]) -> List[ConstantEntry]:
    """Stable ascending sort by value."""
    return sorted(entries, key=lambda e: e.value)


def build_name_table(entries: Sequence[ConstantEntry]) -> NameTable:
    """Concatenate table names and record the half-open byte range of each."""
    parts: List[str] = []
    ranges: List[Tuple[int, int]] = []
    before = 0
    for entry in entries:
        size = len(entry.name.encode("utf-8", "surrogateescape"))
        parts.append(entry.name)
        ranges.append((before, before + size))
        before += size

    table = NameTable(blob="".join(parts), ranges=tuple(ranges))
    _check_tiling(table)
    return table


def build_artifact(type_name: str, kind: IntKind, entries: Sequence[ConstantEntry]) -> GeneratedArtifact:
    """Run dedup, sort and packing over one type's entries."""
    ordered = sort_entries(deduplicate(entries))
    table = build_name_table(ordered)
    keys = tuple(e.value for e in ordered)

    for prev, cur in zip(keys, keys[1:]):
        if prev >= cur:
            er.raise_internal_error("IE0001", message=f"keys not strictly ascending at {prev}, {cur}")

    return GeneratedArtifact(
        type_name=type_name,
        kind=kind,
        blob=table.blob,
        key_sequence=keys,
        val_sequence=table.ranges,
    )


def _check_tiling(table: NameTable) -> None:
    size = len(table.blob.encode("utf-8", "surrogateescape"))
    if not table.ranges:
        if size:
            er.raise_internal_error("IE0001", message="non-empty blob without ranges")
        return
    if table.ranges[0][0] != 0:
        er.raise_internal_error("IE0001", message=f"first range starts at {table.ranges[0][0]}")
    for (_, prev_end), (start, end) in zip(table.ranges, table.ranges[1:]):
        if start != prev_end or end < start:
            er.raise_internal_error("IE0001", message=f"range [{start}:{end}) does not follow {prev_end}")
    if table.ranges[-1][1] != size:
        er.raise_internal_error("IE0001", message=f"last range ends at {table.ranges[-1][1]}, blob has {size} bytes")
