# File: backend/app/core/assembly/boundary_assembler.py
# Version: v0.6.0
"""
Boundary-constrained assembler: write oriented reads into one fixed-size
buffer spanning the declared-position range.

Buffer
------
length = max(declared_end) - min(declared_start) + 1, initialised to 'N'.
A caller may pass explicit `boundaries=(start, end)` (1-based inclusive); the
buffer then covers exactly that window. Reads reaching past either boundary
are cut on the overflowing side; every cut is logged and reported in
`AssemblyResult.warnings`.

Conflicts (same buffer cell, different symbols)
-----------------------------------------------
1. 'N' always loses to a concrete symbol.
2. Compatible concrete symbols: an unambiguous base (A/C/G/T) beats an
   ambiguity code.
3. Anything else keeps the symbol already there (first writer wins).

v0.6.0
- Per-cell read depth is tracked; `AssemblyResult.avg_depth` is its mean over
  covered cells.

v0.5.1
- Reads are placed strictly in input order on both code paths, so identical
  inputs always resolve conflicts identically.

v0.5.0
- `position_guided_assembly` is the no-overlap path, not an error path.
- Expected length is recomputed independently and a mismatch is a warning.
"""

from __future__ import annotations

__all__ = [
    "AssemblyError",
    "NoValidSequencesError",
    "BoundaryAssembler",
    "resolve_symbol",
    "expected_span",
]

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from backend.app.core.models.reads import (
    AssemblyResult,
    ReadPlacement,
    SequenceRead,
    ValidatedOverlap,
)
from backend.app.core.sequence.iupac import GAP, is_compatible, is_unambiguous


class AssemblyError(RuntimeError):
    pass


class NoValidSequencesError(AssemblyError):
    """Raised when there is nothing to assemble (no reads, or all empty)."""


METHOD_OVERLAP_GUIDED = "overlap_guided"
METHOD_POSITION_GUIDED = "position_guided"


def resolve_symbol(existing: str, new: str) -> Tuple[str, bool, bool]:
    """
    Decide what a buffer cell holds after writing `new` over `existing`.

    Returns (symbol, conflict, unresolved): `conflict` is True when two
    different concrete symbols met; `unresolved` when first-writer-wins decided.
    """
    if existing == new or new == GAP:
        return existing, False, False
    if existing == GAP:
        return new, False, False
    if is_compatible(existing, new):
        if is_unambiguous(new) and not is_unambiguous(existing):
            return new, True, False
        if is_unambiguous(existing) and not is_unambiguous(new):
            return existing, True, False
    return existing, True, True


def expected_span(reads: Sequence[SequenceRead]) -> Tuple[int, int]:
    """(min declared start, max declared end) over non-empty reads."""
    usable = [r for r in reads if len(r) > 0]
    if not usable:
        raise NoValidSequencesError("No valid sequences: cannot derive an assembly span")
    return min(r.declared_start for r in usable), max(r.declared_end for r in usable)


class BoundaryAssembler:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.log = logger or logging.getLogger(__name__)

    # --------------------- Public API ---------------------

    def assemble(
        self,
        reads: Sequence[SequenceRead],
        overlaps: Iterable[ValidatedOverlap] = (),
        boundaries: Optional[Tuple[int, int]] = None,
    ) -> AssemblyResult:
        overlaps = list(overlaps)
        if overlaps:
            return self.overlap_guided_assembly(reads, overlaps, boundaries)
        return self.position_guided_assembly(reads, boundaries)

    def position_guided_assembly(
        self,
        reads: Sequence[SequenceRead],
        boundaries: Optional[Tuple[int, int]] = None,
    ) -> AssemblyResult:
        """Place reads purely from declared positions (no usable overlaps)."""
        self.log.info("No validated overlaps; assembling from declared positions only")
        return self._build(reads, [], boundaries, METHOD_POSITION_GUIDED)

    def overlap_guided_assembly(
        self,
        reads: Sequence[SequenceRead],
        overlaps: Sequence[ValidatedOverlap],
        boundaries: Optional[Tuple[int, int]] = None,
    ) -> AssemblyResult:
        names = {r.name for r in reads if len(r) > 0}
        used = [o for o in overlaps if o.source in names and o.target in names]
        self.log.info("Assembling with %d validated overlap(s)", len(used))
        return self._build(reads, used, boundaries, METHOD_OVERLAP_GUIDED)

    # --------------------- Internals ---------------------

    def _resolve_boundaries(
        self,
        reads: Sequence[SequenceRead],
        boundaries: Optional[Tuple[int, int]],
        warnings: List[str],
    ) -> Tuple[int, int]:
        span = expected_span(reads)
        if boundaries is None:
            return span
        lo, hi = int(boundaries[0]), int(boundaries[1])
        if hi < lo:
            msg = f"Ignoring inverted boundaries ({lo}, {hi}); using declared span {span}"
            self.log.warning(msg)
            warnings.append(msg)
            return span
        return lo, hi

    def _build(
        self,
        reads: Sequence[SequenceRead],
        overlaps: List[ValidatedOverlap],
        boundaries: Optional[Tuple[int, int]],
        method: str,
    ) -> AssemblyResult:
        usable = [r for r in reads if len(r) > 0]
        if not usable:
            raise NoValidSequencesError("No valid sequences to assemble")

        warnings: List[str] = []
        lo, hi = self._resolve_boundaries(usable, boundaries, warnings)
        buffer = [GAP] * (hi - lo + 1)
        depth = [0] * len(buffer)

        placements: List[ReadPlacement] = []
        conflicts = 0
        unresolved = 0
        for read in usable:
            placement, c, u = self._place(read, buffer, depth, lo, hi, warnings)
            placements.append(placement)
            conflicts += c
            unresolved += u

        sequence = "".join(buffer)

        # Independent recomputation from the declared positions
        exp_lo, exp_hi = expected_span(usable)
        expected_length = exp_hi - exp_lo + 1
        if expected_length != len(sequence):
            msg = (
                f"Assembly length {len(sequence)} bp differs from declared span "
                f"{exp_lo}-{exp_hi} ({expected_length} bp); coverage refers to the buffer only"
            )
            self.log.warning(msg)
            warnings.append(msg)

        if unresolved:
            self.log.info("%d conflicting base(s) kept by first-writer-wins", unresolved)

        result = AssemblyResult(
            sequence=sequence,
            boundaries=(lo, hi),
            expected_length=expected_length,
            method=method,
            overlaps=list(overlaps),
            placements=placements,
            conflicts=conflicts,
            unresolved_conflicts=unresolved,
            warnings=warnings,
            depth=depth,
        )
        self.log.info(
            "Assembly %s: %d bp [%d..%d], %d real base(s), coverage %.1f%%, mean depth %.2f",
            method, result.length, lo, hi, result.real_bases, result.coverage, result.avg_depth,
        )
        return result

    def _place(
        self,
        read: SequenceRead,
        buffer: List[str],
        depth: List[int],
        lo: int,
        hi: int,
        warnings: List[str],
    ) -> Tuple[ReadPlacement, int, int]:
        bases = read.oriented_bases
        nat_start, nat_end = read.declared_range
        cut_left = max(0, lo - nat_start)
        cut_right = max(0, nat_end - hi)

        if cut_left + cut_right >= len(bases):
            msg = f"Read {read.name} ({nat_start}-{nat_end}) lies outside boundaries {lo}-{hi}; not placed"
            self.log.warning(msg)
            warnings.append(msg)
            placement = ReadPlacement(
                name=read.name, strand=read.strand,
                natural_start=nat_start, natural_end=nat_end,
                placed_start=0, placed_end=-1,
                trimmed_left=min(cut_left, len(bases)), trimmed_right=len(bases) - min(cut_left, len(bases)),
            )
            return placement, 0, 0

        if cut_left or cut_right:
            msg = (
                f"Read {read.name} ({nat_start}-{nat_end}) exceeds boundaries {lo}-{hi}; "
                f"trimmed {cut_left} bp left, {cut_right} bp right"
            )
            self.log.warning(msg)
            warnings.append(msg)

        segment = bases[cut_left:len(bases) - cut_right]
        offset = nat_start + cut_left - lo
        conflicts = 0
        unresolved = 0
        for i, sym in enumerate(segment):
            kept, c, u = resolve_symbol(buffer[offset + i], sym)
            buffer[offset + i] = kept
            depth[offset + i] += 1
            conflicts += c
            unresolved += u

        placement = ReadPlacement(
            name=read.name, strand=read.strand,
            natural_start=nat_start, natural_end=nat_end,
            placed_start=nat_start + cut_left, placed_end=nat_end - cut_right,
            trimmed_left=cut_left, trimmed_right=cut_right,
        )
        return placement, conflicts, unresolved
