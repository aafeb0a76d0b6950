# File: backend/app/core/models/reads.py
# Version: v0.3.0

"""
Shared dataclasses for the Sanger assembly engine.

Coordinates
-----------
- Declared positions and genomic ranges are 1-based and inclusive.
- Offsets *within* a read (overlap segments) are 0-based, end-exclusive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from backend.app.core.sequence.iupac import GAP, reverse_complement


class Strand(str, Enum):
    FORWARD = "forward"
    REVERSE = "reverse"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: "str | Strand | None") -> "Strand":
        """Accept 'forward'/'reverse'/'unknown' plus the usual '+'/'-' shorthands."""
        if isinstance(value, Strand):
            return value
        raw = (value or "").strip().lower()
        if raw in ("forward", "fwd", "f", "+"):
            return cls.FORWARD
        if raw in ("reverse", "rev", "r", "-"):
            return cls.REVERSE
        return cls.UNKNOWN


class OverlapType(str, Enum):
    SUFFIX_PREFIX = "suffix-prefix"
    CONTAINMENT = "containment"


@dataclass(frozen=True)
class ReadInput:
    """Raw read as handed over by the file/API layer (not yet cleaned)."""
    name:     str
    text:     str
    strand:   Strand = Strand.UNKNOWN
    position: int = 1


@dataclass(frozen=True)
class SequenceRead:
    """
    A cleaned read with its user-declared strand and position.

    `position` marks the 5' end for forward reads and the 3' end for reverse
    reads. Unknown-strand reads are placed like forward reads.
    """
    name:     str
    bases:    str        # cleaned, uppercase IUPAC, as read from the file
    strand:   Strand
    position: int        # declared, 1-based; never recomputed

    def __len__(self) -> int:
        return len(self.bases)

    @property
    def is_reverse(self) -> bool:
        return self.strand is Strand.REVERSE

    @property
    def oriented_bases(self) -> str:
        """Bases in reference orientation (reverse reads reverse-complemented)."""
        return reverse_complement(self.bases) if self.is_reverse else self.bases

    @property
    def declared_start(self) -> int:
        if self.is_reverse:
            return self.position - len(self.bases) + 1
        return self.position

    @property
    def declared_end(self) -> int:
        if self.is_reverse:
            return self.position
        return self.position + len(self.bases) - 1

    @property
    def declared_range(self) -> Tuple[int, int]:
        return self.declared_start, self.declared_end


@dataclass(frozen=True)
class OverlapCandidate:
    """
    Proposed adjacency between two oriented reads.

    suffix-prefix: the last `overlap_length` bases of `source` against the
    first `overlap_length` bases of `target`.
    containment: `target` lies inside `source` starting at `source_start`.
    """
    source:         str
    target:         str
    overlap_type:   OverlapType
    overlap_length: int
    source_segment: str
    target_segment: str
    similarity:     float
    source_start:   int
    source_end:     int
    target_start:   int
    target_end:     int


@dataclass(frozen=True)
class ValidatedOverlap:
    """An overlap candidate confirmed against the declared positions."""
    candidate:      OverlapCandidate
    genomic_start:  int
    genomic_end:    int
    implied_length: int

    @property
    def source(self) -> str:
        return self.candidate.source

    @property
    def target(self) -> str:
        return self.candidate.target

    @property
    def overlap_type(self) -> OverlapType:
        return self.candidate.overlap_type

    @property
    def overlap_length(self) -> int:
        return self.candidate.overlap_length

    @property
    def similarity(self) -> float:
        return self.candidate.similarity


@dataclass(frozen=True)
class ReadPlacement:
    """Where a read landed in the assembly buffer (1-based genomic coordinates)."""
    name:          str
    strand:        Strand
    natural_start: int
    natural_end:   int
    placed_start:  int        # 0 / -1 when nothing was placed
    placed_end:    int
    trimmed_left:  int = 0
    trimmed_right: int = 0

    @property
    def placed_length(self) -> int:
        return max(0, self.placed_end - self.placed_start + 1)


@dataclass(frozen=True)
class AssemblyResult:
    sequence:             str
    boundaries:           Tuple[int, int]
    expected_length:      int
    method:               str                       # "overlap_guided" | "position_guided"
    overlaps:             List[ValidatedOverlap] = field(default_factory=list)
    placements:           List[ReadPlacement]    = field(default_factory=list)
    conflicts:            int = 0                  # concrete-vs-concrete disagreements
    unresolved_conflicts: int = 0                  # settled by first-writer-wins
    warnings:             List[str]              = field(default_factory=list)
    depth:                List[int]              = field(default_factory=list)  # reads written per buffer cell

    @property
    def length(self) -> int:
        return len(self.sequence)

    @property
    def gap_bases(self) -> int:
        return self.sequence.count(GAP)

    @property
    def real_bases(self) -> int:
        return self.length - self.gap_bases

    @property
    def coverage(self) -> float:
        """Percent of buffer positions holding a non-gap symbol."""
        if not self.sequence:
            return 0.0
        return 100.0 * self.real_bases / self.length

    @property
    def avg_depth(self) -> float:
        """Mean read depth over buffer positions at least one read reached."""
        covered = [d for d in self.depth if d > 0]
        if not covered:
            return 0.0
        return sum(covered) / len(covered)

    @property
    def length_consistent(self) -> bool:
        return self.length == self.expected_length
