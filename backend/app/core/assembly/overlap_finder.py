# File: backend/app/core/assembly/overlap_finder.py
# Version: v0.4.0

"""
Pairwise overlap finder for oriented Sanger reads.

For every unordered pair {A, B}:
  - suffix-prefix A→B and B→A: every overlap length L in
    [min_overlap .. min(len A, len B, max_scan)] is scored; the strictly best
    L wins (ties keep the smallest L) and is kept if it reaches the threshold.
  - containment: when one read is strictly shorter, it is slid across every
    offset of the longer one; the first best offset is kept if it reaches the
    threshold.

Per-base similarity: exact 1.0, IUPAC-compatible 0.5, otherwise 0, averaged
over the compared length.

v0.4.0
- Containment honours `min_overlap` so every emitted candidate satisfies
  overlap_length >= min_overlap.
"""

from __future__ import annotations

__all__ = [
    "OverlapFinder",
    "calculate_simple_similarity",
    "find_suffix_prefix_overlap",
    "find_containment_overlap",
]

import itertools
import logging
from typing import List, Optional, Sequence

from backend.app.config.config_assembly import (
    AssemblyParameters,
    DEFAULT_MIN_OVERLAP,
    DEFAULT_SIMILARITY_THRESHOLD,
    load_default_params,
)
from backend.app.core.models.reads import OverlapCandidate, OverlapType, SequenceRead
from backend.app.core.sequence.iupac import base_similarity

logger = logging.getLogger(__name__)

MAX_OVERLAP_SCAN = 1000


def calculate_simple_similarity(x: str, y: str) -> float:
    """Mean per-base similarity of two equal-length sequences (0.0 if empty)."""
    if len(x) != len(y):
        raise ValueError(f"similarity needs equal lengths, got {len(x)} and {len(y)}")
    if not x:
        return 0.0
    return sum(base_similarity(a, b) for a, b in zip(x, y)) / len(x)


def find_suffix_prefix_overlap(
    a: str,
    b: str,
    min_overlap: int = DEFAULT_MIN_OVERLAP,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    max_scan: int = MAX_OVERLAP_SCAN,
    *,
    source: str = "A",
    target: str = "B",
) -> Optional[OverlapCandidate]:
    """Best suffix(a) / prefix(b) overlap, or None if nothing reaches `threshold`."""
    upper = min(len(a), len(b), max_scan)
    lower = max(1, min_overlap)
    best_len = 0
    best_sim = -1.0
    for L in range(lower, upper + 1):
        sim = calculate_simple_similarity(a[-L:], b[:L])
        if sim > best_sim:
            best_len, best_sim = L, sim
    if best_len == 0 or best_sim < threshold:
        return None
    return OverlapCandidate(
        source=source,
        target=target,
        overlap_type=OverlapType.SUFFIX_PREFIX,
        overlap_length=best_len,
        source_segment=a[-best_len:],
        target_segment=b[:best_len],
        similarity=best_sim,
        source_start=len(a) - best_len,
        source_end=len(a),
        target_start=0,
        target_end=best_len,
    )


def find_containment_overlap(
    container: str,
    contained: str,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    min_overlap: int = 1,
    *,
    source: str = "A",
    target: str = "B",
) -> Optional[OverlapCandidate]:
    """Best placement of `contained` inside `container`, or None."""
    m = len(contained)
    if m == 0 or m > len(container) or m < min_overlap:
        return None
    best_pos = -1
    best_sim = -1.0
    for pos in range(len(container) - m + 1):
        sim = calculate_simple_similarity(container[pos:pos + m], contained)
        if sim > best_sim:
            best_pos, best_sim = pos, sim
            if sim == 1.0:
                break
    if best_sim < threshold:
        return None
    return OverlapCandidate(
        source=source,
        target=target,
        overlap_type=OverlapType.CONTAINMENT,
        overlap_length=m,
        source_segment=container[best_pos:best_pos + m],
        target_segment=contained,
        similarity=best_sim,
        source_start=best_pos,
        source_end=best_pos + m,
        target_start=0,
        target_end=m,
    )


class OverlapFinder:
    """Runs suffix-prefix and containment searches over all read pairs."""

    def __init__(
        self,
        params: Optional[AssemblyParameters] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.params = params or load_default_params()
        self.log = logger or logging.getLogger(__name__)

    def find_all(self, reads: Sequence[SequenceRead]) -> List[OverlapCandidate]:
        """
        All overlap candidates across every pair. Reads are compared in
        reference orientation (`oriented_bases`).
        """
        p = self.params
        usable = [r for r in reads if len(r) > 0]
        oriented = [r.oriented_bases for r in usable]
        out: List[OverlapCandidate] = []

        for i, j in itertools.combinations(range(len(usable)), 2):
            ra, rb = usable[i], usable[j]
            a, b = oriented[i], oriented[j]

            for (src, s_seq), (dst, d_seq) in (((ra.name, a), (rb.name, b)), ((rb.name, b), (ra.name, a))):
                cand = find_suffix_prefix_overlap(
                    s_seq, d_seq, p.min_overlap, p.similarity_threshold, p.max_overlap_scan,
                    source=src, target=dst,
                )
                if cand is not None:
                    out.append(cand)

            if len(b) < len(a):
                cand = find_containment_overlap(
                    a, b, p.similarity_threshold, p.min_overlap, source=ra.name, target=rb.name,
                )
            elif len(a) < len(b):
                cand = find_containment_overlap(
                    b, a, p.similarity_threshold, p.min_overlap, source=rb.name, target=ra.name,
                )
            else:
                cand = None
            if cand is not None:
                out.append(cand)

        for c in out:
            self.log.debug(
                "%s %s->%s: %d bp @ %.3f",
                c.overlap_type.value, c.source, c.target, c.overlap_length, c.similarity,
            )
        self.log.info(
            "Overlap finder: %d read(s), %d candidate(s) (min_overlap=%d, threshold=%.2f)",
            len(usable), len(out), p.min_overlap, p.similarity_threshold,
        )
        return out
