# File: backend/app/core/assembly/position_validator.py
# Version: v0.2.0

"""
Cross-check sequence-derived overlaps against user-declared positions.

Each read's declared range is 1-based inclusive (forward: pos..pos+len-1,
reverse: pos-len+1..pos). The *implied* overlap of two reads is the size of
the intersection of their ranges.

Rules
-----
- implied < min_implied_overlap (10)          -> reject
- suffix-prefix: |implied - overlap_length| <= max(tolerance_floor,
  tolerance_fraction * implied)               -> keep
- containment: one declared range nested in the other -> keep

Surviving overlaps are annotated with the intersection as genomic_start/end.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from backend.app.config.config_assembly import AssemblyParameters, load_default_params
from backend.app.core.models.reads import (
    OverlapCandidate,
    OverlapType,
    SequenceRead,
    ValidatedOverlap,
)


def range_intersection(a: Tuple[int, int], b: Tuple[int, int]) -> Tuple[int, int, int]:
    """(start, end, length) of two inclusive ranges; length 0 when disjoint."""
    start = max(a[0], b[0])
    end = min(a[1], b[1])
    return start, end, max(0, end - start + 1)


def _nested(inner: Tuple[int, int], outer: Tuple[int, int]) -> bool:
    return outer[0] <= inner[0] and inner[1] <= outer[1]


class PositionValidator:
    def __init__(
        self,
        params: Optional[AssemblyParameters] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.params = params or load_default_params()
        self.log = logger or logging.getLogger(__name__)

    def tolerance(self, implied_length: int) -> float:
        return max(float(self.params.tolerance_floor), self.params.tolerance_fraction * implied_length)

    def check(self, cand: OverlapCandidate, reads: Dict[str, SequenceRead]) -> Optional[ValidatedOverlap]:
        src = reads.get(cand.source)
        dst = reads.get(cand.target)
        if src is None or dst is None:
            self.log.warning("Overlap %s->%s references an unknown read; skipped", cand.source, cand.target)
            return None

        r_src, r_dst = src.declared_range, dst.declared_range
        g_start, g_end, implied = range_intersection(r_src, r_dst)

        if implied < self.params.min_implied_overlap:
            self.log.debug(
                "Reject %s %s->%s: implied overlap %d bp < %d",
                cand.overlap_type.value, cand.source, cand.target, implied, self.params.min_implied_overlap,
            )
            return None

        if cand.overlap_type is OverlapType.SUFFIX_PREFIX:
            diff = abs(implied - cand.overlap_length)
            ok = diff <= self.tolerance(implied)
            reason = f"length diff {diff} bp vs tolerance {self.tolerance(implied):.1f}"
        elif cand.overlap_type is OverlapType.CONTAINMENT:
            ok = _nested(r_dst, r_src) or _nested(r_src, r_dst)
            reason = f"ranges {r_src} / {r_dst} not nested"
        else:  # pragma: no cover - closed enum
            raise ValueError(f"Unknown overlap type: {cand.overlap_type}")

        if not ok:
            self.log.debug("Reject %s %s->%s: %s", cand.overlap_type.value, cand.source, cand.target, reason)
            return None

        return ValidatedOverlap(
            candidate=cand,
            genomic_start=g_start,
            genomic_end=g_end,
            implied_length=implied,
        )

    def validate(
        self,
        candidates: Iterable[OverlapCandidate],
        reads: Sequence[SequenceRead],
    ) -> List[ValidatedOverlap]:
        by_name = {r.name: r for r in reads}
        candidates = list(candidates)
        kept: List[ValidatedOverlap] = []
        for cand in candidates:
            v = self.check(cand, by_name)
            if v is not None:
                kept.append(v)
        self.log.info("Position validator: kept %d of %d candidate(s)", len(kept), len(candidates))
        return kept
