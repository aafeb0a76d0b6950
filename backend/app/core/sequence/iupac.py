# File: backend/app/core/sequence/iupac.py
# Version: v0.2.0
"""
Static IUPAC nucleotide tables and the per-base relations built on them.

- IUPAC_BASES maps every accepted symbol to the set of bases it represents.
- Two symbols are *compatible* when one is an ambiguity code whose base set
  contains the other, plain base (R={A,G} is compatible with A and G).
- N is the gap symbol and is compatible with nothing; N bases don't
  contribute to similarity.
- Per-base similarity: exact match 1.0, compatible 0.5, otherwise 0.0.

v0.2.0
- N and ambiguity-code pairs (R vs D) are no longer compatible.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, FrozenSet

from Bio.Seq import Seq

GAP = "N"

IUPAC_BASES: Dict[str, FrozenSet[str]] = {
    "A": frozenset("A"),
    "C": frozenset("C"),
    "G": frozenset("G"),
    "T": frozenset("T"),
    "R": frozenset("AG"),
    "Y": frozenset("CT"),
    "S": frozenset("GC"),
    "W": frozenset("AT"),
    "K": frozenset("GT"),
    "M": frozenset("AC"),
    "B": frozenset("CGT"),
    "D": frozenset("AGT"),
    "H": frozenset("ACT"),
    "V": frozenset("ACG"),
    "N": frozenset("ACGT"),
}

IUPAC_ALPHABET = frozenset(IUPAC_BASES)
UNAMBIGUOUS = frozenset("ACGT")

EXACT_MATCH_SCORE = 1.0
AMBIGUOUS_MATCH_SCORE = 0.5


def is_unambiguous(symbol: str) -> bool:
    return symbol in UNAMBIGUOUS


@lru_cache(maxsize=None)
def is_compatible(a: str, b: str) -> bool:
    """True if one of `a`, `b` is a non-gap ambiguity code covering the other, plain base."""
    if a == b or GAP in (a, b):
        return False
    if is_unambiguous(a) and b in IUPAC_BASES:
        return a in IUPAC_BASES[b]
    if is_unambiguous(b) and a in IUPAC_BASES:
        return b in IUPAC_BASES[a]
    return False


def base_similarity(a: str, b: str) -> float:
    if a == b:
        return EXACT_MATCH_SCORE
    if is_compatible(a, b):
        return AMBIGUOUS_MATCH_SCORE
    return 0.0


def reverse_complement(seq: str) -> str:
    """IUPAC-aware reverse complement; symbols outside the alphabet become N."""
    cleaned = "".join(c if c in IUPAC_ALPHABET else GAP for c in seq.upper())
    # Biopython complements ambiguity codes too (R<->Y, K<->M, B<->V, D<->H).
    return str(Seq(cleaned).reverse_complement())


__all__ = [
    "GAP",
    "IUPAC_BASES",
    "IUPAC_ALPHABET",
    "UNAMBIGUOUS",
    "is_unambiguous",
    "is_compatible",
    "base_similarity",
    "reverse_complement",
]
