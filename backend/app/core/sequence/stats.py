# File: backend/app/core/sequence/stats.py
# Version: v0.1.1
"""
Summary statistics for an assembled sequence.

- Base composition and GC are percentages over the full length
  (ambiguity codes and gaps count towards the length, not towards any base).
- Molecular weight uses average nucleotide masses minus one water per
  phosphodiester bond.
- Tm uses the Wallace rule up to 14 nt and the basic GC formula above that.
"""

from __future__ import annotations

from typing import Any, Dict

NUCLEOTIDE_MASS = {"A": 331.2, "T": 322.2, "G": 347.2, "C": 307.2}
WATER_MASS = 18.015
WALLACE_MAX_LEN = 14


def base_composition(seq: str) -> Dict[str, float]:
    if not seq:
        return {b: 0.0 for b in "ATGC"}
    n = len(seq)
    return {b: 100.0 * seq.count(b) / n for b in "ATGC"}


def gc_percent(seq: str) -> float:
    if not seq:
        return 0.0
    return 100.0 * (seq.count("G") + seq.count("C")) / len(seq)


def molecular_weight(seq: str) -> float:
    """Approximate single-strand DNA molecular weight (g/mol)."""
    if not seq:
        return 0.0
    mw = sum(seq.count(b) * m for b, m in NUCLEOTIDE_MASS.items())
    return mw - (len(seq) - 1) * WATER_MASS


def basic_tm(seq: str) -> float:
    """
    Wallace rule (2*AT + 4*GC) up to 14 nt, else 64.9 + 41*(GC - 16.4)/len.

    Only plain A/T/G/C are counted; ambiguity codes and N add length but no
    bonds. Bio.SeqUtils.MeltingTemp.Tm_Wallace weights ambiguity codes
    (S as GC, W as AT, N/R/Y/K/M at 3 degrees each), so it would report a
    different Tm for gapped or ambiguous assemblies.
    """
    if not seq:
        return 0.0
    gc = seq.count("G") + seq.count("C")
    at = seq.count("A") + seq.count("T")
    if len(seq) <= WALLACE_MAX_LEN:
        return float(2 * at + 4 * gc)
    return 64.9 + 41.0 * (gc - 16.4) / len(seq)


def sequence_stats(seq: str) -> Dict[str, Any]:
    return {
        "length": len(seq),
        "composition": base_composition(seq),
        "gc_percent": gc_percent(seq),
        "molecular_weight": molecular_weight(seq),
        "melting_temp": basic_tm(seq),
    }
