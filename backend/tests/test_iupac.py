# File: backend/tests/test_iupac.py
# Version: v0.2.0
"""
IUPAC table: compatibility, per-base similarity, reverse complement.
"""

import pytest

from backend.app.core.sequence.iupac import (
    base_similarity,
    is_compatible,
    is_unambiguous,
    reverse_complement,
)


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("R", "A", True),
        ("A", "R", True),
        ("N", "C", False),  # N is the gap symbol
        ("C", "N", False),
        ("R", "D", False),  # two ambiguity codes, even when nested
        ("D", "T", True),
        ("A", "G", False),
        ("R", "Y", False),
        ("A", "A", False),  # equal symbols are a match, not "compatible"
    ],
)
def test_compatibility(a, b, expected):
    assert is_compatible(a, b) is expected


def test_base_similarity_scores():
    assert base_similarity("A", "A") == 1.0
    assert base_similarity("N", "N") == 1.0
    assert base_similarity("R", "G") == 0.5
    assert base_similarity("A", "T") == 0.0
    assert base_similarity("N", "A") == 0.0
    assert base_similarity("V", "N") == 0.0


def test_unambiguous():
    assert all(is_unambiguous(b) for b in "ACGT")
    assert not any(is_unambiguous(b) for b in "NRYSWKMBDHV")


def test_reverse_complement_iupac():
    assert reverse_complement("AACGR") == "YCGTT"
    assert reverse_complement("acgt") == "ACGT"
    assert reverse_complement("KMBV") == "BVKM"


def test_reverse_complement_unknown_symbols_become_n():
    assert reverse_complement("ACGX") == "NCGT"
