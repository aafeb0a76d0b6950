# File: backend/tests/test_overlap_finder.py
# Version: v0.1.0
"""
Unit tests for the pairwise overlap finder.
"""

import pytest

from backend.app.config.config_assembly import AssemblyParameters
from backend.app.core.assembly.overlap_finder import (
    OverlapFinder,
    calculate_simple_similarity,
    find_containment_overlap,
    find_suffix_prefix_overlap,
)
from backend.app.core.models.reads import OverlapType, Strand
from backend.app.core.sequence.iupac import reverse_complement

from conftest import make_read


def test_similarity_exact_and_ambiguous():
    assert calculate_simple_similarity("ACGT", "ACGT") == 1.0
    assert calculate_simple_similarity("ACGT", "ACGA") == 0.75
    assert calculate_simple_similarity("ARGT", "AAGT") == pytest.approx(3.5 / 4)
    assert calculate_simple_similarity("", "") == 0.0


def test_gap_bases_do_not_score():
    assert calculate_simple_similarity("NNNN", "ACGT") == 0.0
    assert calculate_simple_similarity("ACNN", "ACGT") == 0.5


def test_all_gap_suffix_forms_no_overlap():
    assert find_suffix_prefix_overlap("GGGGGGGGNNNN", "ACGTCCCCCCCC", min_overlap=4, threshold=0.5) is None


@pytest.mark.parametrize("x,y", [("ARNT", "GAYT"), ("ACGTN", "TGCAA"), ("KMRS", "GCAC")])
def test_similarity_is_symmetric(x, y):
    assert calculate_simple_similarity(x, y) == calculate_simple_similarity(y, x)


def test_similarity_requires_equal_lengths():
    with pytest.raises(ValueError):
        calculate_simple_similarity("ACG", "AC")


def test_suffix_prefix_scenario():
    cand = find_suffix_prefix_overlap("ACGTACGT", "ACGTTTTT", min_overlap=4, threshold=0.5)
    assert cand is not None
    assert cand.overlap_type is OverlapType.SUFFIX_PREFIX
    assert cand.overlap_length == 4
    assert cand.similarity == 1.0
    assert cand.source_segment == "ACGT" and cand.target_segment == "ACGT"
    assert (cand.source_start, cand.source_end) == (4, 8)
    assert (cand.target_start, cand.target_end) == (0, 4)


def test_suffix_prefix_ties_prefer_smallest_length():
    # Every length scores 1.0 on a homopolymer; the first tested length wins.
    cand = find_suffix_prefix_overlap("A" * 30, "A" * 30, min_overlap=5, threshold=0.9)
    assert cand.overlap_length == 5


def test_suffix_prefix_below_threshold():
    assert find_suffix_prefix_overlap("AAAAAAAA", "CCCCCCCC", min_overlap=4, threshold=0.5) is None


def test_suffix_prefix_min_overlap_longer_than_reads():
    assert find_suffix_prefix_overlap("ACGT", "ACGT", min_overlap=10, threshold=0.5) is None


def test_suffix_prefix_scan_limit():
    a = "C" * 40 + "GATTACAGCT"
    b = "GATTACAGCT" + "G" * 40
    assert find_suffix_prefix_overlap(a, b, min_overlap=4, threshold=0.9, max_scan=8) is None
    assert find_suffix_prefix_overlap(a, b, min_overlap=4, threshold=0.9, max_scan=10).overlap_length == 10


def test_containment_exact_substring():
    a = "GGGACGTACCC"
    b = "ACGTA"
    cand = find_containment_overlap(a, b)
    assert cand is not None
    assert cand.similarity == 1.0
    assert cand.overlap_length == len(b)
    assert (cand.source_start, cand.source_end) == (3, 8)


def test_containment_rejects_longer_or_empty():
    assert find_containment_overlap("ACG", "ACGT") is None
    assert find_containment_overlap("ACGT", "") is None


def test_containment_first_best_position():
    cand = find_containment_overlap("ACGTTTACGT", "ACGT", threshold=1.0)
    assert cand.source_start == 0


def test_find_all_reports_both_directions_and_containment():
    finder = OverlapFinder(AssemblyParameters(min_overlap=4, similarity_threshold=0.9))
    reads = [
        make_read("r1", "GGGGACGTAC", 1),
        make_read("r2", "ACGTACCCCC", 5),
        make_read("r3", "GACGT", 3),
    ]
    cands = finder.find_all(reads)
    kinds = {(c.source, c.target, c.overlap_type) for c in cands}
    assert ("r1", "r2", OverlapType.SUFFIX_PREFIX) in kinds
    assert ("r1", "r3", OverlapType.CONTAINMENT) in kinds
    for c in cands:
        assert c.overlap_length >= 4
        assert c.similarity >= 0.9


def test_find_all_uses_oriented_reads():
    finder = OverlapFinder(AssemblyParameters(min_overlap=4, similarity_threshold=1.0))
    fwd = make_read("f", "TTTTTACGGA", 1)
    # Reverse read declared on the opposite strand: its reverse complement starts with ACGGA.
    rev = make_read("r", reverse_complement("ACGGACCCCC"), 15, Strand.REVERSE)
    cands = finder.find_all([fwd, rev])
    sp = [c for c in cands if c.overlap_type is OverlapType.SUFFIX_PREFIX and c.source == "f"]
    assert sp and sp[0].overlap_length == 5


def test_find_all_empty_and_skips_empty_reads():
    finder = OverlapFinder()
    assert finder.find_all([]) == []
    assert finder.find_all([make_read("e", "", 1), make_read("x", "ACGT" * 10, 1)]) == []
