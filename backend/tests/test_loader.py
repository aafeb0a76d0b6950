# File: backend/tests/test_loader.py
# Version: v0.2.0
"""
Unit tests for the sequence loader/cleaner:
- header stripping and alphabet filtering
- windowed N trimming at both ends
- file reading and zero-length reads
"""

import pytest

from backend.app.core.models.reads import ReadInput, Strand
from backend.app.core.sequence.loader import (
    clean_sequence_text,
    load_read,
    load_reads,
    read_input_from_file,
    read_sequence_file,
    trim_low_quality_ends,
)


def test_clean_drops_headers_and_foreign_characters():
    raw = ">read_1 some header\nacgt xx 12\n;comment line ACGT\nNRYZ\n\n"
    assert clean_sequence_text(raw) == "ACGTNRY"


def test_clean_empty_text():
    assert clean_sequence_text("") == ""
    assert clean_sequence_text(">only a header\n") == ""


def test_trim_is_idempotent_on_clean_sequence():
    seq = "ACGT" * 30
    assert trim_low_quality_ends(seq) == seq
    assert trim_low_quality_ends(trim_low_quality_ends(seq)) == seq


def test_trim_trailing_keeps_whole_qualifying_window():
    seq = "ACGT" * 25 + "N" * 60  # 160 bp
    # [110,160) is all N; [60,110) is 20% N and is kept whole.
    assert trim_low_quality_ends(seq) == "ACGT" * 25 + "N" * 10


def test_trim_leading_run():
    seq = "N" * 50 + "ACGT" * 25
    assert trim_low_quality_ends(seq) == "ACGT" * 25


def test_trim_degenerates_to_empty():
    assert trim_low_quality_ends("N" * 120) == ""
    assert trim_low_quality_ends("NNNAC") == ""


def test_trim_short_sequence_below_threshold_kept():
    assert trim_low_quality_ends("ACGTN") == "ACGTN"


def test_trim_respects_custom_window():
    seq = "ACGTACGTAC" + "NNNNN"
    assert trim_low_quality_ends(seq, window=5, n_fraction=0.3) == "ACGTACGTAC"


def test_read_sequence_file(tmp_path):
    p = tmp_path / "r1.seq"
    p.write_text(">r1\nACGTAC\nGTNN\n", encoding="utf-8")
    assert read_sequence_file(p) == "ACGTACGTNN"


def test_read_sequence_file_missing_raises(tmp_path):
    with pytest.raises(OSError):
        read_sequence_file(tmp_path / "missing.fasta")


def test_read_input_from_file_defaults_name_to_stem(tmp_path):
    p = tmp_path / "clone_7F.fa"
    p.write_text(">x\nACGT\n", encoding="utf-8")
    ri = read_input_from_file(p, strand="-", position=40)
    assert ri.name == "clone_7F"
    assert ri.strand is Strand.REVERSE
    assert ri.position == 40


def test_read_input_from_file_matches_read_sequence_file(tmp_path):
    p = tmp_path / "r2.txt"
    p.write_text(";comment\nacgt-x\nGG\n", encoding="utf-8")
    ri = read_input_from_file(p)
    assert load_read(ri).bases == read_sequence_file(p)
    with pytest.raises(OSError):
        read_input_from_file(tmp_path / "missing.seq")


def test_load_read_empty_is_zero_length_not_error():
    read = load_read(ReadInput(name="blank", text="NNNNNNNN", strand=Strand.FORWARD, position=5))
    assert len(read) == 0
    assert read.name == "blank"


def test_load_reads_empty_list():
    assert load_reads([]) == []
