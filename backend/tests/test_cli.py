# File: backend/tests/test_cli.py
# Version: v0.2.0
"""
CLI smoke tests: manifest in, FASTA/JSON/CSV/report out.
"""

import json

import pytest

from backend.app.cli.assemble_cli import main, read_manifest


def _write_inputs(tmp_path):
    (tmp_path / "a.seq").write_text(">a\nACGTACGT\n", encoding="utf-8")
    (tmp_path / "b.fasta").write_text(";b\nACGTTTTT\n", encoding="utf-8")
    manifest = tmp_path / "reads.csv"
    manifest.write_text(
        "file,name,strand,position\n"
        "a.seq,seq1,forward,1\n"
        "b.fasta,,forward,5\n",
        encoding="utf-8",
    )
    return manifest


def test_read_manifest(tmp_path):
    inputs = read_manifest(_write_inputs(tmp_path))
    assert [ri.name for ri in inputs] == ["seq1", "b"]
    assert inputs[1].position == 5


def test_cli_end_to_end(tmp_path):
    manifest = _write_inputs(tmp_path)
    outdir = tmp_path / "out"
    rc = main([
        "--manifest", str(manifest),
        "--min-overlap", "4",
        "--threshold", "0.5",
        "--outdir", str(outdir),
        "--prefix", "run",
        "--log", "WARNING",
    ])
    assert rc == 0
    fasta = (outdir / "run.fasta").read_text(encoding="utf-8").splitlines()
    assert fasta[0].startswith(">Enhanced_Assembly_12bp_")
    assert fasta[1] == "ACGTACGTTTTT"
    meta = json.loads((outdir / "run.json").read_text(encoding="utf-8"))
    assert meta["coverage"] == 100.0
    for name in ("run_placements.csv", "run_overlaps.csv", "run_report.txt"):
        assert (outdir / name).exists()


def test_cli_missing_file_fails(tmp_path):
    manifest = tmp_path / "reads.csv"
    manifest.write_text("file,name,strand,position\nnope.seq,x,forward,1\n", encoding="utf-8")
    assert main(["--manifest", str(manifest), "--outdir", str(tmp_path / "out")]) == 1


def test_cli_no_reads_fails(tmp_path):
    manifest = tmp_path / "reads.csv"
    manifest.write_text("file,name,strand,position\n", encoding="utf-8")
    assert main(["--manifest", str(manifest), "--outdir", str(tmp_path / "out")]) == 1


def test_read_manifest_rejects_non_integer_position(tmp_path):
    (tmp_path / "a.seq").write_text("ACGT\n", encoding="utf-8")
    manifest = tmp_path / "reads.csv"
    manifest.write_text("file,name,strand,position\na.seq,a,forward,12x\n", encoding="utf-8")
    with pytest.raises(ValueError, match="reads.csv:2"):
        read_manifest(manifest)


def test_cli_bad_position_fails_cleanly(tmp_path, caplog):
    (tmp_path / "a.seq").write_text("ACGT\n", encoding="utf-8")
    manifest = tmp_path / "reads.csv"
    manifest.write_text("file,name,strand,position\na.seq,a,forward,abc\n", encoding="utf-8")
    assert main(["--manifest", str(manifest), "--outdir", str(tmp_path / "out")]) == 1
    assert "Invalid manifest" in caplog.text
