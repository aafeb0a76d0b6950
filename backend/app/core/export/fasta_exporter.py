# File: backend/app/core/export/fasta_exporter.py
# Version: v0.3.0

"""
FASTA export for assembly results.

- One record, header `>Enhanced_Assembly_<length>bp_<YYYYMMDD_HHMMSS>`.
- Sequence lines wrapped at 80 characters.
"""

from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path
from typing import Optional

from Bio.Seq import Seq
from Bio.SeqIO.FastaIO import FastaWriter
from Bio.SeqRecord import SeqRecord

from backend.app.core.models.reads import AssemblyResult

FASTA_WRAP = 80
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def assembly_header(length: int, timestamp: Optional[datetime] = None) -> str:
    ts = (timestamp or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return f"Enhanced_Assembly_{length}bp_{ts}"


def _record(result: AssemblyResult, timestamp: Optional[datetime]) -> SeqRecord:
    rid = assembly_header(result.length, timestamp)
    return SeqRecord(Seq(result.sequence), id=rid, description="")


def assembly_to_fasta_text(result: AssemblyResult, timestamp: Optional[datetime] = None) -> str:
    handle = io.StringIO()
    FastaWriter(handle, wrap=FASTA_WRAP).write_file([_record(result, timestamp)])
    return handle.getvalue()


def export_assembly_to_fasta(
    result: AssemblyResult,
    fasta_path: Path,
    timestamp: Optional[datetime] = None,
) -> Path:
    with open(fasta_path, "w", encoding="utf-8") as fh:
        FastaWriter(fh, wrap=FASTA_WRAP).write_file([_record(result, timestamp)])
    return fasta_path
