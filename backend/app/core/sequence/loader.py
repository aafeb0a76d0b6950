# File: backend/app/core/sequence/loader.py
# Version: v0.2.2
"""
Sequence loader/cleaner for Sanger reads.

Cleaning:
- Header lines ('>' or ';') are dropped.
- Only IUPAC nucleotide symbols survive (case-insensitive, uppercased).

End trimming:
- Trailing pass: walk windows aligned from the 3' end; the first window whose
  N fraction is below `n_fraction` is kept along with everything before it.
- Leading pass: the same from the 5' end on what is left.
- No qualifying window means the read degenerates to "" (not an error).

v0.2.1
- Files are decoded with errors="replace" so stray bytes from sequencer
  exports do not abort a load; they are removed by cleaning anyway.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from backend.app.config.config_assembly import AssemblyParameters, load_default_params
from backend.app.core.models.reads import ReadInput, SequenceRead, Strand
from backend.app.core.sequence.iupac import GAP, IUPAC_ALPHABET

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".seq", ".fasta", ".fa", ".txt")
HEADER_PREFIXES = (">", ";")


def clean_sequence_text(text: str) -> str:
    """Extract uppercase IUPAC symbols from raw text, ignoring header lines."""
    out: List[str] = []
    for line in (text or "").splitlines():
        line = line.strip()
        if not line or line.startswith(HEADER_PREFIXES):
            continue
        out.extend(c for c in line.upper() if c in IUPAC_ALPHABET)
    return "".join(out)


def _n_fraction(chunk: str) -> float:
    return chunk.count(GAP) / len(chunk) if chunk else 1.0


def _trim_trailing(seq: str, window: int, n_fraction: float) -> str:
    end = len(seq)
    while end > 0:
        start = max(0, end - window)
        if _n_fraction(seq[start:end]) < n_fraction:
            return seq[:end]
        end = start
    return ""


def _trim_leading(seq: str, window: int, n_fraction: float) -> str:
    start = 0
    while start < len(seq):
        end = min(len(seq), start + window)
        if _n_fraction(seq[start:end]) < n_fraction:
            return seq[start:]
        start = end
    return ""


def trim_low_quality_ends(seq: str, window: int = 50, n_fraction: float = 0.3) -> str:
    """Trim N-rich windows from both ends (trailing first, then leading)."""
    if not seq:
        return ""
    trimmed = _trim_trailing(seq, window, n_fraction)
    return _trim_leading(trimmed, window, n_fraction)


def _read_text(p: Path) -> str:
    if p.suffix.lower() not in SUPPORTED_EXTENSIONS:
        logger.debug("Unexpected extension for %s; parsing as plain text", p.name)
    with p.open("r", encoding="utf-8", errors="replace") as fh:
        return fh.read()


def read_sequence_file(path: Union[str, Path]) -> str:
    """
    Read a .seq/.fasta/.fa/.txt file and return its cleaned (untrimmed) bases.
    Raises OSError when the file cannot be opened.
    """
    return clean_sequence_text(_read_text(Path(path)))


def load_read(read_input: ReadInput, params: Optional[AssemblyParameters] = None) -> SequenceRead:
    """Clean + trim one raw read. An empty result is returned as a zero-length read."""
    params = params or load_default_params()
    cleaned = clean_sequence_text(read_input.text)
    trimmed = trim_low_quality_ends(cleaned, params.trim_window, params.trim_n_fraction)
    if len(trimmed) != len(cleaned):
        logger.info(
            "Read %s: trimmed %d low-quality base(s) (%d -> %d bp)",
            read_input.name, len(cleaned) - len(trimmed), len(cleaned), len(trimmed),
        )
    return SequenceRead(
        name=read_input.name,
        bases=trimmed,
        strand=Strand.parse(read_input.strand),
        position=int(read_input.position),
    )


def load_reads(
    inputs: Iterable[ReadInput],
    params: Optional[AssemblyParameters] = None,
) -> List[SequenceRead]:
    params = params or load_default_params()
    return [load_read(ri, params) for ri in inputs]


def read_input_from_file(
    path: Union[str, Path],
    *,
    name: Optional[str] = None,
    strand: Union[str, Strand, None] = None,
    position: int = 1,
) -> ReadInput:
    """Build a ReadInput from a sequence file; the display name defaults to the file stem."""
    p = Path(path)
    return ReadInput(
        name=name or p.stem,
        text=_read_text(p),
        strand=Strand.parse(strand),
        position=int(position),
    )
