# File: backend/app/core/export/csv_exporter.py
# Version: v0.3.0
"""
CSV (spreadsheet) exporters for read placements and validated overlaps.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from backend.app.core.export.json_exporter import overlap_to_dict, placement_to_dict
from backend.app.core.models.reads import AssemblyResult

PLACEMENT_HEADERS = [
    "name", "strand", "natural_start", "natural_end",
    "placed_start", "placed_end", "placed_length", "trimmed_left", "trimmed_right",
]
OVERLAP_HEADERS = [
    "source", "target", "overlap_type", "overlap_length", "similarity",
    "genomic_start", "genomic_end", "implied_length",
    "source_start", "source_end", "target_start", "target_end",
]


def _write(path: Path, headers: Sequence[str], rows: List[Dict[str, object]]) -> None:
    # Header is written even when there are no rows, so spreadsheets open cleanly.
    with path.open("w", newline="", encoding="utf-8") as fh:
        w = csv.DictWriter(fh, fieldnames=list(headers), extrasaction="ignore")
        w.writeheader()
        w.writerows(rows)


def export_csvs(result: AssemblyResult, outdir: Path, *, prefix: str = "assembly") -> Tuple[Path, Path]:
    """Write <prefix>_placements.csv and <prefix>_overlaps.csv into `outdir`."""
    placements_csv = outdir / f"{prefix}_placements.csv"
    overlaps_csv = outdir / f"{prefix}_overlaps.csv"
    _write(placements_csv, PLACEMENT_HEADERS, [placement_to_dict(p) for p in result.placements])
    _write(overlaps_csv, OVERLAP_HEADERS, [overlap_to_dict(o) for o in result.overlaps])
    return placements_csv, overlaps_csv
