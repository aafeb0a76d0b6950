# File: backend/app/core/export/report_exporter.py
# Version: v0.1.0
"""
Plain-text assembly summary for display or download.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from backend.app.core.models.reads import AssemblyResult
from backend.app.core.sequence.stats import sequence_stats


def render_text_report(result: AssemblyResult, title: str = "Sanger assembly report") -> str:
    stats = sequence_stats(result.sequence)
    lo, hi = result.boundaries
    lines: List[str] = [
        title,
        "=" * len(title),
        f"Method:            {result.method}",
        f"Boundaries:        {lo}-{hi}",
        f"Length:            {result.length} bp (expected {result.expected_length} bp)",
        f"Real bases:        {result.real_bases}",
        f"Gap bases (N):     {result.gap_bases}",
        f"Coverage:          {result.coverage:.2f}%",
        f"Mean read depth:   {result.avg_depth:.2f}x",
        f"Conflicts:         {result.conflicts} ({result.unresolved_conflicts} first-writer-wins)",
        f"GC content:        {stats['gc_percent']:.2f}%",
        f"Molecular weight:  {stats['molecular_weight']:.1f} g/mol",
        f"Tm (basic):        {stats['melting_temp']:.1f} C",
        "",
        f"Reads ({len(result.placements)}):",
    ]
    for p in result.placements:
        trim = ""
        if p.trimmed_left or p.trimmed_right:
            trim = f"  [trimmed {p.trimmed_left}/{p.trimmed_right}]"
        lines.append(
            f"  {p.name:<20} {p.strand.value:<8} {p.natural_start}-{p.natural_end}{trim}"
        )

    lines.append("")
    lines.append(f"Validated overlaps ({len(result.overlaps)}):")
    if not result.overlaps:
        lines.append("  none (position-guided assembly)")
    for o in result.overlaps:
        lines.append(
            f"  {o.source} -> {o.target}  {o.overlap_type.value}  {o.overlap_length} bp  "
            f"sim={o.similarity:.3f}  genomic {o.genomic_start}-{o.genomic_end}"
        )

    if result.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  - {w}" for w in result.warnings)

    return "\n".join(lines) + "\n"


def export_text_report(result: AssemblyResult, path: Path) -> Path:
    path.write_text(render_text_report(result), encoding="utf-8")
    return path
