# File: backend/app/core/export/json_exporter.py
# Version: v0.4.0

"""
Export an AssemblyResult (sequence, metadata, overlaps, placements) to JSON.
"""

import json
from pathlib import Path
from typing import Any, Dict

from backend.app.core.models.reads import AssemblyResult, ReadPlacement, ValidatedOverlap
from backend.app.core.sequence.stats import sequence_stats


def overlap_to_dict(ov: ValidatedOverlap) -> Dict[str, Any]:
    c = ov.candidate
    return {
        "source":         c.source,
        "target":         c.target,
        "overlap_type":   c.overlap_type.value,
        "overlap_length": c.overlap_length,
        "similarity":     round(c.similarity, 4),
        "source_start":   c.source_start,
        "source_end":     c.source_end,
        "target_start":   c.target_start,
        "target_end":     c.target_end,
        "source_segment": c.source_segment,
        "target_segment": c.target_segment,
        "genomic_start":  ov.genomic_start,
        "genomic_end":    ov.genomic_end,
        "implied_length": ov.implied_length,
    }


def placement_to_dict(p: ReadPlacement) -> Dict[str, Any]:
    return {
        "name":          p.name,
        "strand":        p.strand.value,
        "natural_start": p.natural_start,
        "natural_end":   p.natural_end,
        "placed_start":  p.placed_start,
        "placed_end":    p.placed_end,
        "placed_length": p.placed_length,
        "trimmed_left":  p.trimmed_left,
        "trimmed_right": p.trimmed_right,
    }


def result_to_dict(result: AssemblyResult) -> Dict[str, Any]:
    return {
        "sequence":             result.sequence,
        "length":               result.length,
        "expected_length":      result.expected_length,
        "real_bases":           result.real_bases,
        "gap_bases":            result.gap_bases,
        "coverage":             round(result.coverage, 4),
        "avg_depth":            round(result.avg_depth, 4),
        "boundaries":           list(result.boundaries),
        "method":               result.method,
        "conflicts":            result.conflicts,
        "unresolved_conflicts": result.unresolved_conflicts,
        "warnings":             list(result.warnings),
        "stats":                sequence_stats(result.sequence),
        "overlaps":             [overlap_to_dict(o) for o in result.overlaps],
        "placements":           [placement_to_dict(p) for p in result.placements],
    }


def export_result_to_json(result: AssemblyResult, json_path: Path) -> Dict[str, Any]:
    payload = result_to_dict(result)
    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return payload
