# File: backend/app/services/assembly_service.py
# Version: v0.2.0
"""
Glue between the API schemas and the assembly pipeline.

Every call builds its own pipeline run, so requests share no state.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from backend.app.config.config_assembly import AssemblyParameters, load_params, resolve_parameters
from backend.app.core.config import settings
from backend.app.core.export.fasta_exporter import assembly_header, assembly_to_fasta_text
from backend.app.core.export.json_exporter import overlap_to_dict, placement_to_dict
from backend.app.core.models.reads import ReadInput, Strand
from backend.app.core.pipeline.assembly_pipeline import AssemblyPipeline, PipelineRun
from backend.app.core.sequence.stats import sequence_stats
from backend.app.schemas.assembly import (
    AssemblyRequest,
    AssemblyResponse,
    OverlapOut,
    PlacementOut,
    SequenceStatsOut,
)


def base_parameters() -> AssemblyParameters:
    """Server-side defaults (ASSEMBLY_PARAMS_PATH if configured, else built-in)."""
    return load_params(settings.ASSEMBLY_PARAMS_PATH)


def _inputs(payload: AssemblyRequest) -> List[ReadInput]:
    return [
        ReadInput(name=r.name, text=r.sequence, strand=Strand.parse(r.strand), position=r.position)
        for r in payload.reads
    ]


def run_request(payload: AssemblyRequest) -> PipelineRun:
    """Run the pipeline for one request. Raises NoValidSequencesError on empty input."""
    params = resolve_parameters(payload.min_overlap, payload.similarity_threshold, base=base_parameters())
    boundaries: Optional[Tuple[int, int]] = tuple(payload.boundaries) if payload.boundaries else None
    return AssemblyPipeline(params).run_detailed(_inputs(payload), boundaries)


def to_response(run: PipelineRun, timestamp: Optional[datetime] = None) -> AssemblyResponse:
    res = run.result
    return AssemblyResponse(
        fasta_header=assembly_header(res.length, timestamp),
        sequence=res.sequence,
        length=res.length,
        expected_length=res.expected_length,
        real_bases=res.real_bases,
        gap_bases=res.gap_bases,
        coverage=res.coverage,
        avg_depth=res.avg_depth,
        boundaries=res.boundaries,
        method=res.method,
        conflicts=res.conflicts,
        unresolved_conflicts=res.unresolved_conflicts,
        overlaps=[OverlapOut.model_validate(overlap_to_dict(o)) for o in res.overlaps],
        placements=[PlacementOut.model_validate(placement_to_dict(p)) for p in res.placements],
        dropped_reads=list(run.dropped),
        warnings=list(res.warnings),
        stats=SequenceStatsOut.model_validate(sequence_stats(res.sequence)),
    )


def run_request_fasta(payload: AssemblyRequest) -> str:
    return assembly_to_fasta_text(run_request(payload).result)
