# File: backend/app/core/pipeline/assembly_pipeline.py
# Version: v0.3.0
"""
Single-pass Sanger assembly pipeline:

    loader/cleaner -> overlap finder -> position validator -> assembler

Each `run()` owns its inputs and its assembly buffer; nothing is shared
between runs, so one pipeline instance may serve many requests.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from backend.app.config.config_assembly import AssemblyParameters, load_default_params, resolve_parameters
from backend.app.core.assembly.boundary_assembler import BoundaryAssembler, NoValidSequencesError
from backend.app.core.assembly.overlap_finder import OverlapFinder
from backend.app.core.assembly.position_validator import PositionValidator
from backend.app.core.models.reads import (
    AssemblyResult,
    OverlapCandidate,
    ReadInput,
    SequenceRead,
)
from backend.app.core.sequence.loader import load_reads


@dataclass
class PipelineRun:
    """Everything one run produced, stage by stage."""
    reads:      List[SequenceRead]
    candidates: List[OverlapCandidate]
    result:     AssemblyResult
    dropped:    List[str] = field(default_factory=list)  # reads empty after cleaning


def _unique_names(inputs: Sequence[ReadInput]) -> List[ReadInput]:
    """Suffix repeated display names (#2, #3, ...) so overlaps can refer to reads by name."""
    seen: Counter = Counter()
    out: List[ReadInput] = []
    for ri in inputs:
        seen[ri.name] += 1
        if seen[ri.name] > 1:
            ri = ReadInput(name=f"{ri.name}#{seen[ri.name]}", text=ri.text, strand=ri.strand, position=ri.position)
        out.append(ri)
    return out


class AssemblyPipeline:
    def __init__(
        self,
        params: Optional[AssemblyParameters] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.params = params or load_default_params()
        self.log = logger or logging.getLogger(__name__)
        self.finder = OverlapFinder(self.params, logger=self.log)
        self.validator = PositionValidator(self.params, logger=self.log)
        self.assembler = BoundaryAssembler(logger=self.log)

    def run_detailed(
        self,
        inputs: Iterable[ReadInput],
        boundaries: Optional[Tuple[int, int]] = None,
    ) -> PipelineRun:
        inputs = _unique_names(list(inputs))
        if not inputs:
            raise NoValidSequencesError("No sequences supplied")

        self.log.info("Loading %d read(s)", len(inputs))
        loaded = load_reads(inputs, self.params)

        reads = [r for r in loaded if len(r) > 0]
        dropped = [r.name for r in loaded if len(r) == 0]
        for name in dropped:
            self.log.warning("Read %s is empty after cleaning; excluded from assembly", name)
        if not reads:
            raise NoValidSequencesError("No valid sequences after cleaning")

        candidates = self.finder.find_all(reads)
        validated = self.validator.validate(candidates, reads)
        result = self.assembler.assemble(reads, validated, boundaries)
        return PipelineRun(reads=reads, candidates=candidates, result=result, dropped=dropped)

    def run(
        self,
        inputs: Iterable[ReadInput],
        boundaries: Optional[Tuple[int, int]] = None,
    ) -> AssemblyResult:
        return self.run_detailed(inputs, boundaries).result


def run_assembly(
    inputs: Iterable[ReadInput],
    min_overlap: Any = None,
    similarity_threshold: Any = None,
    boundaries: Optional[Tuple[int, int]] = None,
    params: Optional[AssemblyParameters] = None,
    logger: Optional[logging.Logger] = None,
) -> AssemblyResult:
    """One-shot helper; invalid parameter values fall back to defaults."""
    resolved = resolve_parameters(min_overlap, similarity_threshold, base=params)
    return AssemblyPipeline(resolved, logger=logger).run(inputs, boundaries)
