# File: backend/app/schemas/assembly.py
# Version: v0.2.0
"""
Pydantic schemas for the Sanger assembly API.

`min_overlap` / `similarity_threshold` are deliberately unconstrained here:
out-of-range values are replaced by defaults by the engine instead of being
rejected with 422.
"""

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, constr


class ReadPayload(BaseModel):
    """One Sanger read as pasted/uploaded by the user."""
    name: constr(strip_whitespace=True, min_length=1) = Field(..., description="Display name of the read.")
    sequence: str = Field(
        ...,
        description="Raw sequence text (FASTA headers '>'/';' and non-IUPAC characters are ignored).",
        examples=[">read1\nACGTACGT..."],
    )
    strand: Literal["forward", "reverse", "unknown"] = Field("unknown", description="Declared strand.")
    position: int = Field(..., description="Declared 1-based position of the 5' (forward) or 3' (reverse) end.")


class AssemblyRequest(BaseModel):
    reads: List[ReadPayload] = Field(default_factory=list)
    min_overlap: Optional[float] = Field(None, description="Minimum overlap length (default 20).")
    similarity_threshold: Optional[float] = Field(None, description="Similarity threshold in (0, 1] (default 0.85).")
    boundaries: Optional[Tuple[int, int]] = Field(
        None, description="Optional explicit [start, end] window (1-based, inclusive)."
    )


class OverlapOut(BaseModel):
    source: str
    target: str
    overlap_type: Literal["suffix-prefix", "containment"]
    overlap_length: int
    similarity: float
    genomic_start: int
    genomic_end: int
    implied_length: int


class PlacementOut(BaseModel):
    name: str
    strand: str
    natural_start: int
    natural_end: int
    placed_start: int
    placed_end: int
    trimmed_left: int = 0
    trimmed_right: int = 0


class SequenceStatsOut(BaseModel):
    length: int
    composition: Dict[str, float]
    gc_percent: float
    molecular_weight: float
    melting_temp: float


class AssemblyResponse(BaseModel):
    fasta_header: str
    sequence: str
    length: int = Field(..., ge=0)
    expected_length: int = Field(..., ge=0)
    real_bases: int = Field(..., ge=0)
    gap_bases: int = Field(..., ge=0)
    coverage: float = Field(..., ge=0, le=100)
    avg_depth: float = Field(0.0, ge=0, description="Mean read depth over covered positions")
    boundaries: Tuple[int, int]
    method: Literal["overlap_guided", "position_guided"]
    conflicts: int = 0
    unresolved_conflicts: int = 0
    overlaps: List[OverlapOut] = Field(default_factory=list)
    placements: List[PlacementOut] = Field(default_factory=list)
    dropped_reads: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    stats: SequenceStatsOut
