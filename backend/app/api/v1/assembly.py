# File: backend/app/api/v1/assembly.py
# Version: v0.2.0
"""
API router for Sanger read assembly.

GET  /api/v1/assembly/parameters  -> current default AssemblyParameters
POST /api/v1/assembly             -> AssemblyResponse (sequence + metadata)
POST /api/v1/assembly/fasta       -> text/plain FASTA of the assembly

Empty or unusable read sets answer 422 with the engine's message.
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from ...config.config_assembly import AssemblyParameters
from ...core.assembly.boundary_assembler import NoValidSequencesError
from ...schemas.assembly import AssemblyRequest, AssemblyResponse
from ...services.assembly_service import base_parameters, run_request, run_request_fasta, to_response

router = APIRouter(prefix="/v1/assembly", tags=["assembly"])


@router.get("/parameters", response_model=AssemblyParameters)
def get_parameters() -> AssemblyParameters:
    return base_parameters()


@router.post("", response_model=AssemblyResponse)
def assemble_reads(payload: AssemblyRequest) -> AssemblyResponse:
    """Clean, overlap, validate and assemble the submitted reads."""
    try:
        run = run_request(payload)
    except NoValidSequencesError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return to_response(run)


@router.post("/fasta", response_class=PlainTextResponse)
def assemble_reads_fasta(payload: AssemblyRequest) -> str:
    try:
        return run_request_fasta(payload)
    except NoValidSequencesError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
