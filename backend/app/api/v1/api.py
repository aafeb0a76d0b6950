# File: backend/app/api/v1/api.py
# Version: v0.8.0
"""
v1 API aggregator.

Routers included under /api:
- health
- assembly (Sanger read assembly + FASTA export)
"""
from __future__ import annotations

from fastapi import APIRouter

from . import assembly as assembly_router
from . import health as health_router

api_router = APIRouter()
api_router.include_router(health_router.router)
api_router.include_router(assembly_router.router)
