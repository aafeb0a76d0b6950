# File: backend/tests/test_assembly_api.py
# Version: v0.1.0
"""
Tests for the assembly API (TestClient + in-memory httpx.AsyncClient).
"""

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from backend.app.main import app

client = TestClient(app)

SCENARIO = {
    "reads": [
        {"name": "seq1", "sequence": ">seq1\nACGTACGT", "strand": "forward", "position": 1},
        {"name": "seq2", "sequence": "acgttttt", "strand": "forward", "position": 5},
    ],
    "min_overlap": 4,
    "similarity_threshold": 0.5,
}


def test_parameters_endpoint():
    r = client.get("/api/v1/assembly/parameters")
    assert r.status_code == 200
    body = r.json()
    assert body["min_overlap"] == 20
    assert body["similarity_threshold"] == 0.85


def test_assemble_scenario():
    r = client.post("/api/v1/assembly", json=SCENARIO)
    assert r.status_code == 200
    data = r.json()
    assert data["sequence"] == "ACGTACGTTTTT"
    assert data["length"] == 12
    assert data["boundaries"] == [1, 12]
    assert data["coverage"] == 100.0
    assert data["gap_bases"] == 0
    assert data["avg_depth"] == pytest.approx(16 / 12)
    assert data["fasta_header"].startswith("Enhanced_Assembly_12bp_")
    assert data["stats"]["length"] == 12
    assert [p["name"] for p in data["placements"]] == ["seq1", "seq2"]


def test_assemble_invalid_parameters_are_lenient():
    payload = dict(SCENARIO, min_overlap=-1, similarity_threshold=7)
    r = client.post("/api/v1/assembly", json=payload)
    assert r.status_code == 200
    assert r.json()["sequence"] == "ACGTACGTTTTT"


def test_assemble_empty_reads_is_422():
    r = client.post("/api/v1/assembly", json={"reads": []})
    assert r.status_code == 422
    assert "No sequences" in r.json()["detail"]


def test_schema_validation():
    bad = {"reads": [{"name": "", "sequence": "ACGT", "strand": "sideways", "position": 1}]}
    r = client.post("/api/v1/assembly", json=bad)
    assert r.status_code == 422


def test_fasta_endpoint():
    r = client.post("/api/v1/assembly/fasta", json=SCENARIO)
    assert r.status_code == 200
    lines = r.text.splitlines()
    assert lines[0].startswith(">Enhanced_Assembly_12bp_")
    assert lines[1] == "ACGTACGTTTTT"


@pytest.mark.asyncio
async def test_assemble_async_client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post("/api/v1/assembly", json=SCENARIO)
    assert resp.status_code == 200
    assert resp.json()["method"] in ("overlap_guided", "position_guided")
