# File: backend/tests/conftest.py
# Version: v0.2.0
"""
Test bootstrap: ensure project root is on sys.path so 'backend.*' imports work.

Also provides small factories for reads and overlap candidates.
"""
import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]  # repo root (../.. from this file)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.app.core.models.reads import (  # noqa: E402
    OverlapCandidate,
    OverlapType,
    SequenceRead,
    Strand,
)


def make_read(name, bases, position, strand=Strand.FORWARD):
    return SequenceRead(name=name, bases=bases, strand=Strand.parse(strand), position=position)


def make_candidate(source, target, length, overlap_type=OverlapType.SUFFIX_PREFIX, similarity=1.0):
    seg = "A" * length
    return OverlapCandidate(
        source=source,
        target=target,
        overlap_type=overlap_type,
        overlap_length=length,
        source_segment=seg,
        target_segment=seg,
        similarity=similarity,
        source_start=0,
        source_end=length,
        target_start=0,
        target_end=length,
    )


@pytest.fixture
def reference_400():
    rng = random.Random(7)
    return "".join(rng.choice("ACGT") for _ in range(400))
