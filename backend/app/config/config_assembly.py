# File: backend/app/config/config_assembly.py
# Version: v0.2.0
"""
Assembly parameters: Pydantic model + JSON loader.

- Defaults live in backend/app/config/assembly_param_default.json.
- `load_params(path)` reads a user JSON file; missing keys fall back to defaults.
- `resolve_parameters(...)` applies per-run overrides (CLI flags, API payload).

Leniency
--------
Invalid `min_overlap` / `similarity_threshold` values (non-numeric, NaN/inf,
<= 0, or a threshold above 1) never raise. They are replaced by the documented
defaults and a warning is logged. The same applies to the other numeric knobs.

Example JSON:

  {
    "min_overlap": 20,
    "similarity_threshold": 0.85,
    "max_overlap_scan": 1000,
    "trim_window": 50,
    "trim_n_fraction": 0.3,
    "tolerance_floor": 50,
    "tolerance_fraction": 0.3,
    "min_implied_overlap": 10
  }
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

_THIS_DIR = Path(__file__).resolve().parent
DEFAULT_FILE = _THIS_DIR / "assembly_param_default.json"

DEFAULT_MIN_OVERLAP = 20
DEFAULT_SIMILARITY_THRESHOLD = 0.85
DEFAULT_MAX_OVERLAP_SCAN = 1000
DEFAULT_TRIM_WINDOW = 50
DEFAULT_TRIM_N_FRACTION = 0.3
DEFAULT_TOLERANCE_FLOOR = 50
DEFAULT_TOLERANCE_FRACTION = 0.3
DEFAULT_MIN_IMPLIED_OVERLAP = 10


def _as_positive_number(value: Any) -> Optional[float]:
    """Return `value` as a finite positive float, or None if it isn't one."""
    if isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(num) or num <= 0:
        return None
    return num


def _lenient_int(value: Any, default: int, name: str) -> int:
    num = _as_positive_number(value)
    if num is None:
        logger.warning("Invalid %s=%r; falling back to default %d", name, value, default)
        return default
    return max(1, int(num))


def _lenient_fraction(value: Any, default: float, name: str) -> float:
    num = _as_positive_number(value)
    if num is None or num > 1.0:
        logger.warning("Invalid %s=%r; falling back to default %.2f", name, value, default)
        return default
    return num


class AssemblyParameters(BaseModel):
    """Tunables of the Sanger assembly engine (see module docstring)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Overlap finder
    min_overlap: int = Field(DEFAULT_MIN_OVERLAP, description="Minimum overlap length (bp)")
    similarity_threshold: float = Field(
        DEFAULT_SIMILARITY_THRESHOLD, description="Minimum per-base similarity in (0, 1]"
    )
    max_overlap_scan: int = Field(DEFAULT_MAX_OVERLAP_SCAN, description="Longest suffix/prefix length tested")

    # Loader / cleaner
    trim_window: int = Field(DEFAULT_TRIM_WINDOW, description="End-trimming window size (bp)")
    trim_n_fraction: float = Field(
        DEFAULT_TRIM_N_FRACTION, description="Windows with N fraction below this are kept"
    )

    # Position validator
    tolerance_floor: int = Field(DEFAULT_TOLERANCE_FLOOR, description="Minimum length tolerance (bp)")
    tolerance_fraction: float = Field(
        DEFAULT_TOLERANCE_FRACTION, description="Length tolerance as a fraction of implied overlap"
    )
    min_implied_overlap: int = Field(
        DEFAULT_MIN_IMPLIED_OVERLAP, description="Implied overlaps shorter than this are always rejected"
    )

    @field_validator("min_overlap", mode="before")
    @classmethod
    def _min_overlap(cls, v: Any) -> int:
        return _lenient_int(v, DEFAULT_MIN_OVERLAP, "min_overlap")

    @field_validator("max_overlap_scan", mode="before")
    @classmethod
    def _max_overlap_scan(cls, v: Any) -> int:
        return _lenient_int(v, DEFAULT_MAX_OVERLAP_SCAN, "max_overlap_scan")

    @field_validator("trim_window", mode="before")
    @classmethod
    def _trim_window(cls, v: Any) -> int:
        return _lenient_int(v, DEFAULT_TRIM_WINDOW, "trim_window")

    @field_validator("tolerance_floor", mode="before")
    @classmethod
    def _tolerance_floor(cls, v: Any) -> int:
        return _lenient_int(v, DEFAULT_TOLERANCE_FLOOR, "tolerance_floor")

    @field_validator("min_implied_overlap", mode="before")
    @classmethod
    def _min_implied_overlap(cls, v: Any) -> int:
        return _lenient_int(v, DEFAULT_MIN_IMPLIED_OVERLAP, "min_implied_overlap")

    @field_validator("similarity_threshold", mode="before")
    @classmethod
    def _similarity_threshold(cls, v: Any) -> float:
        return _lenient_fraction(v, DEFAULT_SIMILARITY_THRESHOLD, "similarity_threshold")

    @field_validator("trim_n_fraction", mode="before")
    @classmethod
    def _trim_n_fraction(cls, v: Any) -> float:
        return _lenient_fraction(v, DEFAULT_TRIM_N_FRACTION, "trim_n_fraction")

    @field_validator("tolerance_fraction", mode="before")
    @classmethod
    def _tolerance_fraction(cls, v: Any) -> float:
        return _lenient_fraction(v, DEFAULT_TOLERANCE_FRACTION, "tolerance_fraction")


def _read_json(path: Path) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_default_params() -> AssemblyParameters:
    """Load defaults from assembly_param_default.json (built-in values if missing)."""
    return AssemblyParameters.model_validate(_read_json(DEFAULT_FILE))


def load_params(path: Optional[Union[str, Path]] = None) -> AssemblyParameters:
    """
    Load parameters from a user JSON file layered over the defaults.
    With no path, return the defaults.
    """
    base = load_default_params()
    if path is None:
        return base
    payload = _read_json(Path(path))
    if not isinstance(payload, dict):
        raise ValueError(f"Assembly parameters must be a JSON object: {path}")
    return AssemblyParameters.model_validate({**base.model_dump(), **payload})


def resolve_parameters(
    min_overlap: Any = None,
    similarity_threshold: Any = None,
    base: Optional[AssemblyParameters] = None,
) -> AssemblyParameters:
    """Apply per-run overrides on top of `base` (defaults if omitted). None means "keep"."""
    params = base or load_default_params()
    overrides = {}
    if min_overlap is not None:
        overrides["min_overlap"] = min_overlap
    if similarity_threshold is not None:
        overrides["similarity_threshold"] = similarity_threshold
    if not overrides:
        return params
    return AssemblyParameters.model_validate({**params.model_dump(), **overrides})


__all__ = [
    "AssemblyParameters",
    "DEFAULT_MIN_OVERLAP",
    "DEFAULT_SIMILARITY_THRESHOLD",
    "load_default_params",
    "load_params",
    "resolve_parameters",
]
