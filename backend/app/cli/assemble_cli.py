# File: backend/app/cli/assemble_cli.py
# Version: v0.3.1

"""
Command-line interface for Sanger read assembly.

The manifest is a CSV with columns `file,name,strand,position` (name optional,
strand defaults to unknown). Relative file paths are resolved against the
manifest's directory.

Outputs in --outdir:
  <prefix>.fasta, <prefix>.json, <prefix>_placements.csv,
  <prefix>_overlaps.csv, <prefix>_report.txt

v0.3.1:
- A non-integer manifest position is reported and exits with status 1.

v0.3.0:
- Optional --start/--end to pin the assembly window.

v0.2.4:
- Backward compatible logging flag: accept both --log-level and legacy --log.
"""

import argparse
import csv
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from backend.app.config.config_assembly import load_params, resolve_parameters
from backend.app.core.assembly.boundary_assembler import NoValidSequencesError
from backend.app.core.config import settings
from backend.app.core.export.csv_exporter import export_csvs
from backend.app.core.export.fasta_exporter import export_assembly_to_fasta
from backend.app.core.export.json_exporter import export_result_to_json
from backend.app.core.export.report_exporter import export_text_report
from backend.app.core.models.reads import ReadInput
from backend.app.core.pipeline.assembly_pipeline import AssemblyPipeline
from backend.app.core.sequence.loader import read_input_from_file

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def read_manifest(path: Path) -> List[ReadInput]:
    """
    Parse the manifest CSV into ReadInputs (reads each referenced sequence file).
    Raises ValueError naming the row when a position is not an integer.
    """
    base = path.parent
    inputs: List[ReadInput] = []
    with path.open("r", newline="", encoding="utf-8") as fh:
        for lineno, row in enumerate(csv.DictReader(fh), start=2):
            raw_file = (row.get("file") or "").strip()
            if not raw_file:
                continue
            fpath = Path(raw_file)
            if not fpath.is_absolute():
                fpath = base / fpath
            raw_pos = (row.get("position") or "").strip() or "1"
            try:
                position = int(raw_pos)
            except ValueError:
                raise ValueError(f"{path}:{lineno}: position must be an integer, got {raw_pos!r}") from None
            inputs.append(
                read_input_from_file(
                    fpath,
                    name=(row.get("name") or "").strip() or None,
                    strand=row.get("strand"),
                    position=position,
                )
            )
    return inputs


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Sanger read assembly CLI")
    p.add_argument("--manifest", required=True, type=Path, help="CSV with file,name,strand,position")
    p.add_argument("--params", required=False, type=Path, help="Assembly parameters JSON")
    p.add_argument("--min-overlap", dest="min_overlap", type=float, default=None,
                   help="Minimum overlap length (default from params, 20)")
    p.add_argument("--threshold", dest="threshold", type=float, default=None,
                   help="Similarity threshold in (0,1] (default from params, 0.85)")
    p.add_argument("--start", type=int, default=None, help="Optional assembly window start (1-based)")
    p.add_argument("--end", type=int, default=None, help="Optional assembly window end (1-based, inclusive)")
    p.add_argument("--outdir", type=Path, default=settings.OUTPUT_DIR, help="Output directory")
    p.add_argument("--prefix", default="assembly", help="Output file prefix")
    # Accept BOTH --log-level and legacy --log (they map to the same dest)
    p.add_argument("--log-level", dest="log_level", default="INFO", choices=LOG_LEVELS,
                   help="Logging level (default: INFO)")
    p.add_argument("--log", dest="log_level", choices=LOG_LEVELS, help=argparse.SUPPRESS)
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))
    log = logging.getLogger("assemble_cli")

    log.info("=== aia assemble ===")
    log.info("MANIFEST=%s | PARAMS=%s | OUTDIR=%s | LOG=%s",
             str(args.manifest), str(args.params) if args.params else "None",
             str(args.outdir), args.log_level)

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    params = resolve_parameters(args.min_overlap, args.threshold, base=load_params(args.params))

    boundaries = None
    if args.start is not None and args.end is not None:
        boundaries = (args.start, args.end)
    elif args.start is not None or args.end is not None:
        log.warning("Both --start and --end are needed to pin the window; using declared span")

    try:
        inputs = read_manifest(args.manifest)
        result = AssemblyPipeline(params, logger=log).run(inputs, boundaries)
    except OSError as e:
        log.error("✗ Cannot read input: %s", e)
        return 1
    except NoValidSequencesError as e:
        log.error("✗ Assembly failed: %s", e)
        return 1
    except ValueError as e:
        log.error("✗ Invalid manifest: %s", e)
        return 1

    prefix = args.prefix
    fasta_path = export_assembly_to_fasta(result, outdir / f"{prefix}.fasta")
    export_result_to_json(result, outdir / f"{prefix}.json")
    export_csvs(result, outdir, prefix=prefix)
    report_path = export_text_report(result, outdir / f"{prefix}_report.txt")

    log.info("✓ Assembled %d bp, coverage %.1f%% (%s)", result.length, result.coverage, result.method)
    print("")
    print(f"  FASTA:  {fasta_path.resolve()}")
    print(f"  Report: {report_path.resolve()}")
    print("")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
