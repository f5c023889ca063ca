#!/usr/bin/env python3
# scripts/bulk_compliance.py
# -*- coding: utf-8 -*-

"""
Bulk compliance check for weigh tickets
=======================================

Given a CSV with one weigh ticket per row, this script will:

  1. Parse axle weights/spacings for every row.
  2. Check each vehicle against its jurisdiction (federal when blank,
     federal fallback for unknown codes).
  3. Write the input rows plus verdict columns to an output CSV.

Input columns (case-insensitive)
--------------------------------
- axle_weights  (required) weights separated by ';' or '|',
                e.g. "12,000 lbs; 17000; 17000; 17000; 17000"
- axle_spacing  (required) spacings in ft, same separators
- state         (optional) jurisdiction code
- vehicle_type  (optional) label
- ticket_id     (optional) carried through

Rows that cannot be parsed are kept in the output with an 'error' column;
they never abort the run.
"""

from __future__ import annotations

# ───────────────────── path bootstrap (must be first) ─────────────────────
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]  # repo root (one level above /scripts)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
# ──────────────────────────────────────────────────────────────────────────

import argparse
import json
import logging
import re
from functools import partial
from typing import Any, Dict, List, Optional

import pandas as pd

from weightcheck.compliance.advisories import (
      STATUS_NON_COMPLIANT
    , STATUS_WARNING
    , assess_compliance
    , parse_weight
)
from weightcheck.core.config import get_compliance_defaults
from weightcheck.fleet.vehicle_specs import build_vehicle_config
from weightcheck.infra.logging import get_current_log_path, init_logging, log_banner


log = logging.getLogger(__name__)

_LIST_SPLIT = re.compile(r"[;|]")

RESULT_COLUMNS = [
      "jurisdiction"
    , "status"
    , "is_compliant"
    , "gross_weight"
    , "max_allowed_weight"
    , "over_weight"
    , "violation_count"
    , "violations"
    , "error"
]


# ───────────────────────────────── parser / CLI ────────────────────────────
def _build_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser for the bulk compliance runner.
    """
    parser = argparse.ArgumentParser(
        description=(
            "Check every weigh ticket in a CSV against federal/state weight limits\n"
            "and write the verdicts to an output CSV."
        )
    )

    parser.add_argument(
          "--input-csv"
        , type=Path
        , required=True
        , help="CSV with axle_weights / axle_spacing columns (one ticket per row)."
    )
    parser.add_argument(
          "--output-csv"
        , type=Path
        , default=None
        , help="Output CSV. Default: <input>_compliance.csv next to the input."
    )
    parser.add_argument(
          "--default-state"
        , default=get_compliance_defaults().federal_code
        , help="Jurisdiction used when a row has no state. Default: federal."
    )
    parser.add_argument(
          "--warning-ratio"
        , type=float
        , default=get_compliance_defaults().warning_ratio
        , help="Fraction of a limit that triggers a warning."
    )
    parser.add_argument(
          "--write-log"
        , action="store_true"
        , help="Also write a per-run log file under logs/."
    )
    parser.add_argument(
          "--log-level"
        , default="INFO"
        , choices=["DEBUG", "INFO", "WARNING", "ERROR"]
        , help="Logging level for this bulk run."
    )

    return parser


# ───────────────────────────────── row helpers ─────────────────────────────
def _split_numbers(raw: Any, *, parse=float) -> List[float]:
    """
    "12,000 lbs; 17000 | 17000" -> [12000.0, 17000.0, 17000.0]
    """
    if raw is None or (isinstance(raw, float) and pd.isna(raw)):
        return []
    parts = [p.strip() for p in _LIST_SPLIT.split(str(raw)) if p.strip()]
    return [parse(p) for p in parts]


def _cell(row: Dict[str, Any], col: Optional[str], default: str = "") -> str:
    if col is None:
        return default
    v = row.get(col)
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return default
    return str(v).strip() or default


def _evaluate_row(
      row: Dict[str, Any]
    , cols: Dict[str, Optional[str]]
    , *
    , default_state: str
    , warning_ratio: float
) -> Dict[str, Any]:
    state = _cell(row, cols["state"], default_state)
    out: Dict[str, Any] = {c: None for c in RESULT_COLUMNS}

    try:
        weights = _split_numbers(row.get(cols["axle_weights"]), parse=partial(parse_weight, strict=True))
        spacing = _split_numbers(row.get(cols["axle_spacing"]))
        vehicle = build_vehicle_config(
              _cell(row, cols["vehicle_type"], "vehicle")
            , axle_weights=weights
            , axle_spacing=spacing
        )
        assessment = assess_compliance(vehicle, state, warning_ratio=warning_ratio)
    except ValueError as e:  # InvalidVehicleConfiguration included
        out["jurisdiction"] = state
        out["error"] = str(e)
        return out

    result = assessment.result
    out.update(
          jurisdiction=result.jurisdiction
        , status=assessment.status
        , is_compliant=result.is_compliant
        , gross_weight=result.gross_weight
        , max_allowed_weight=result.max_allowed_weight
        , over_weight=result.over_weight
        , violation_count=len(result.violations)
        , violations=json.dumps([v.to_dict() for v in result.violations], ensure_ascii=False)
    )
    return out


def evaluate_tickets(
      df: pd.DataFrame
    , *
    , default_state: str
    , warning_ratio: float
) -> pd.DataFrame:
    """
    Append verdict columns to a weigh-ticket DataFrame.

    Raises
    ------
    ValueError
        If the required axle_weights / axle_spacing columns are missing.
    """
    cols_map = {c.lower().strip(): c for c in df.columns}
    cols: Dict[str, Optional[str]] = {
          "axle_weights": cols_map.get("axle_weights") or cols_map.get("weights")
        , "axle_spacing": cols_map.get("axle_spacing") or cols_map.get("spacing")
        , "state": cols_map.get("state") or cols_map.get("jurisdiction")
        , "vehicle_type": cols_map.get("vehicle_type") or cols_map.get("type")
    }
    missing = [k for k in ("axle_weights", "axle_spacing") if cols[k] is None]
    if missing:
        raise ValueError(f"Input CSV is missing required column(s): {', '.join(missing)}")

    rows = [
        _evaluate_row(r, cols, default_state=default_state, warning_ratio=warning_ratio)
        for r in df.to_dict(orient="records")
    ]
    verdicts = pd.DataFrame(rows, columns=RESULT_COLUMNS, index=df.index)

    base = df.drop(columns=[c for c in RESULT_COLUMNS if c in df.columns])
    return pd.concat([base, verdicts], axis=1)


def _default_output_path(input_csv: Path) -> Path:
    return input_csv.with_name(f"{input_csv.stem}_compliance.csv")


# ───────────────────────────────── main ────────────────────────────────────
def main(
    argv: Optional[List[str]] = None
) -> int:
    """
    Entrypoint for the bulk compliance runner.

    Returns
    -------
    int
        Exit code (0 on success, 1 when the input cannot be read).
    """
    args = _build_parser().parse_args(argv)

    init_logging(
          level=args.log_level
        , force=True
        , write_output=args.write_log
    )
    if args.write_log:
        log.info("Log file → %s", get_current_log_path())

    if not args.input_csv.is_file():
        log.error("Input CSV not found: %s", args.input_csv)
        return 1

    df = pd.read_csv(args.input_csv, dtype=str)
    log.info("Loaded %d weigh ticket(s) from %s", len(df), args.input_csv)

    try:
        out = evaluate_tickets(
              df
            , default_state=args.default_state
            , warning_ratio=args.warning_ratio
        )
    except ValueError as e:
        log.error("%s", e)
        return 1

    output_csv = args.output_csv or _default_output_path(args.input_csv)
    output_csv.parent.mkdir(parents=True, exist_ok=True)
    out.to_csv(output_csv, index=False)

    n_err = int(out["error"].notna().sum())
    n_non = int((out["status"] == STATUS_NON_COMPLIANT).sum())
    n_warn = int((out["status"] == STATUS_WARNING).sum())

    log_banner(log, "Bulk compliance summary")
    log.info("Tickets:        %d", len(out))
    log.info("Non-compliant:  %d", n_non)
    log.info("Warnings:       %d", n_warn)
    log.info("Invalid rows:   %d", n_err)
    log.info("Output CSV → %s", output_csv)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
