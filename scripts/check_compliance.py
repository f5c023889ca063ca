#!/usr/bin/env python3
# scripts/check_compliance.py
# -*- coding: utf-8 -*-

"""
Check one vehicle against federal or state weight limits and print JSON.

Examples
--------
    python scripts/check_compliance.py \
        --axle-weights 12000 17000 17000 17000 17000 \
        --axle-spacing 12 4.5 36 4.5 --state NY --pretty

    python scripts/check_compliance.py --vehicle-json ticket.json

Exit codes
----------
0  compliant
2  not compliant
1  invalid input
"""

from __future__ import annotations

# --- path bootstrap (must be the first lines of the file) ---
from pathlib import Path
import sys
ROOT = Path(__file__).resolve().parents[1]  # repo root (one level above /scripts)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
# ------------------------------------------------------------

import argparse
import json
import logging
from typing import Any, List, Optional

from weightcheck.compliance.advisories import assess_compliance
from weightcheck.core.config import get_compliance_defaults
from weightcheck.core.models import InvalidVehicleConfiguration, VehicleConfig
from weightcheck.fleet.vehicle_specs import (
      DEFAULT_VEHICLE_TYPE
    , DEFAULT_GROSS_WEIGHT_LBS
    , build_vehicle_config
    , list_vehicle_types
)
from weightcheck.infra.logging import init_logging

log = logging.getLogger(__name__)

EXIT_COMPLIANT = 0
EXIT_INVALID = 1
EXIT_NON_COMPLIANT = 2


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Check a vehicle's axle and gross weights against federal/state limits and print JSON."
    )
    p.add_argument(
          "--vehicle-json"
        , type=Path
        , default=None
        , help="JSON file with the vehicle payload ({type, axles: {axleCount, axleSpacing, axleWeights}})."
    )
    p.add_argument(
          "--vehicle-type"
        , default=DEFAULT_VEHICLE_TYPE
        , choices=list_vehicle_types()
        , help=f"Vehicle preset used when weights/spacings are not given. Default: {DEFAULT_VEHICLE_TYPE}"
    )
    p.add_argument("--axle-weights", type=float, nargs="+", default=None, help="Weight per axle (lbs), front to back.")
    p.add_argument("--axle-spacing", type=float, nargs="+", default=None, help="Spacing between consecutive axles (ft).")
    p.add_argument(
          "--gross-weight"
        , type=float
        , default=DEFAULT_GROSS_WEIGHT_LBS
        , help="Gross weight (lbs) spread evenly when --axle-weights is omitted."
    )
    p.add_argument(
          "--state"
        , default=get_compliance_defaults().federal_code
        , help="Jurisdiction code (e.g. NY). 'US' means federal. Unknown codes use federal limits."
    )
    p.add_argument(
          "--warning-ratio"
        , type=float
        , default=get_compliance_defaults().warning_ratio
        , help="Fraction of a limit that triggers a warning."
    )

    # UX
    p.add_argument("--pretty", action="store_true", help="Pretty-print JSON.")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def _load_vehicle(args: argparse.Namespace) -> VehicleConfig:
    if args.vehicle_json is not None:
        with open(args.vehicle_json, "r", encoding="utf-8") as f:
            data: Any = json.load(f)
        return VehicleConfig.from_dict(data)

    return build_vehicle_config(
          args.vehicle_type
        , gross_weight=args.gross_weight
        , axle_weights=args.axle_weights
        , axle_spacing=args.axle_spacing
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    init_logging(
          level=args.log_level
        , force=True
        , write_output=False
    )

    try:
        vehicle = _load_vehicle(args)
        assessment = assess_compliance(
              vehicle
            , args.state
            , warning_ratio=args.warning_ratio
        )
    except FileNotFoundError as e:
        log.error("Vehicle file not found: %s", e)
        return EXIT_INVALID
    except InvalidVehicleConfiguration as e:
        log.error("Invalid vehicle configuration: %s", e)
        return EXIT_INVALID
    except ValueError as e:
        # malformed JSON, non-numeric flag values
        log.error("Unreadable vehicle input: %s", e)
        return EXIT_INVALID

    payload = {
          "vehicle_type": vehicle.vehicle_type
        , "axle_weights": list(vehicle.axles.axle_weights)
        , "axle_spacing": list(vehicle.axles.axle_spacing)
        , "result": assessment.result.to_dict()
        , "assessment": assessment.to_dict()
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2 if args.pretty else None))

    return EXIT_COMPLIANT if assessment.result.is_compliant else EXIT_NON_COMPLIANT


if __name__ == "__main__":
    raise SystemExit(main())
