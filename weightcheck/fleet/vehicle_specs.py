# weightcheck/fleet/vehicle_specs.py
# -*- coding: utf-8 -*-
"""
Vehicle presets for the compliance checker: axle count and default
layout per vehicle type.

These presets seed the compliance form: pick a type, get an axle count,
the gross weight spread evenly over the axles, and a default spacing.

Notes
-----
• Presets are starting points for data entry, not real axle layouts. A
  5-axle semi with every axle 4.5 ft apart will usually fail the bridge
  formula; callers are expected to edit spacings.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List, Optional, Sequence, Tuple

from weightcheck.compliance.limits import get_state_names
from weightcheck.core.config import get_compliance_defaults
from weightcheck.core.models import AxleConfig, VehicleConfig
from weightcheck.infra.logging import get_logger

_log = get_logger(__name__)

# ────────────────────────────────────────────────────────────────────────────────
# Presets
# ────────────────────────────────────────────────────────────────────────────────
VEHICLE_TYPES: Dict[str, Dict[str, Any]] = {
    "3-Axle Straight Truck": {
        "axles": 3,
    },
    "5-Axle Semi": {
        "axles": 5,
    },
    "6-Axle Semi": {
        "axles": 6,
    },
    "7-Axle Semi": {
        "axles": 7,
    },
    "8-Axle Semi": {
        "axles": 8,
    },
    "9-Axle Semi": {
        "axles": 9,
    },
}

DEFAULT_VEHICLE_TYPE = "5-Axle Semi"
DEFAULT_GROSS_WEIGHT_LBS = 80000.0

__all__ = [
    "VEHICLE_TYPES",
    "DEFAULT_VEHICLE_TYPE",
    "list_vehicle_types",
    "get_vehicle_spec",
    "clamp_axle_count",
    "build_vehicle_config",
    "list_jurisdictions",
    "state_name",
]


def list_vehicle_types() -> List[str]:
    """
    Return available preset names (stable order for CLI help/UX).
    """
    return list(VEHICLE_TYPES.keys())


def get_vehicle_spec(vehicle_type: str) -> Dict[str, Any]:
    """
    Return a copy of the preset so callers can tweak fields safely.
    Raises KeyError if unknown.
    """
    if vehicle_type not in VEHICLE_TYPES:
        _log.error("vehicle_specs: unknown vehicle_type=%s", vehicle_type)
        raise KeyError(f"Unknown vehicle preset: {vehicle_type}")
    return deepcopy(VEHICLE_TYPES[vehicle_type])


def clamp_axle_count(axle_count: int) -> int:
    """
    Clamp to the axle range the form accepts (2..9 by default).
    """
    d = get_compliance_defaults()
    a = int(axle_count)
    clamped = min(max(a, d.min_axles), d.max_axles)
    if clamped != a:
        _log.debug("vehicle_specs: axle_count=%s clamped to %s", a, clamped)
    return clamped


def build_vehicle_config(
      vehicle_type: str = DEFAULT_VEHICLE_TYPE
    , *
    , axle_count: Optional[int] = None
    , gross_weight: float = DEFAULT_GROSS_WEIGHT_LBS
    , axle_spacing_ft: Optional[float] = None
    , axle_weights: Optional[Sequence[float]] = None
    , axle_spacing: Optional[Sequence[float]] = None
) -> VehicleConfig:
    """
    Build a VehicleConfig the way the compliance form seeds one.

    - axle count from the preset unless overridden (clamped to 2..9);
    - weights: `axle_weights` if given, else `gross_weight` split evenly;
    - spacing: `axle_spacing` if given, else `axle_spacing_ft` (4.5 ft)
      between every pair.

    Explicit `axle_weights`/`axle_spacing` are passed through unchanged, so
    length mismatches surface later as InvalidVehicleConfiguration.
    """
    if axle_count is None:
        if axle_weights is not None:
            axle_count = len(axle_weights)
        else:
            axle_count = get_vehicle_spec(vehicle_type)["axles"]
    n = clamp_axle_count(axle_count) if axle_weights is None else int(axle_count)

    if axle_weights is None:
        axle_weights = [float(gross_weight) / n] * n
    if axle_spacing is None:
        step = get_compliance_defaults().default_axle_spacing_ft if axle_spacing_ft is None else float(axle_spacing_ft)
        axle_spacing = [step] * (n - 1)

    axles = AxleConfig(
          axle_count=n
        , axle_spacing=tuple(axle_spacing)
        , axle_weights=tuple(axle_weights)
    )
    return VehicleConfig(
          vehicle_type=vehicle_type
        , axles=axles
        , total_length=float(sum(axles.axle_spacing))
        , gross_weight=float(sum(axles.axle_weights))
    )


# ────────────────────────────────────────────────────────────────────────────────
# Jurisdictions for pickers
# ────────────────────────────────────────────────────────────────────────────────

def state_name(code: str) -> str:
    """Display name for a jurisdiction code; unknown codes echo back."""
    c = (code or "").strip().upper()
    if c == get_compliance_defaults().federal_code:
        return "Federal"
    return get_state_names().get(c, c)


def list_jurisdictions() -> List[Tuple[str, str]]:
    """
    [(code, name), ...] for every jurisdiction with limits, federal
    included, sorted by name.
    """
    federal = get_compliance_defaults().federal_code
    items = [(federal, "Federal")] + [(code, state_name(code)) for code in get_state_names()]
    return sorted(items, key=lambda it: it[1])


# ────────────────────────────────────────────────────────────────────────────────
# CLI / smoke test
# ────────────────────────────────────────────────────────────────────────────────

def main(argv: List[str] | None = None) -> int:
    """
    Small CLI / smoke test for vehicle presets.

    Examples
    --------
    python -m weightcheck.fleet.vehicle_specs
    python -m weightcheck.fleet.vehicle_specs --vehicle-type "6-Axle Semi" --gross-weight 84000
    python -m weightcheck.fleet.vehicle_specs --axle-count 12
    """
    import argparse
    import json

    from weightcheck.infra.logging import init_logging

    parser = argparse.ArgumentParser(
        description="Vehicle presets: inspect the configuration the compliance form would seed."
    )
    parser.add_argument(
          "--vehicle-type"
        , default=DEFAULT_VEHICLE_TYPE
        , choices=list_vehicle_types()
        , help="Vehicle preset to inspect."
    )
    parser.add_argument(
          "--axle-count"
        , type=int
        , default=None
        , help="Override axle count (clamped to the accepted range)."
    )
    parser.add_argument(
          "--gross-weight"
        , type=float
        , default=DEFAULT_GROSS_WEIGHT_LBS
        , help="Gross weight (lbs) spread evenly over the axles."
    )
    parser.add_argument(
          "--log-level"
        , default="INFO"
        , choices=["DEBUG", "INFO", "WARNING", "ERROR"]
        , help="Logging level for this smoke test."
    )

    args = parser.parse_args(argv)

    init_logging(
          level=args.log_level
        , force=True
        , write_output=False
    )

    cfg = build_vehicle_config(
          args.vehicle_type
        , axle_count=args.axle_count
        , gross_weight=args.gross_weight
    )

    payload = {
          "vehicle_type": cfg.vehicle_type
        , "axle_count": cfg.axles.axle_count
        , "axle_weights": list(cfg.axles.axle_weights)
        , "axle_spacing": list(cfg.axles.axle_spacing)
        , "total_length": cfg.total_length
        , "gross_weight": cfg.gross_weight
        , "jurisdictions": [{"code": c, "name": n} for c, n in list_jurisdictions()]
    }

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
