# weightcheck/compliance/evaluator.py
# -*- coding: utf-8 -*-
"""
Vehicle weight compliance evaluator
-----------------------------------
Pure functions: a VehicleConfig and a jurisdiction in, a ComplianceResult
out. No I/O beyond reading the bundled limit table once.

Checks, in report order:
  1. gross weight vs. the jurisdiction's gross cap
  2. every axle vs. the single-axle cap
  3. every consecutive pair ≤ 8 ft apart (tandem) vs. the tandem cap
  4. every three consecutive axles spread ≤ 8 ft (tridem) vs. the tridem cap
  5. every run of 3+ consecutive axles vs. the bridge formula (if applied)

The gross weight is always recomputed from the axle weights.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from weightcheck.compliance.bridge import bridge_formula_limit, iter_axle_runs
from weightcheck.compliance.limits import FEDERAL_WEIGHT_LIMITS, resolve_limits
from weightcheck.core.config import ComplianceDefaults, get_compliance_defaults
from weightcheck.core.models import (
      BRIDGE_FORMULA
    , GROSS
    , SINGLE_AXLE
    , TANDEM
    , TRIDEM
    , ComplianceResult
    , LimitCheck
    , VehicleConfig
    , Violation
    , WeightLimits
    , validate_vehicle_config
)
from weightcheck.infra.logging import get_logger

_log = get_logger(__name__)

__all__ = [
    "measure_limits",
    "check_compliance",
    "check_federal_compliance",
    "check_state_compliance",
]


def measure_limits(
      config: VehicleConfig
    , limits: WeightLimits
    , *
    , defaults: Optional[ComplianceDefaults] = None
) -> Tuple[LimitCheck, ...]:
    """
    Evaluate every applicable limit, violating or not, in report order.

    Raises
    ------
    InvalidVehicleConfiguration
        If axle count, spacings and weights do not line up.
    """
    validate_vehicle_config(config)
    d = defaults or get_compliance_defaults()

    weights = config.axles.axle_weights
    spacing = config.axles.axle_spacing
    n = len(weights)

    checks: List[LimitCheck] = [
        LimitCheck(type=GROSS, actual=config.computed_gross_weight, limit=limits.gross_vehicle)
    ]

    for i, w in enumerate(weights):
        checks.append(LimitCheck(type=SINGLE_AXLE, actual=w, limit=limits.single_axle, axle_index=i))

    for i in range(n - 1):
        if spacing[i] <= d.tandem_max_spacing_ft:
            checks.append(
                LimitCheck(
                      type=TANDEM
                    , actual=weights[i] + weights[i + 1]
                    , limit=limits.tandem_axle
                    , span=(i, i + 1)
                )
            )

    for i in range(n - 2):
        if spacing[i] + spacing[i + 1] <= d.tridem_max_spread_ft:
            checks.append(
                LimitCheck(
                      type=TRIDEM
                    , actual=weights[i] + weights[i + 1] + weights[i + 2]
                    , limit=limits.tridem_axle
                    , span=(i, i + 2)
                )
            )

    if limits.bridge_formula:
        for (first, last), length in iter_axle_runs(spacing, min_axles=d.bridge_min_group_axles):
            checks.append(
                LimitCheck(
                      type=BRIDGE_FORMULA
                    , actual=float(sum(weights[first:last + 1]))
                    , limit=bridge_formula_limit(length, last - first + 1)
                    , span=(first, last)
                    , length=length
                )
            )

    return tuple(checks)


def check_compliance(
      config: VehicleConfig
    , limits: WeightLimits
    , *
    , jurisdiction: Optional[str] = None
    , defaults: Optional[ComplianceDefaults] = None
) -> ComplianceResult:
    """
    Check a vehicle against an explicit limit set.

    Parameters
    ----------
    config : VehicleConfig
        Vehicle to check. Its `gross_weight` field is ignored.
    limits : WeightLimits
        Limits to apply.
    jurisdiction : str, optional
        Code reported on the result. Defaults to the federal code.
    """
    d = defaults or get_compliance_defaults()
    checks = measure_limits(config, limits, defaults=d)
    violations = tuple(Violation.from_check(c) for c in checks if c.exceeded)

    gross = config.computed_gross_weight
    max_allowed = float(limits.gross_vehicle)

    if config.gross_weight is not None and config.gross_weight != gross:
        _log.debug(
            "check_compliance: supplied gross_weight=%s ignored, axle sum is %s",
            config.gross_weight,
            gross,
        )

    result = ComplianceResult(
          is_compliant=not violations
        , max_allowed_weight=max_allowed
        , over_weight=max(0.0, gross - max_allowed)
        , gross_weight=gross
        , jurisdiction=jurisdiction or d.federal_code
        , violations=violations
    )
    _log.debug(
        "check_compliance: %s axles=%d gross=%.0f jurisdiction=%s -> compliant=%s violations=%d",
        config.vehicle_type or "vehicle",
        config.axles.axle_count,
        gross,
        result.jurisdiction,
        result.is_compliant,
        len(violations),
    )
    return result


def check_federal_compliance(config: VehicleConfig) -> ComplianceResult:
    """Check a vehicle against federal limits."""
    return check_compliance(config, FEDERAL_WEIGHT_LIMITS)


def check_state_compliance(config: VehicleConfig, state_code: str) -> ComplianceResult:
    """
    Check a vehicle against a state's limits.

    Fields the state does not override use federal values. Unknown codes
    fall back to federal limits entirely, so the result equals
    `check_federal_compliance(config)`.
    """
    code, limits, _ = resolve_limits(state_code)
    return check_compliance(config, limits, jurisdiction=code)
