# weightcheck/core/models.py
# -*- coding: utf-8 -*-

"""
Core domain models (frozen dataclasses).

    - AxleConfig: axle count, spacings (ft) and weights (lbs)
    - VehicleConfig: one vehicle as entered in the compliance form
    - WeightLimits: limit set of one jurisdiction
    - LimitCheck: one evaluated limit (violating or not)
    - Violation: one breached limit
    - ComplianceResult: verdict of one evaluation

This module has no I/O and no compliance arithmetic; it is safe to import
from anywhere.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from weightcheck.core.types import AxleSpan, JSONDict, Number


# ────────────────────────────────────────────────────────────────────────────────
# Errors
# ────────────────────────────────────────────────────────────────────────────────

class InvalidVehicleConfiguration(ValueError):
    """Raised when axle counts, spacings and weights do not line up."""
    ...


# ────────────────────────────────────────────────────────────────────────────────
# Violation kinds (canonical report order)
# ────────────────────────────────────────────────────────────────────────────────

GROSS = "gross"
SINGLE_AXLE = "single-axle"
TANDEM = "tandem"
TRIDEM = "tridem"
BRIDGE_FORMULA = "bridge-formula"

VIOLATION_ORDER: Tuple[str, ...] = (GROSS, SINGLE_AXLE, TANDEM, TRIDEM, BRIDGE_FORMULA)

# kinds rolled into ComplianceResult.axle_violations
AXLE_KINDS = frozenset({SINGLE_AXLE, TANDEM, TRIDEM})


# ────────────────────────────────────────────────────────────────────────────────
# Vehicle input
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AxleConfig:
    """
    Axle layout of a vehicle, front to back.

    Attributes
    ----------
    axle_count : int
        Number of axles (≥ 2).
    axle_spacing : tuple[float, ...]
        `axle_count - 1` distances in feet between consecutive axles.
    axle_weights : tuple[float, ...]
        `axle_count` weights in pounds.
    """

    axle_count: int
    axle_spacing: Tuple[float, ...]
    axle_weights: Tuple[float, ...]

    def __post_init__(self) -> None:
        # accept lists from callers but keep the stored value hashable
        object.__setattr__(self, "axle_spacing", tuple(float(s) for s in self.axle_spacing))
        object.__setattr__(self, "axle_weights", tuple(float(w) for w in self.axle_weights))

    @classmethod
    def from_weights(
          cls
        , axle_weights: Sequence[Number]
        , axle_spacing: Sequence[Number]
    ) -> "AxleConfig":
        return cls(
              axle_count=len(axle_weights)
            , axle_spacing=tuple(axle_spacing)
            , axle_weights=tuple(axle_weights)
        )


@dataclass(frozen=True)
class VehicleConfig:
    """
    A vehicle as submitted for a compliance check.

    `total_length` and `gross_weight` are what the caller believed; the
    evaluator never trusts them and works from `computed_*` instead.
    """

    vehicle_type: str
    axles: AxleConfig
    total_length: Optional[float] = None
    gross_weight: Optional[float] = None

    @property
    def computed_gross_weight(self) -> float:
        return float(sum(self.axles.axle_weights))

    @property
    def computed_total_length(self) -> float:
        return float(sum(self.axles.axle_spacing))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VehicleConfig":
        """
        Build from a form/JSON payload.

        Accepts the camelCase shape sent by the web form::

            {"type": "5-Axle Semi",
             "axles": {"axleCount": 5, "axleSpacing": [...], "axleWeights": [...]},
             "totalLength": 57, "grossWeight": 80000}

        as well as the snake_case field names of this class.

        Raises
        ------
        InvalidVehicleConfiguration
            If the payload or its "axles" entry is not an object.
        """
        if not isinstance(data, Mapping):
            raise InvalidVehicleConfiguration(
                f"vehicle payload must be an object, got {type(data).__name__}"
            )
        axles_raw = data.get("axles") or {}
        if not isinstance(axles_raw, Mapping):
            raise InvalidVehicleConfiguration(
                f"'axles' must be an object, got {type(axles_raw).__name__}"
            )

        def _pick(src: Mapping[str, Any], *keys: str) -> Any:
            for k in keys:
                if k in src and src[k] is not None:
                    return src[k]
            return None

        weights = _pick(axles_raw, "axleWeights", "axle_weights") or []
        spacing = _pick(axles_raw, "axleSpacing", "axle_spacing") or []
        count = _pick(axles_raw, "axleCount", "axle_count")

        total_length = _pick(data, "totalLength", "total_length")
        gross_weight = _pick(data, "grossWeight", "gross_weight")

        return cls(
              vehicle_type=str(_pick(data, "type", "vehicle_type") or "")
            , axles=AxleConfig(
                  axle_count=int(count) if count is not None else len(weights)
                , axle_spacing=tuple(spacing)
                , axle_weights=tuple(weights)
            )
            , total_length=None if total_length is None else float(total_length)
            , gross_weight=None if gross_weight is None else float(gross_weight)
        )


def validate_vehicle_config(config: VehicleConfig) -> None:
    """
    Fail fast on structurally malformed input.

    Zero spacing is accepted (axles at the same point); negative or
    non-finite numbers and length mismatches are not.

    Raises
    ------
    InvalidVehicleConfiguration
    """
    axles = config.axles
    n = int(axles.axle_count)

    if n < 2:
        raise InvalidVehicleConfiguration(f"axle_count must be >= 2, got {n}")
    if len(axles.axle_weights) != n:
        raise InvalidVehicleConfiguration(
            f"expected {n} axle weights, got {len(axles.axle_weights)}"
        )
    if len(axles.axle_spacing) != n - 1:
        raise InvalidVehicleConfiguration(
            f"expected {n - 1} axle spacings, got {len(axles.axle_spacing)}"
        )

    for i, w in enumerate(axles.axle_weights):
        if not math.isfinite(w) or w < 0:
            raise InvalidVehicleConfiguration(f"axle {i} weight must be a finite value >= 0, got {w}")
    for i, s in enumerate(axles.axle_spacing):
        if not math.isfinite(s) or s < 0:
            raise InvalidVehicleConfiguration(
                f"spacing between axles {i} and {i + 1} must be a finite value >= 0, got {s}"
            )


# ────────────────────────────────────────────────────────────────────────────────
# Jurisdiction reference data
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class WeightLimits:
    """
    Weight limits of one jurisdiction, in pounds.

    Attributes
    ----------
    single_axle : float
        Cap on any individual axle.
    tandem_axle : float
        Cap on a tandem pair.
    tridem_axle : float
        Cap on a tridem group.
    gross_vehicle : float
        Gross vehicle weight cap; also the headline `max_allowed_weight`.
    bridge_formula : bool
        Whether runs of 3+ axles are checked with the bridge formula.
    """

    single_axle: float
    tandem_axle: float
    tridem_axle: float
    gross_vehicle: float
    bridge_formula: bool = True

    def to_dict(self) -> JSONDict:
        return {
              "single_axle": self.single_axle
            , "tandem_axle": self.tandem_axle
            , "tridem_axle": self.tridem_axle
            , "gross_vehicle": self.gross_vehicle
            , "bridge_formula": self.bridge_formula
        }


# ────────────────────────────────────────────────────────────────────────────────
# Evaluation output
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LimitCheck:
    """
    One limit evaluated against one axle, group, or the whole vehicle.

    `axle_index` is set for single-axle checks only; `span` is set for
    tandem, tridem and bridge-formula groups. `length` is the outer-axle
    distance (ft) the bridge formula was evaluated at.
    """

    type: str
    actual: float
    limit: float
    axle_index: Optional[int] = None
    span: Optional[AxleSpan] = None
    length: Optional[float] = None

    @property
    def exceeded(self) -> bool:
        return self.actual > self.limit

    @property
    def over_weight(self) -> float:
        return self.actual - self.limit


@dataclass(frozen=True)
class Violation:
    """A breached limit."""

    type: str
    actual: float
    limit: float
    over_weight: float
    axle_index: Optional[int] = None
    span: Optional[AxleSpan] = None

    @classmethod
    def from_check(cls, check: LimitCheck) -> "Violation":
        return cls(
              type=check.type
            , actual=check.actual
            , limit=check.limit
            , over_weight=check.over_weight
            , axle_index=check.axle_index
            , span=check.span
        )

    def to_dict(self) -> JSONDict:
        out: JSONDict = {
              "type": self.type
            , "actual": self.actual
            , "limit": self.limit
            , "over_weight": self.over_weight
        }
        if self.axle_index is not None:
            out["axle_index"] = self.axle_index
        if self.span is not None:
            out["span"] = [self.span[0], self.span[1]]
        return out


@dataclass(frozen=True)
class ComplianceResult:
    """
    Verdict of one evaluation.

    Attributes
    ----------
    is_compliant : bool
        True iff `violations` is empty.
    max_allowed_weight : float
        Gross cap of the jurisdiction (headline number only; group limits
        show up in `violations`).
    over_weight : float
        max(0, gross_weight - max_allowed_weight).
    gross_weight : float
        Sum of the axle weights.
    jurisdiction : str
        Code whose limits were applied ("US" for federal).
    violations : tuple[Violation, ...]
        Breached limits in canonical order.
    """

    is_compliant: bool
    max_allowed_weight: float
    over_weight: float
    gross_weight: float
    jurisdiction: str
    violations: Tuple[Violation, ...] = field(default_factory=tuple)

    @property
    def axle_violations(self) -> Tuple[Violation, ...]:
        return tuple(v for v in self.violations if v.type in AXLE_KINDS)

    @property
    def gross_violation(self) -> bool:
        return any(v.type == GROSS for v in self.violations)

    @property
    def bridge_formula_violation(self) -> bool:
        return any(v.type == BRIDGE_FORMULA for v in self.violations)

    def violations_of(self, kind: str) -> Tuple[Violation, ...]:
        return tuple(v for v in self.violations if v.type == kind)

    def to_dict(self) -> Dict[str, Any]:
        return {
              "is_compliant": self.is_compliant
            , "jurisdiction": self.jurisdiction
            , "gross_weight": self.gross_weight
            , "max_allowed_weight": self.max_allowed_weight
            , "over_weight": self.over_weight
            , "violations": [v.to_dict() for v in self.violations]
            , "details": {
                  "axle_violations": [v.to_dict() for v in self.axle_violations]
                , "gross_violation": self.gross_violation
                , "bridge_formula_violation": self.bridge_formula_violation
            }
        }
