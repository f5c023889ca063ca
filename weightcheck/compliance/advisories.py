# weightcheck/compliance/advisories.py
# -*- coding: utf-8 -*-
"""
Compliance advisories for weigh tickets.

Turns the raw limit measurements into human-facing issues with a severity
and a recommendation, and rolls them up into a ticket status:

    Non-Compliant  any High/Critical issue (a limit was exceeded)
    Warning        any Medium issue (a limit is above `warning_ratio`)
    Compliant      otherwise
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from weightcheck.compliance.evaluator import check_compliance, measure_limits
from weightcheck.compliance.limits import resolve_limits
from weightcheck.core.config import get_compliance_defaults, get_project_config
from weightcheck.core.models import (
      BRIDGE_FORMULA
    , GROSS
    , SINGLE_AXLE
    , TANDEM
    , TRIDEM
    , ComplianceResult
    , LimitCheck
    , VehicleConfig
)
from weightcheck.core.types import JSONDict
from weightcheck.infra.logging import get_logger

_log = get_logger(__name__)

# ────────────────────────────────────────────────────────────────────────────────
# Status / severity vocab
# ────────────────────────────────────────────────────────────────────────────────
STATUS_COMPLIANT = "Compliant"
STATUS_WARNING = "Warning"
STATUS_NON_COMPLIANT = "Non-Compliant"

SEVERITY_LOW = "Low"
SEVERITY_MEDIUM = "Medium"
SEVERITY_HIGH = "High"
SEVERITY_CRITICAL = "Critical"

# issue-type prefix and recommendation per limit kind
_ISSUE_PREFIX: Dict[str, str] = {
      GROSS: "gross_weight"
    , SINGLE_AXLE: "single_axle_weight"
    , TANDEM: "tandem_axle_weight"
    , TRIDEM: "tridem_axle_weight"
    , BRIDGE_FORMULA: "bridge_formula"
}

_RECOMMEND_EXCEEDED: Dict[str, str] = {
      GROSS: "Reduce load to comply with the gross weight limit"
    , SINGLE_AXLE: "Redistribute load to reduce weight on this axle"
    , TANDEM: "Redistribute load to reduce weight on these axles"
    , TRIDEM: "Redistribute load to reduce weight on these axles"
    , BRIDGE_FORMULA: "Redistribute load or reduce total weight to comply with the bridge formula"
}

_RECOMMEND_WARNING: Dict[str, str] = {
      GROSS: "Consider reducing load to stay within the gross weight limit"
    , SINGLE_AXLE: "Consider redistributing load to reduce weight on this axle"
    , TANDEM: "Consider redistributing load to reduce weight on these axles"
    , TRIDEM: "Consider redistributing load to reduce weight on these axles"
    , BRIDGE_FORMULA: "Consider redistributing load or reducing total weight to stay within the bridge formula"
}


@dataclass(frozen=True)
class ComplianceIssue:
    type: str
    description: str
    severity: str
    recommendation: str
    actual: float
    limit: float

    def to_dict(self) -> JSONDict:
        return {
              "type": self.type
            , "description": self.description
            , "severity": self.severity
            , "recommendation": self.recommendation
            , "actual": self.actual
            , "limit": self.limit
        }


@dataclass(frozen=True)
class ComplianceAssessment:
    status: str
    result: ComplianceResult
    issues: Tuple[ComplianceIssue, ...] = field(default_factory=tuple)

    def to_dict(self) -> JSONDict:
        return {
              "status": self.status
            , "issues": [i.to_dict() for i in self.issues]
        }


# ────────────────────────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────────────────────────

_NON_NUMERIC = re.compile(r"[^\d.]")


def parse_weight(text: Optional[str], *, strict: bool = False) -> float:
    """
    Parse a weigh-ticket weight string.

        "32,500 lbs" -> 32500.0
        ""           -> 0.0
        "n/a"        -> 0.0

    With `strict=True` text that holds no number ("n/a", "1.2.3", "")
    raises ValueError instead of reading as 0.
    """
    if text is None:
        if strict:
            raise ValueError("missing weight")
        return 0.0
    if isinstance(text, (int, float)):
        return float(text)
    cleaned = _NON_NUMERIC.sub("", str(text))
    try:
        return float(cleaned)
    except ValueError:
        if strict:
            raise ValueError(f"unparsable weight {text!r}") from None
        return 0.0


def _describe(check: LimitCheck, exceeded: bool) -> str:
    verb = "exceeds" if exceeded else "is approaching"
    cfg = get_project_config()
    actual = f"{check.actual:,.0f} {cfg.weight_unit}"
    limit = f"{check.limit:,.0f} {cfg.weight_unit}"

    if check.type == GROSS:
        return f"Gross weight of {actual} {verb} the limit of {limit}"
    if check.type == SINGLE_AXLE:
        return f"Axle {check.axle_index + 1} weight of {actual} {verb} the limit of {limit}"

    first, last = check.span  # type: ignore[misc]
    axles = f"axles {first + 1}-{last + 1}"
    if check.type == BRIDGE_FORMULA:
        over = "" if check.length is None else f" over {check.length:g} {cfg.length_unit}"
        return (
            f"Weight of {actual} on {axles} ({last - first + 1} axles{over}) {verb} "
            f"the bridge formula limit of {limit}"
        )
    group = "Tandem" if check.type == TANDEM else "Tridem"
    return f"{group} {axles} weight of {actual} {verb} the limit of {limit}"


def issues_from_checks(
      checks: Tuple[LimitCheck, ...]
    , *
    , warning_ratio: float
) -> Tuple[ComplianceIssue, ...]:
    """
    One issue per exceeded limit (High) or near-limit measurement (Medium).
    """
    issues: List[ComplianceIssue] = []
    for check in checks:
        prefix = _ISSUE_PREFIX[check.type]
        if check.exceeded:
            issues.append(
                ComplianceIssue(
                      type=f"{prefix}_exceeded"
                    , description=_describe(check, True)
                    , severity=SEVERITY_HIGH
                    , recommendation=_RECOMMEND_EXCEEDED[check.type]
                    , actual=check.actual
                    , limit=check.limit
                )
            )
        elif check.actual > check.limit * warning_ratio:
            issues.append(
                ComplianceIssue(
                      type=f"{prefix}_warning"
                    , description=_describe(check, False)
                    , severity=SEVERITY_MEDIUM
                    , recommendation=_RECOMMEND_WARNING[check.type]
                    , actual=check.actual
                    , limit=check.limit
                )
            )
    return tuple(issues)


def status_from_issues(issues: Tuple[ComplianceIssue, ...]) -> str:
    severities = {i.severity for i in issues}
    if severities & {SEVERITY_HIGH, SEVERITY_CRITICAL}:
        return STATUS_NON_COMPLIANT
    if SEVERITY_MEDIUM in severities:
        return STATUS_WARNING
    return STATUS_COMPLIANT


# ────────────────────────────────────────────────────────────────────────────────
# Public API
# ────────────────────────────────────────────────────────────────────────────────

def assess_compliance(
      config: VehicleConfig
    , state_code: Optional[str] = None
    , *
    , warning_ratio: Optional[float] = None
) -> ComplianceAssessment:
    """
    Evaluate a vehicle and attach advisory issues.

    Parameters
    ----------
    config : VehicleConfig
        Vehicle to check.
    state_code : str, optional
        Jurisdiction; None or "US" means federal. Unknown codes use federal
        limits.
    warning_ratio : float, optional
        Fraction of a limit above which a warning is issued. Defaults to
        ComplianceDefaults.warning_ratio (0.95).
    """
    ratio = get_compliance_defaults().warning_ratio if warning_ratio is None else float(warning_ratio)
    code, limits, _ = resolve_limits(state_code)

    result = check_compliance(config, limits, jurisdiction=code)
    issues = issues_from_checks(measure_limits(config, limits), warning_ratio=ratio)
    status = status_from_issues(issues)

    _log.info(
        "assess_compliance: %s in %s -> %s (%d issue(s))",
        config.vehicle_type or "vehicle",
        code,
        status,
        len(issues),
    )
    return ComplianceAssessment(status=status, result=result, issues=issues)
