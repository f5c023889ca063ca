from __future__ import annotations

# ── limit tables ────────────────────────────────────────────────────────────────
from .limits import (
      FEDERAL_WEIGHT_LIMITS
    , DEFAULT_STATE_LIMITS_CSV
    , get_state_limits
    , get_state_names
    , resolve_limits
    , is_federal_code
)

# ── bridge formula ──────────────────────────────────────────────────────────────
from .bridge import bridge_formula_weight, bridge_formula_limit

# ── evaluator (public API) ──────────────────────────────────────────────────────
from .evaluator import (
      measure_limits
    , check_compliance
    , check_federal_compliance
    , check_state_compliance
)

# ── advisories ──────────────────────────────────────────────────────────────────
from .advisories import (
      ComplianceAssessment
    , ComplianceIssue
    , assess_compliance
    , parse_weight
)

__all__ = [
    # limits
      "FEDERAL_WEIGHT_LIMITS", "DEFAULT_STATE_LIMITS_CSV",
      "get_state_limits", "get_state_names", "resolve_limits", "is_federal_code",
    # bridge
      "bridge_formula_weight", "bridge_formula_limit",
    # evaluator
      "measure_limits", "check_compliance",
      "check_federal_compliance", "check_state_compliance",
    # advisories
      "ComplianceAssessment", "ComplianceIssue", "assess_compliance", "parse_weight",
]
