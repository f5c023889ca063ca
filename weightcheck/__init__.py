"""
weightcheck - axle and gross weight compliance checks for commercial vehicles
"""

__version__ = "1.0.0"

from .compliance import (
      check_federal_compliance
    , check_state_compliance
    , assess_compliance
)
from .core.models import (
      AxleConfig
    , VehicleConfig
    , WeightLimits
    , Violation
    , ComplianceResult
    , InvalidVehicleConfiguration
)

__all__ = [
      "check_federal_compliance", "check_state_compliance", "assess_compliance",
      "AxleConfig", "VehicleConfig", "WeightLimits", "Violation", "ComplianceResult",
      "InvalidVehicleConfiguration",
]
