# weightcheck/core/config.py
# -*- coding: utf-8 -*-

"""
Core configuration models and globals.

Pure configuration structures, independent of any infrastructure. Safe to
import from anywhere.

Current contents
----------------
- ProjectConfig: high-level defaults for the whole project
- ComplianceDefaults: thresholds used by the weight compliance evaluator
"""

from __future__ import annotations

from dataclasses import dataclass


# ────────────────────────────────────────────────────────────────────────────────
# High-level project configuration
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ProjectConfig:
    """
    Global project configuration.

    Attributes
    ----------
    weight_unit : str
        Unit for every weight in the project (pounds).
    length_unit : str
        Unit for every axle distance in the project (feet).
    """

    weight_unit: str = "lbs"
    length_unit: str = "ft"


# ────────────────────────────────────────────────────────────────────────────────
# Compliance defaults
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ComplianceDefaults:
    """
    Thresholds for axle grouping and advisory levels.

    Attributes
    ----------
    federal_code : str
        Jurisdiction code meaning "federal limits".
    tandem_max_spacing_ft : float
        Two consecutive axles at most this far apart are a tandem (96 in).
    tridem_max_spread_ft : float
        Three consecutive axles whose two spacings add up to at most this
        are a tridem.
    bridge_min_group_axles : int
        Smallest run of consecutive axles checked with the bridge formula.
    warning_ratio : float
        Fraction of a limit above which an advisory warning is raised.
    min_axles, max_axles : int
        Axle-count bounds accepted by the vehicle presets.
    default_axle_spacing_ft : float
        Spacing used when a preset does not say otherwise.
    """

    federal_code: str = "US"
    tandem_max_spacing_ft: float = 8.0
    tridem_max_spread_ft: float = 8.0
    bridge_min_group_axles: int = 3
    warning_ratio: float = 0.95
    min_axles: int = 2
    max_axles: int = 9
    default_axle_spacing_ft: float = 4.5


# ────────────────────────────────────────────────────────────────────────────────
# Singleton-style instances
# ────────────────────────────────────────────────────────────────────────────────

PROJECT_CONFIG = ProjectConfig()
COMPLIANCE_DEFAULTS = ComplianceDefaults()


def get_project_config() -> ProjectConfig:
    """
    Return the global project configuration.
    """
    return PROJECT_CONFIG


def get_compliance_defaults() -> ComplianceDefaults:
    """
    Return the global compliance thresholds.

    Kept behind a function so the values can later come from a file or the
    environment without touching call sites.
    """
    return COMPLIANCE_DEFAULTS
