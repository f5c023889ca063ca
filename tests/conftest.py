"""
Pytest configuration for weightcheck tests.

Shared vehicle fixtures plus a loader for the CLI scripts under scripts/,
which are plain files rather than an importable package.
"""

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest

from weightcheck.compliance.limits import STATE_LIMITS_ENV, clear_limits_cache
from weightcheck.core.models import AxleConfig, VehicleConfig

REPO_ROOT = Path(__file__).resolve().parents[1]

# Realistic 5-axle tractor-semitrailer: steer, drive tandem, trailer tandem.
SEMI_SPACING = (12.0, 4.5, 36.0, 4.5)


def make_vehicle(weights, spacing=SEMI_SPACING, vehicle_type="5-Axle Semi", gross_weight=None):
    return VehicleConfig(
          vehicle_type=vehicle_type
        , axles=AxleConfig(
              axle_count=len(weights)
            , axle_spacing=tuple(spacing)
            , axle_weights=tuple(weights)
        )
        , total_length=float(sum(spacing))
        , gross_weight=gross_weight
    )


@pytest.fixture(autouse=True)
def fresh_limits_table(monkeypatch):
    """Each test starts from the bundled state table."""
    monkeypatch.delenv(STATE_LIMITS_ENV, raising=False)
    monkeypatch.delenv("WEIGHTCHECK_LOG_LEVEL", raising=False)
    clear_limits_cache()
    yield
    clear_limits_cache()


@pytest.fixture
def full_semi():
    """80,000 lbs, every limit met (some exactly at the cap)."""
    return make_vehicle([12000, 17000, 17000, 17000, 17000])


@pytest.fixture
def even_semi():
    """Five axles at 16,000 lbs each: gross exactly 80,000."""
    return make_vehicle([16000] * 5)


@pytest.fixture
def light_semi():
    """Well below every limit and below every warning threshold."""
    return make_vehicle([10000, 12000, 12000, 12000, 12000])


@pytest.fixture
def load_script():
    """Import a file from scripts/ by name."""

    def _load(name: str) -> ModuleType:
        path = REPO_ROOT / "scripts" / f"{name}.py"
        spec = importlib.util.spec_from_file_location(f"scripts_{name}", path)
        assert spec is not None and spec.loader is not None
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    return _load
