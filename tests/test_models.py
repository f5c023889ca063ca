"""
Tests for core models: payload parsing, validation, serialization.
"""

import pytest

from tests.conftest import make_vehicle
from weightcheck.compliance.evaluator import check_federal_compliance
from weightcheck.core.models import (
    AxleConfig,
    InvalidVehicleConfiguration,
    VehicleConfig,
    validate_vehicle_config,
)


class TestVehicleConfigFromDict:
    def test_form_payload(self):
        cfg = VehicleConfig.from_dict(
            {
                "type": "5-Axle Semi",
                "axles": {
                    "axleCount": 5,
                    "axleSpacing": [12, 4.5, 36, 4.5],
                    "axleWeights": [12000, 17000, 17000, 17000, 17000],
                },
                "totalLength": 57,
                "grossWeight": 80000,
            }
        )

        assert cfg.vehicle_type == "5-Axle Semi"
        assert cfg.axles.axle_count == 5
        assert cfg.axles.axle_spacing == (12.0, 4.5, 36.0, 4.5)
        assert cfg.total_length == 57.0
        assert cfg.gross_weight == 80000.0

    def test_snake_case_payload_without_count(self):
        cfg = VehicleConfig.from_dict(
            {"vehicle_type": "2-axle", "axles": {"axle_spacing": [10], "axle_weights": [8000, 12000]}}
        )

        assert cfg.axles.axle_count == 2
        assert cfg.gross_weight is None
        assert cfg.computed_gross_weight == 20000.0

    @pytest.mark.parametrize(
        "payload, match",
        [
            ([12000, 17000], "payload must be an object"),
            ("5-Axle Semi", "payload must be an object"),
            ({"axles": [12000, 17000]}, "'axles' must be an object"),
        ],
    )
    def test_non_object_payload(self, payload, match):
        with pytest.raises(InvalidVehicleConfiguration, match=match):
            VehicleConfig.from_dict(payload)

    def test_lists_become_tuples(self):
        axles = AxleConfig(axle_count=2, axle_spacing=[10], axle_weights=[8000, 12000])

        assert axles.axle_spacing == (10.0,)
        assert hash(axles) == hash(AxleConfig.from_weights([8000, 12000], [10]))


class TestValidation:
    def test_valid_passes(self, full_semi):
        validate_vehicle_config(full_semi)

    def test_declared_count_mismatch(self):
        cfg = VehicleConfig(
              vehicle_type="x"
            , axles=AxleConfig(axle_count=4, axle_spacing=(4.5, 4.5), axle_weights=(1, 2, 3))
        )

        with pytest.raises(InvalidVehicleConfiguration, match="expected 4 axle weights"):
            validate_vehicle_config(cfg)

    def test_zero_spacing_allowed(self):
        validate_vehicle_config(make_vehicle([1000, 1000], spacing=[0]))


class TestSerialization:
    def test_result_to_dict(self):
        vehicle = make_vehicle([20001, 15000, 15000, 15000, 15000])
        payload = check_federal_compliance(vehicle).to_dict()

        assert payload["is_compliant"] is False
        assert payload["jurisdiction"] == "US"
        assert payload["violations"][0]["type"] == "gross"
        assert "axle_index" not in payload["violations"][0]

        single = next(v for v in payload["violations"] if v["type"] == "single-axle")
        assert single["axle_index"] == 0
        assert "span" not in single

        bridge = next(v for v in payload["violations"] if v["type"] == "bridge-formula")
        assert bridge["span"] == [0, 2]

        assert payload["details"]["gross_violation"] is True
        assert payload["details"]["bridge_formula_violation"] is True
        assert [v["type"] for v in payload["details"]["axle_violations"]] == ["single-axle"]
