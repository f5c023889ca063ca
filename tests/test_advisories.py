"""
Tests for compliance advisories (status, warnings, weigh-ticket parsing).
"""

import pytest

from tests.conftest import make_vehicle
from weightcheck.compliance.advisories import (
    SEVERITY_HIGH,
    SEVERITY_MEDIUM,
    STATUS_COMPLIANT,
    STATUS_NON_COMPLIANT,
    STATUS_WARNING,
    assess_compliance,
    parse_weight,
)


class TestParseWeight:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("32,500 lbs", 32500.0),
            ("80000", 80000.0),
            ("17,250.5 lb", 17250.5),
            ("", 0.0),
            (None, 0.0),
            ("n/a", 0.0),
            (12000, 12000.0),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_weight(raw) == expected

    @pytest.mark.parametrize("raw", ["n/a", "1.2.3", "", None])
    def test_strict_rejects_garbage(self, raw):
        with pytest.raises(ValueError):
            parse_weight(raw, strict=True)

    def test_strict_accepts_ticket_text(self):
        assert parse_weight("32,500 lbs", strict=True) == 32500.0


class TestAssessCompliance:
    def test_light_vehicle_is_compliant(self, light_semi):
        assessment = assess_compliance(light_semi)

        assert assessment.status == STATUS_COMPLIANT
        assert assessment.issues == ()
        assert assessment.result.is_compliant is True

    def test_near_limit_is_warning(self, full_semi):
        # 80,000 gross and 34,000 tandems are legal but right at the cap
        assessment = assess_compliance(full_semi)

        assert assessment.result.is_compliant is True
        assert assessment.status == STATUS_WARNING
        types = [i.type for i in assessment.issues]
        assert "gross_weight_warning" in types
        assert "tandem_axle_weight_warning" in types
        assert all(i.severity == SEVERITY_MEDIUM for i in assessment.issues)

    def test_exceeded_limit_is_non_compliant(self):
        vehicle = make_vehicle([16000, 16000, 16001, 16000, 16000])
        assessment = assess_compliance(vehicle)

        assert assessment.status == STATUS_NON_COMPLIANT
        exceeded = [i for i in assessment.issues if i.severity == SEVERITY_HIGH]
        assert [i.type for i in exceeded] == ["gross_weight_exceeded"]
        assert "80,001 lbs" in exceeded[0].description
        assert exceeded[0].recommendation

    def test_single_axle_description_is_one_based(self):
        vehicle = make_vehicle([20001, 10000, 10000, 10000, 10000])
        assessment = assess_compliance(vehicle)

        issue = next(i for i in assessment.issues if i.type == "single_axle_weight_exceeded")
        assert issue.description.startswith("Axle 1 ")

    def test_bridge_description_names_run_length(self):
        vehicle = make_vehicle([14250, 14250, 14251], spacing=[4.5, 4.5])
        assessment = assess_compliance(vehicle)

        [issue] = assessment.issues
        assert issue.type == "bridge_formula_exceeded"
        assert issue.description == (
            "Weight of 42,751 lbs on axles 1-3 (3 axles over 9 ft) exceeds "
            "the bridge formula limit of 42,750 lbs"
        )

    def test_custom_warning_ratio(self, light_semi):
        # 58,000 gross is above half of 80,000
        assessment = assess_compliance(light_semi, warning_ratio=0.5)

        assert assessment.status == STATUS_WARNING

    def test_state_is_applied(self):
        vehicle = make_vehicle([21000, 13000, 13000, 14000, 14000])

        assert assess_compliance(vehicle).status == STATUS_NON_COMPLIANT
        assert assess_compliance(vehicle, "NY").result.jurisdiction == "NY"
        assert assess_compliance(vehicle, "NY").result.is_compliant is True

    def test_to_dict(self, full_semi):
        payload = assess_compliance(full_semi).to_dict()

        assert payload["status"] == STATUS_WARNING
        assert {"type", "description", "severity", "recommendation", "actual", "limit"} <= set(payload["issues"][0])
