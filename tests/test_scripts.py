"""
Tests for the CLI scripts (single check and bulk CSV run).
"""

import json

import pandas as pd
import pytest


def _last_json_line(out):
    lines = [ln for ln in out.splitlines() if ln.strip()]
    return json.loads(lines[-1])


class TestCheckComplianceScript:
    def test_compliant_exit_code(self, load_script, capsys):
        mod = load_script("check_compliance")
        rc = mod.main(
            [
                "--axle-weights", "12000", "17000", "17000", "17000", "17000",
                "--axle-spacing", "12", "4.5", "36", "4.5",
            ]
        )
        payload = _last_json_line(capsys.readouterr().out)

        assert rc == mod.EXIT_COMPLIANT
        assert payload["result"]["is_compliant"] is True
        assert payload["assessment"]["status"] == "Warning"

    def test_non_compliant_exit_code(self, load_script, capsys):
        mod = load_script("check_compliance")
        rc = mod.main(
            [
                "--axle-weights", "16000", "16000", "16001", "16000", "16000",
                "--axle-spacing", "12", "4.5", "36", "4.5",
                "--state", "NY",
            ]
        )
        payload = _last_json_line(capsys.readouterr().out)

        assert rc == mod.EXIT_NON_COMPLIANT
        assert payload["result"]["jurisdiction"] == "NY"
        assert [v["type"] for v in payload["result"]["violations"]] == ["gross"]

    def test_invalid_layout(self, load_script, capsys):
        mod = load_script("check_compliance")
        rc = mod.main(["--axle-weights", "16000", "16000", "16000", "--axle-spacing", "4.5"])

        assert rc == mod.EXIT_INVALID

    def test_vehicle_json(self, load_script, capsys, tmp_path):
        path = tmp_path / "vehicle.json"
        path.write_text(
            json.dumps(
                {
                    "type": "3-Axle Straight Truck",
                    "axles": {"axleCount": 3, "axleSpacing": [4.5, 4.5], "axleWeights": [14250, 14250, 14251]},
                    "grossWeight": 1,
                }
            ),
            encoding="utf-8",
        )
        mod = load_script("check_compliance")
        rc = mod.main(["--vehicle-json", str(path)])
        payload = _last_json_line(capsys.readouterr().out)

        assert rc == mod.EXIT_NON_COMPLIANT
        assert payload["result"]["gross_weight"] == 42751
        assert payload["result"]["violations"][0]["type"] == "bridge-formula"

    @pytest.mark.parametrize("body", ["[14250, 14250, 14250]", "\"5-Axle Semi\"", "{not json"])
    def test_unusable_vehicle_json(self, load_script, tmp_path, body):
        path = tmp_path / "vehicle.json"
        path.write_text(body, encoding="utf-8")
        mod = load_script("check_compliance")

        assert mod.main(["--vehicle-json", str(path)]) == mod.EXIT_INVALID

    def test_missing_vehicle_json(self, load_script, tmp_path):
        mod = load_script("check_compliance")

        assert mod.main(["--vehicle-json", str(tmp_path / "missing.json")]) == mod.EXIT_INVALID


class TestBulkComplianceScript:
    def test_bulk_run(self, load_script, tmp_path):
        src = tmp_path / "tickets.csv"
        pd.DataFrame(
            [
                {
                    "ticket_id": "T1",
                    "state": "",
                    "axle_weights": "10,000 lbs; 12000; 12000; 12000; 12000",
                    "axle_spacing": "12;4.5;36;4.5",
                },
                {
                    "ticket_id": "T2",
                    "state": "ny",
                    "axle_weights": "16000|16000|16001|16000|16000",
                    "axle_spacing": "12|4.5|36|4.5",
                },
                {
                    "ticket_id": "T3",
                    "state": "TX",
                    "axle_weights": "16000;16000;16000",
                    "axle_spacing": "4.5",
                },
            ]
        ).to_csv(src, index=False)
        dst = tmp_path / "out" / "verdicts.csv"

        mod = load_script("bulk_compliance")
        rc = mod.main(["--input-csv", str(src), "--output-csv", str(dst), "--log-level", "ERROR"])
        out = pd.read_csv(dst, dtype={"ticket_id": str})

        assert rc == 0
        assert list(out["ticket_id"]) == ["T1", "T2", "T3"]

        t1, t2, t3 = (out.iloc[i] for i in range(3))
        assert t1["status"] == "Compliant"
        assert t1["jurisdiction"] == "US"
        assert t2["status"] == "Non-Compliant"
        assert t2["jurisdiction"] == "NY"
        assert t2["violation_count"] == 1
        assert json.loads(t2["violations"])[0]["type"] == "gross"
        assert "expected 2 axle spacings" in t3["error"]

    @pytest.mark.parametrize("bad", ["n/a", "1.2.3"])
    def test_unreadable_weight_is_a_row_error(self, load_script, bad):
        mod = load_script("bulk_compliance")
        df = pd.DataFrame(
            [
                {
                    "ticket_id": "T1",
                    "axle_weights": f"12000;17000;17000;17000;{bad}",
                    "axle_spacing": "12;4.5;36;4.5",
                }
            ]
        )
        out = mod.evaluate_tickets(df, default_state="US", warning_ratio=0.95)
        row = out.iloc[0]

        assert bad in row["error"]
        assert pd.isna(row["status"])
        assert pd.isna(row["is_compliant"])

    def test_missing_columns(self, load_script, tmp_path):
        src = tmp_path / "bad.csv"
        pd.DataFrame([{"ticket_id": "T1", "weight": "80000"}]).to_csv(src, index=False)

        mod = load_script("bulk_compliance")

        assert mod.main(["--input-csv", str(src), "--log-level", "ERROR"]) == 1

    def test_missing_input(self, load_script, tmp_path):
        mod = load_script("bulk_compliance")

        assert mod.main(["--input-csv", str(tmp_path / "nope.csv"), "--log-level", "ERROR"]) == 1
