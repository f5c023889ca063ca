# weightcheck/compliance/limits.py
# -*- coding: utf-8 -*-
"""
Jurisdiction weight limits
==========================

Main entry point
----------------
- resolve_limits(state_code) -> (jurisdiction_code, WeightLimits, fallback_used)

Reference data
--------------
- FEDERAL_WEIGHT_LIMITS: the federal limit set.
- State overrides are read from a CSV bundled with the package
  (`_data/state_weight_limits.csv`). A blank cell means "no override": the
  federal value applies for that field.

CSV expectations
----------------
Header with at least:
  - 'state'          (two-letter code, e.g. 'NY')
  - 'name'           (display name, optional)
  - 'single_axle', 'tandem_axle', 'tridem_axle', 'gross_vehicle' (lbs)
  - 'bridge_formula' (true/false)

Column names are case-insensitive. The path can be overridden with the
WEIGHTCHECK_STATE_LIMITS_CSV environment variable.

The table is parsed once per path and handed out as a read-only mapping.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import pandas as pd

from weightcheck.core.config import get_compliance_defaults
from weightcheck.core.models import WeightLimits
from weightcheck.core.types import StrPath
from weightcheck.infra.logging import get_logger

_log = get_logger(__name__)

STATE_LIMITS_ENV = "WEIGHTCHECK_STATE_LIMITS_CSV"

_CURRENT_DIR = Path(__file__).resolve().parent
DEFAULT_STATE_LIMITS_CSV: Path = _CURRENT_DIR / "_data" / "state_weight_limits.csv"

LIMIT_FIELDS: Tuple[str, ...] = ("single_axle", "tandem_axle", "tridem_axle", "gross_vehicle")

# ────────────────────────────────────────────────────────────────────────────────
# Federal limits (lbs)
# ────────────────────────────────────────────────────────────────────────────────
FEDERAL_WEIGHT_LIMITS = WeightLimits(
      single_axle=20000.0
    , tandem_axle=34000.0
    , tridem_axle=42000.0
    , gross_vehicle=80000.0
    , bridge_formula=True
)

# codes that explicitly mean "federal"
_FEDERAL_ALIASES = frozenset({"", "US", "USA", "FED", "FEDERAL"})


# ───────────────────────────── CSV path resolution ─────────────────────────────


def _coalesce_path(explicit_path: StrPath | None) -> Path:
    """
    Resolve the CSV path in this priority:
      1) explicit_path argument
      2) env var WEIGHTCHECK_STATE_LIMITS_CSV
      3) DEFAULT_STATE_LIMITS_CSV (package data)
    """
    if explicit_path is not None:
        return Path(explicit_path)
    env_path = os.getenv(STATE_LIMITS_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_STATE_LIMITS_CSV


def _as_bool(value: Any) -> Optional[bool]:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"true", "t", "yes", "y", "1"}:
        return True
    if text in {"false", "f", "no", "n", "0"}:
        return False
    return None


# ───────────────────────────── state table loader ──────────────────────────────


def load_state_limits_table(
    csv_path: StrPath | None = None,
) -> pd.DataFrame:
    """
    Load the state override table.

    Returns
    -------
    pd.DataFrame
        Columns: ['state', 'name', *LIMIT_FIELDS, 'bridge_formula'].
        Limit columns are numeric with NaN for "no override";
        'bridge_formula' holds True/False/None.
        If the file is missing, returns an empty DataFrame.
    """
    path = _coalesce_path(csv_path)
    columns = ["state", "name", *LIMIT_FIELDS, "bridge_formula"]

    if not path.is_file():
        _log.warning(
            "load_state_limits_table: CSV not found at '%s'. All jurisdictions fall back to federal limits.",
            path,
        )
        return pd.DataFrame(columns=columns)

    df_raw = pd.read_csv(path, dtype=str, keep_default_na=True)
    cols_map = {c.lower().strip(): c for c in df_raw.columns}

    state_col = cols_map.get("state") or cols_map.get("code") or cols_map.get("uf")
    if state_col is None:
        raise ValueError(f"State limits CSV '{path}' has no 'state' column")

    df = pd.DataFrame(
        {"state": df_raw[state_col].astype(str).str.upper().str.strip()}
    )
    name_col = cols_map.get("name")
    df["name"] = df_raw[name_col].fillna("").astype(str).str.strip() if name_col else ""

    for fld in LIMIT_FIELDS:
        src = cols_map.get(fld)
        df[fld] = pd.to_numeric(df_raw[src], errors="coerce") if src else float("nan")

    bf_col = cols_map.get("bridge_formula")
    df["bridge_formula"] = df_raw[bf_col].map(_as_bool) if bf_col else None

    df = df[df["state"] != ""].drop_duplicates(subset=["state"], keep="first").reset_index(drop=True)

    _log.info(
        "load_state_limits_table: loaded %d jurisdictions from '%s'.",
        len(df),
        path,
    )
    return df


def build_state_limits(
      table: pd.DataFrame
    , *
    , federal: WeightLimits = FEDERAL_WEIGHT_LIMITS
) -> Mapping[str, WeightLimits]:
    """
    Merge each state's overrides over the federal limits.

    Returns a read-only mapping {state_code: WeightLimits}.
    """
    out: Dict[str, WeightLimits] = {}
    for row in table.to_dict(orient="records"):
        values: Dict[str, Any] = {}
        for fld in LIMIT_FIELDS:
            v = row.get(fld)
            values[fld] = getattr(federal, fld) if v is None or pd.isna(v) else float(v)
        bf = row.get("bridge_formula")
        values["bridge_formula"] = federal.bridge_formula if bf is None or pd.isna(bf) else bool(bf)
        out[str(row["state"])] = WeightLimits(**values)
    return MappingProxyType(out)


@lru_cache(maxsize=8)
def _cached_state_tables(path_str: str) -> Tuple[Mapping[str, WeightLimits], Mapping[str, str]]:
    table = load_state_limits_table(path_str)
    limits = build_state_limits(table)
    names = MappingProxyType(
        {str(r["state"]): (str(r["name"]) or str(r["state"])) for r in table.to_dict(orient="records")}
    )
    return limits, names


def get_state_limits(csv_path: StrPath | None = None) -> Mapping[str, WeightLimits]:
    """
    Return the read-only {state_code: WeightLimits} table (parsed once per path).
    """
    return _cached_state_tables(str(_coalesce_path(csv_path)))[0]


def get_state_names(csv_path: StrPath | None = None) -> Mapping[str, str]:
    """
    Return the read-only {state_code: display_name} table.
    """
    return _cached_state_tables(str(_coalesce_path(csv_path)))[1]


def clear_limits_cache() -> None:
    """Forget parsed tables (tests, or after editing the CSV)."""
    _cached_state_tables.cache_clear()


# ─────────────────────────── jurisdiction resolution ───────────────────────────


def normalize_jurisdiction(code: str | None) -> str:
    return (code or "").strip().upper()


def is_federal_code(code: str | None) -> bool:
    return normalize_jurisdiction(code) in _FEDERAL_ALIASES


def resolve_limits(
      state_code: str | None
    , *
    , state_limits: Mapping[str, WeightLimits] | None = None
) -> Tuple[str, WeightLimits, bool]:
    """
    Resolve the limit set for a jurisdiction code.

    Unknown codes fall back to federal limits instead of failing; the third
    element of the returned tuple tells the caller that happened.

    Returns
    -------
    (jurisdiction_code, limits, fallback_used)
        jurisdiction_code is the federal code when federal limits apply.
    """
    federal_code = get_compliance_defaults().federal_code
    code = normalize_jurisdiction(state_code)

    if code in _FEDERAL_ALIASES:
        return federal_code, FEDERAL_WEIGHT_LIMITS, False

    table = state_limits if state_limits is not None else get_state_limits()
    limits = table.get(code)
    if limits is None:
        _log.warning(
            "resolve_limits: unknown jurisdiction %r; falling back to federal limits.",
            state_code,
        )
        return federal_code, FEDERAL_WEIGHT_LIMITS, True

    _log.debug("resolve_limits: %s -> %s", code, limits)
    return code, limits, False
