# weightcheck/core/types.py
# -*- coding: utf-8 -*-

"""
Shared type aliases.

Contents
--------
- StrPath: str or pathlib.Path
- JSON* aliases: JSONScalar, JSONValue, JSONList, JSONDict
- Number: int or float
- AxleSpan: (first_axle, last_axle) indices, inclusive
"""

from __future__ import annotations

from pathlib import Path
from typing import (
      Dict
    , List
    , Tuple
    , Union
)


# ────────────────────────────────────────────────────────────────────────────────
# Path-like
# ────────────────────────────────────────────────────────────────────────────────

StrPath = Union[str, Path]
"""Path representation accepted by the IO helpers (string or Path)."""


# ────────────────────────────────────────────────────────────────────────────────
# JSON-like structures
# ────────────────────────────────────────────────────────────────────────────────

JSONScalar = Union[str, int, float, bool, None]
JSONValue = Union["JSONScalar", "JSONList", "JSONDict"]
JSONList = List[JSONValue]
JSONDict = Dict[str, JSONValue]


# ────────────────────────────────────────────────────────────────────────────────
# Numeric helpers
# ────────────────────────────────────────────────────────────────────────────────

Number = Union[int, float]
"""Numeric value (int or float)."""

AxleSpan = Tuple[int, int]
"""Zero-based (first, last) axle indices of a group, both inclusive."""
