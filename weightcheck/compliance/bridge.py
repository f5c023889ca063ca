# weightcheck/compliance/bridge.py
# -*- coding: utf-8 -*-
"""
Federal bridge formula
----------------------
    W = 500 * (L*N/(N-1) + 12*N + 36)

W is the maximum weight (lbs) on any group of N consecutive axles whose
outer axles are L feet apart.

Lengths are taken at their decimal value ("12.2 ft" is exactly 12.2) and
the formula is evaluated with `fractions.Fraction`, so the whole-pound
limit is never pushed below the exact value by binary float error.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Iterator, Sequence, Tuple

from weightcheck.core.types import AxleSpan, Number


def _exact(value: Number) -> Fraction:
    # str() gives the shortest repr that round-trips, i.e. the decimal the caller typed
    return Fraction(str(float(value)))


def _exact_weight(length_ft: Number, axle_count: int) -> Fraction:
    n = int(axle_count)
    if n < 2:
        raise ValueError(f"bridge formula needs at least 2 axles, got {n}")
    length = max(Fraction(0), _exact(length_ft))
    return 500 * (length * n / (n - 1) + 12 * n + 36)


def bridge_formula_weight(length_ft: float, axle_count: int) -> float:
    """
    Raw bridge-formula weight for N axles spread over L feet.

    For N < 2 the formula is undefined; callers only use N ≥ 2, so this
    raises instead of guessing.
    """
    return float(_exact_weight(length_ft, axle_count))


def bridge_formula_limit(length_ft: float, axle_count: int) -> float:
    """
    Bridge-formula limit rounded down to a whole pound.
    """
    return float(math.floor(_exact_weight(length_ft, axle_count)))


def iter_axle_runs(
      axle_spacing: Sequence[float]
    , *
    , min_axles: int = 3
) -> Iterator[Tuple[AxleSpan, float]]:
    """
    Yield every run of ≥ `min_axles` consecutive axles as
    ((first, last), length_ft), ordered by first axle, then run length.

    Lengths are summed exactly, so 0.1 + 0.2 yields 0.3.
    """
    axle_count = len(axle_spacing) + 1
    for first in range(axle_count):
        length = Fraction(0)
        for last in range(first + 1, axle_count):
            length += _exact(axle_spacing[last - 1])
            if last - first + 1 >= min_axles:
                yield (first, last), float(length)
