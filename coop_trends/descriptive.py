"""
coop_trends.descriptive
~~~~~~~~~~~~~~~~~~~~~~~
Population statistics shared by the analysis components.

Every reduction runs strictly left-to-right over the input order
(``numpy.add.accumulate``) so the same series always yields bit-identical
results, independent of numpy's pairwise summation.
"""

from __future__ import annotations

import numpy as np


def sequential_sum(values: "array-like") -> float:
    """Sum *values* in input order. Returns ``0.0`` for an empty input."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(np.add.accumulate(arr)[-1])


def population_mean(values: "array-like") -> float:
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return sequential_sum(arr) / arr.size


def population_std(values: "array-like") -> float:
    """Standard deviation dividing by ``n`` (not ``n - 1``)."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    mean = population_mean(arr)
    variance = sequential_sum((arr - mean) ** 2) / arr.size
    return float(np.sqrt(variance))


def coefficient_of_variation(values: "array-like") -> float:
    """``std / mean`` as a fraction; ``0.0`` when the mean is zero."""
    mean = population_mean(values)
    if mean == 0:
        return 0.0
    return population_std(values) / mean


def round2(value: float) -> float:
    """Round to two decimals, normalising ``-0.0`` to ``0.0``."""
    return round(float(value), 2) + 0.0
