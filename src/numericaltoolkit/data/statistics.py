"""
Descriptive Statistics
======================
Direct formulas over a flat sequence of numbers (a list, an array, a
`DataBundle` or an engine result's `values`).

Weighted variants take a list of pre-conditioned weights, one per element.
Variance and deviation are population statistics (divide by N).
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable

import numpy as np

from numericaltoolkit.exceptions import InvalidInputError

if TYPE_CHECKING:
    import numpy.typing as npt


def _as_array(data: Iterable[float]) -> npt.NDArray[np.float64]:
    return np.asarray(list(data), dtype=np.float64)


def _require_data(values: npt.NDArray[np.float64]) -> None:
    if values.size == 0:
        raise InvalidInputError("At least one data point is required.")


def _with_weights(data: Iterable[float], weights: Iterable[float]) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    values = _as_array(data)
    w = _as_array(weights)
    if values.size != w.size:
        raise InvalidInputError(f"Weights list size ({w.size}) and data size ({values.size}) must be equal.")
    _require_data(values)
    if w.sum() == 0.0:
        raise InvalidInputError("Weights must not sum to zero.")
    return values, w


def mean(data: Iterable[float]) -> float:
    """Arithmetic mean."""
    values = _as_array(data)
    _require_data(values)
    return float(values.mean())


def weighted_average(data: Iterable[float], weights: Iterable[float]) -> float:
    """Sum of w_i * x_i divided by the sum of the weights."""
    values, w = _with_weights(data, weights)
    return float((values * w).sum() / w.sum())


def weighted_average_by(data: Iterable[float], element: Callable[[int, float], float]) -> float:
    """
    Arithmetic mean of already-weighted element impacts.

    Args:
        data: The values.
        element: Maps (index, value) to that element's weighted impact.
    """
    values = _as_array(data)
    _require_data(values)
    return float(np.mean([element(i, float(x)) for i, x in enumerate(values)]))


def variance(data: Iterable[float]) -> float:
    """Expected value of the squared deviation from the mean."""
    values = _as_array(data)
    _require_data(values)
    return float(((values - values.mean()) ** 2).mean())


def deviation(data: Iterable[float]) -> float:
    """Standard deviation (square root of the population variance)."""
    return float(np.sqrt(variance(data)))


def median(data: Iterable[float]) -> float:
    """Middle value of the sorted data; mean of the two middle values for even sizes."""
    values = np.sort(_as_array(data))
    _require_data(values)
    mid = values.size // 2
    if values.size % 2 == 0:
        return float((values[mid - 1] + values[mid]) / 2.0)
    return float(values[mid])


def median_weighted(data: Iterable[float], weights: Iterable[float]) -> float:
    """
    The element at the 50 % weighted percentile.

    Returns the smallest value whose cumulative weight (in sorted order)
    reaches half of the total weight.
    """
    values, w = _with_weights(data, weights)
    order = np.argsort(values, kind="stable")
    cumulative = np.cumsum(w[order])
    index = int(np.searchsorted(cumulative, cumulative[-1] / 2.0, side="left"))
    return float(values[order][index])


def geometric_mean(data: Iterable[float]) -> float:
    """n-th root of the product of the values; 0.0 for empty data."""
    values = _as_array(data)
    if values.size == 0:
        return 0.0
    return float(np.prod(values) ** (1.0 / values.size))


def geometric_mean_weighted(data: Iterable[float], weights: Iterable[float]) -> float:
    """exp(sum(w_i * ln x_i) / sum(w_i))."""
    values, w = _with_weights(data, weights)
    with np.errstate(divide="ignore"):
        # Zero-weighted zeros must not poison the sum with 0 * -inf
        logs = np.where(w != 0.0, np.log(values), 0.0)
    return float(np.exp((w * logs).sum() / w.sum()))


def harmonic_mean(data: Iterable[float]) -> float:
    """Reciprocal of the mean of reciprocals; 0.0 for empty data."""
    values = _as_array(data)
    if values.size == 0:
        return 0.0
    return float(values.size / (1.0 / values).sum())


def harmonic_mean_weighted(data: Iterable[float], weights: Iterable[float]) -> float:
    """sum(w_i) / sum(w_i / x_i)."""
    values, w = _with_weights(data, weights)
    return float(w.sum() / (w / values).sum())


def rms(data: Iterable[float]) -> float:
    """Root mean square."""
    values = _as_array(data)
    _require_data(values)
    return float(np.sqrt((values ** 2).mean()))
