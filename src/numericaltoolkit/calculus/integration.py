from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

import numpy as np

from numericaltoolkit.calculus.gauss import gauss_points_weights
from numericaltoolkit.exceptions import InvalidInputError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def _validate_interval(lower: float, upper: float, steps: int, label: str = "segments") -> None:
    if not upper > lower:
        raise InvalidInputError(f"The interval must be ascending, got [{lower}, {upper}].")
    if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)) or steps <= 0:
        raise InvalidInputError(f"The number of {label} must be a positive integer, got {steps!r}.")


def _evaluate(f: Callable[[float], float], nodes: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Evaluate a scalar function node by node."""
    return np.fromiter((f(float(x)) for x in nodes), dtype=np.float64, count=nodes.size)


class Integral:
    """
    Closed-form quadrature rules over [lower, upper] split into `steps` equal segments.
    """

    @staticmethod
    def trapezoidal(f: Callable[[float], float], lower: float, upper: float, steps: int) -> float:
        """
        Composite trapezoidal rule.

        Args:
            f: Integrable function.
            lower: Lower integration limit.
            upper: Upper integration limit.
            steps: Number of segments.

        Raises:
            InvalidInputError: If the interval is not ascending or `steps` is not positive.
        """
        _validate_interval(lower, upper, steps)

        step = (upper - lower) / steps
        values = _evaluate(f, np.linspace(lower, upper, steps + 1))

        return float(step * (values.sum() - 0.5 * (values[0] + values[-1])))

    @staticmethod
    def midpoint(f: Callable[[float], float], lower: float, upper: float, steps: int) -> float:
        """
        Composite midpoint rule: each segment contributes f(centre) * width.

        Args:
            f: Integrable function.
            lower: Lower integration limit.
            upper: Upper integration limit.
            steps: Number of segments.
        """
        _validate_interval(lower, upper, steps)

        step = (upper - lower) / steps
        centres = lower + (np.arange(steps) + 0.5) * step

        return float(_evaluate(f, centres).sum() * step)

    @staticmethod
    def simpson(f: Callable[[float], float], lower: float, upper: float, steps: int) -> float:
        """
        Composite Simpson's rule (quadratic polynomials).

        Args:
            f: Integrable function.
            lower: Lower integration limit.
            upper: Upper integration limit.
            steps: Number of segments, positive and even.

        Raises:
            InvalidInputError: If `steps` is odd or not positive, or the interval is not ascending.
        """
        _validate_interval(lower, upper, steps)
        if steps % 2 != 0:
            raise InvalidInputError(f"The number of intervals must be positive and even, got {steps}.")

        step = (upper - lower) / steps
        values = _evaluate(f, np.linspace(lower, upper, steps + 1))

        # Weights 1, 4, 2, 4, ..., 2, 4, 1
        result = values[0] + values[-1] + 4.0 * values[1:-1:2].sum() + 2.0 * values[2:-1:2].sum()

        return float(step / 3.0 * result)

    @staticmethod
    def gauss_legendre(
        f: Callable[[float], float],
        lower: float,
        upper: float,
        steps: int,
        n_points: int = 2
    ) -> float:
        """
        Composite Gauss-Legendre quadrature.

        Args:
            f: Integrable function.
            lower: Lower integration limit.
            upper: Upper integration limit.
            steps: Number of segments.
            n_points: Gauss points per segment (1, 2 or 3).
        """
        _validate_interval(lower, upper, steps)
        points, weights = gauss_points_weights(n_points)

        step = (upper - lower) / steps
        left = lower + np.arange(steps) * step

        # Map reference points from [-1, 1] onto every segment
        nodes = (left[:, np.newaxis] + 0.5 * step * (points[np.newaxis, :] + 1.0)).ravel()
        values = _evaluate(f, nodes).reshape(steps, n_points)

        return float(0.5 * step * (values @ weights).sum())

    @staticmethod
    def monte_carlo(
        f: Callable[[float], float],
        lower: float,
        upper: float,
        samples: int,
        rng: Optional[np.random.Generator] = None
    ) -> float:
        """
        Hit-or-miss Monte Carlo estimate for a function with values in [0, 1].

        A uniform point (x, y) in [lower, upper] x [0, 1) counts as a hit when y < f(x).

        Args:
            f: Integrable function, bounded by [0, 1] on the interval.
            lower: Lower integration limit.
            upper: Upper integration limit.
            samples: Number of random points.
            rng: Random generator; a fresh default generator if omitted.
        """
        _validate_interval(lower, upper, samples, label="samples")
        rng = rng if rng is not None else np.random.default_rng()

        xs = rng.uniform(lower, upper, samples)
        ys = rng.uniform(0.0, 1.0, samples)
        hits = int(np.count_nonzero(ys < _evaluate(f, xs)))

        logger.debug(f"Monte Carlo: {hits} hits out of {samples} samples.")

        return hits / samples * (upper - lower)
