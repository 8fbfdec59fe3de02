from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

import numpy as np
import matplotlib.pyplot as plt

from numericaltoolkit.config import PLOT_SAMPLES
from numericaltoolkit.exceptions import InvalidInputError, OutOfRangeError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class CubicSpline:
    """
    Natural cubic spline through an ordered set of knots.

    Segment i spans [x_i, x_{i+1}] and is evaluated as
    a_i + b_i*dx + c_i*dx**2 + d_i*dx**3 with dx = x - x_i.
    The coefficients are computed once and never change afterwards.
    """

    def __init__(self, points: Iterable[tuple[float, float]]) -> None:
        """
        Build the spline.

        Args:
            points: (x, y) knots with strictly increasing x.

        Raises:
            InvalidInputError: If fewer than two knots are given, a knot is not an
                (x, y) pair, a coordinate is not finite, or x is not strictly increasing.
        """
        try:
            knots = np.asarray(list(points), dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Knots must be (x, y) pairs of numbers: {e}")

        if knots.ndim != 2 or knots.shape[1] != 2:
            if knots.size < 2:
                raise InvalidInputError("At least two points are required.")
            raise InvalidInputError(f"Knots must be (x, y) pairs, got array of shape {knots.shape}.")
        if knots.shape[0] < 2:
            raise InvalidInputError("At least two points are required.")
        if not np.all(np.isfinite(knots)):
            raise InvalidInputError("Knot coordinates must be finite.")
        if np.any(np.diff(knots[:, 0]) <= 0.0):
            raise InvalidInputError("Knot x values must be strictly increasing.")

        self._x: npt.NDArray[np.float64] = knots[:, 0].copy()
        self._y: npt.NDArray[np.float64] = knots[:, 1].copy()
        self._n: int = self._x.size - 1  # number of segments

        # One extra degenerate segment at the last knot, so a query there returns y_n exactly
        self._a: npt.NDArray[np.float64] = self._y.copy()
        self._b: npt.NDArray[np.float64] = np.zeros(self._n + 1, dtype=np.float64)
        self._c: npt.NDArray[np.float64] = np.zeros(self._n + 1, dtype=np.float64)
        self._d: npt.NDArray[np.float64] = np.zeros(self._n + 1, dtype=np.float64)

        self._compute_coefficients()

        for arr in (self._x, self._y, self._a, self._b, self._c, self._d):
            arr.flags.writeable = False

        logger.debug(f"Built cubic spline with {self._n} segments on [{self._x[0]}, {self._x[-1]}].")

    def _compute_coefficients(self) -> None:
        """
        Solve the tridiagonal system for c with the Thomas algorithm, then derive b and d.

        Natural boundary conditions: c_0 = c_n = 0.
        """
        n = self._n
        x, a = self._x, self._a
        b, c, d = self._b, self._c, self._d

        h = np.diff(x)

        alpha = np.zeros(n, dtype=np.float64)
        for i in range(1, n):
            alpha[i] = 3.0 / h[i] * (a[i + 1] - a[i]) - 3.0 / h[i - 1] * (a[i] - a[i - 1])

        # Forward sweep (l_0 = 1, mu_0 = z_0 = 0)
        l = np.ones(n + 1, dtype=np.float64)
        mu = np.zeros(n + 1, dtype=np.float64)
        z = np.zeros(n + 1, dtype=np.float64)

        for i in range(1, n):
            l[i] = 2.0 * (x[i + 1] - x[i - 1]) - h[i - 1] * mu[i - 1]
            mu[i] = h[i] / l[i]
            z[i] = (alpha[i] - h[i - 1] * z[i - 1]) / l[i]

        # Backward substitution, starting from c_n = 0
        c[n] = 0.0
        for j in range(n - 1, -1, -1):
            c[j] = z[j] - mu[j] * c[j + 1]
            b[j] = (a[j + 1] - a[j]) / h[j] - h[j] * (c[j + 1] + 2.0 * c[j]) / 3.0
            d[j] = (c[j + 1] - c[j]) / (3.0 * h[j])

    @property
    def knots(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """Copies of the knot x and y values."""
        return self._x.copy(), self._y.copy()

    @property
    def domain(self) -> tuple[float, float]:
        """Closed interval on which the spline can be queried."""
        return float(self._x[0]), float(self._x[-1])

    @property
    def number_of_segments(self) -> int:
        return self._n

    @property
    def coefficients(self) -> npt.NDArray[np.float64]:
        """(n, 4) array with the a, b, c, d coefficients of every segment."""
        n = self._n
        return np.column_stack((self._a[:n], self._b[:n], self._c[:n], self._d[:n]))

    def interpolate(self, x: float | npt.ArrayLike) -> float | npt.NDArray[np.float64]:
        """
        Evaluate the spline.

        Args:
            x: Query value or array of query values.

        Raises:
            OutOfRangeError: If any query lies outside [x_0, x_n].

        Returns:
            Interpolated value (float for a scalar query, array of the same shape otherwise).
        """
        x_array = np.asarray(x, dtype=np.float64)
        lower, upper = self.domain

        outside = ~((x_array >= lower) & (x_array <= upper))
        if np.any(outside):
            bad = x_array[outside] if x_array.ndim else x_array
            raise OutOfRangeError(float(np.ravel(bad)[0]), lower, upper)

        # Rightmost knot with x_i <= query
        i = np.searchsorted(self._x, x_array, side="right") - 1
        dx = x_array - self._x[i]

        y = self._a[i] + self._b[i] * dx + self._c[i] * dx**2 + self._d[i] * dx**3

        if np.isscalar(x) or x_array.ndim == 0:
            return float(y)
        return y

    __call__ = interpolate

    def plot(self, samples: int = PLOT_SAMPLES) -> None:
        """
        Plot the knots and the interpolating curve.

        Args:
            samples: Number of evaluation points across the domain.
        """
        lower, upper = self.domain
        xs = np.linspace(lower, upper, samples)
        ys = self.interpolate(xs)

        plt.rcParams["figure.constrained_layout.use"] = True
        fig = plt.figure(figsize=(7, 5))

        plt.plot(xs, ys, 'b', lw=2, label="Spline")
        plt.plot(self._x, self._y, 'ro', label="Knots")

        plt.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        plt.minorticks_on()
        plt.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

        plt.title(f"Natural Cubic Spline ({self._n} segments)")
        plt.xlabel("x")
        plt.ylabel("y")
        plt.legend()

        plt.show()

    def __repr__(self) -> str:
        lower, upper = self.domain
        return f"CubicSpline(segments={self._n}, domain=[{lower}, {upper}])"


def spline(*points: tuple[float, float]) -> CubicSpline:
    """
    Build a natural cubic spline from knots given as positional (x, y) pairs.

    Example:
        >>> s = spline((0.0, 0.0), (1.0, 1.0), (2.0, 0.0))
        >>> s(1.0)
        1.0
    """
    return CubicSpline(points)
