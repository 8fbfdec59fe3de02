from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from numericaltoolkit.exceptions import InvalidInputError

if TYPE_CHECKING:
    import numpy.typing as npt


def gauss_points_weights(n_points: int) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Generate Gauss-Legendre points and weights on the reference interval [-1, 1].

    Args:
        n_points: Number of integration points.

    Raises:
        InvalidInputError: If `n_points` is not 1, 2, or 3.

    Returns:
        A tuple containing the Gauss points and weights.
    """
    if n_points == 1:
        return np.array([0.0]), np.array([2.0])
    elif n_points == 2:
        return np.array([-1/np.sqrt(3), 1/np.sqrt(3)]), np.array([1.0, 1.0])
    elif n_points == 3:
        return np.array([-np.sqrt(3/5), 0.0, np.sqrt(3/5)]), np.array([5/9, 8/9, 5/9])
    else:
        raise InvalidInputError(f"Unsupported number of Gauss points: {n_points}. "
                                f"'n_points' must be 1, 2, or 3.")
