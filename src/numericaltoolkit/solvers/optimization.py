from __future__ import annotations

import logging
from typing import Callable, Mapping, Sequence

from numericaltoolkit.config import FINITE_DIFFERENCE_STEP, GRADIENT_DESCENT_ITERATIONS, LEARNING_RATE
from numericaltoolkit.core.engine import IterationResult, run
from numericaltoolkit.exceptions import InvalidInputError
from numericaltoolkit.utils import central_difference

logger = logging.getLogger(__name__)


def gradient_descent(
    f: Callable[[float], float],
    x0: float,
    learning_rate: float = LEARNING_RATE,
    step: float = FINITE_DIFFERENCE_STEP,
    iterations: int = GRADIENT_DESCENT_ITERATIONS
) -> IterationResult:
    """
    Minimize a one-dimensional function with fixed-rate gradient descent.

    Args:
        f: Objective.
        x0: Starting point.
        learning_rate: Multiplier of the gradient in every step.
        step: Central-difference width.
        iterations: Number of steps.
    """
    def update(_, __, x):
        return x - learning_rate * central_difference(f, x, step)

    return run(iterations, variables={"x": x0}, update_rule=update)


def gradient_descent_nd(
    f: Callable[[Sequence[float]], float],
    start: Mapping[str, float],
    learning_rate: float = LEARNING_RATE,
    step: float = FINITE_DIFFERENCE_STEP,
    iterations: int = GRADIENT_DESCENT_ITERATIONS
) -> IterationResult:
    """
    Minimize a multi-dimensional function, one engine variable per coordinate.

    Every partial derivative is taken at the point of the iteration snapshot,
    so all coordinates move together as a true gradient step.

    Args:
        f: Objective taking the coordinates in the declaration order of `start`.
        start: Coordinate name -> starting value.
        learning_rate: Multiplier of the gradient in every step.
        step: Central-difference width.
        iterations: Number of steps.
    """
    names = list(start)
    if not names:
        raise InvalidInputError("At least one coordinate is required.")

    def update(v, name, x):
        point = [v[n] for n in names]
        k = names.index(name)

        def along(t: float) -> float:
            shifted = list(point)
            shifted[k] = t
            return f(shifted)

        return x - learning_rate * central_difference(along, x, step)

    result = run(iterations, variables=start, update_rule=update)
    logger.debug(f"Gradient descent in {len(names)} dimensions finished at f = {f(result.values)}")
    return result
