from __future__ import annotations

import logging
from typing import Callable

from numericaltoolkit.config import FINITE_DIFFERENCE_STEP, ROOT_FINDING_ITERATIONS
from numericaltoolkit.core.engine import IterationResult, Update, run, validate_iterations
from numericaltoolkit.exceptions import InvalidInputError
from numericaltoolkit.utils import central_difference

logger = logging.getLogger(__name__)


def bisection(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    iterations: int = ROOT_FINDING_ITERATIONS
) -> IterationResult:
    """
    Bisection method over the bracket [lower, upper].

    The engine holds the bounds as variables "a" and "b". Every iteration both
    bounds see the same midpoint; the bound whose sign matches f(midpoint)
    moves onto it.

    Args:
        f: Continuous function with a sign change on the bracket.
        lower: Left end of the bracket.
        upper: Right end of the bracket.
        iterations: Number of halvings.

    Raises:
        InvalidInputError: If f(lower) and f(upper) have the same strict sign.

    Returns:
        Result with the final bracket; either bound approximates the root.
        A bound that is already a root is returned as the bracket [r, r]
        without iterating.
    """
    validate_iterations(iterations)

    f_lower, f_upper = f(lower), f(upper)
    if f_lower * f_upper > 0.0:
        raise InvalidInputError(f"f({lower}) and f({upper}) must have opposite signs.")

    # A root on a bound collapses the bracket onto it
    for bound, value in ((lower, f_lower), (upper, f_upper)):
        if value == 0.0:
            logger.debug(f"Bisection bound {bound} is already a root.")
            return IterationResult(variables={"a": float(bound), "b": float(bound)}, iterations=0)

    def update(v, name, x):
        mid = (v["a"] + v["b"]) / 2.0
        if f(mid) * f(x) < 0.0:
            return x
        return mid

    result = run(iterations, variables={"a": lower, "b": upper}, update_rule=update)
    logger.debug(f"Bisection bracket after {result.iterations} iterations: [{result['a']}, {result['b']}]")
    return result


def newton(
    f: Callable[[float], float],
    x0: float,
    iterations: int = ROOT_FINDING_ITERATIONS,
    step: float = FINITE_DIFFERENCE_STEP
) -> IterationResult:
    """
    Newton's method with a central-difference derivative.

    Stops early once an update moves x by less than `step`. A vanishing
    derivative is not guarded: the division raises `ZeroDivisionError`.

    Args:
        f: Differentiable function.
        x0: Starting point.
        iterations: Iteration cap.
        step: Finite-difference width and convergence threshold.

    Raises:
        ZeroDivisionError: If the difference quotient is exactly zero at an iterate.
    """
    def update(_, __, x):
        new_x = x - f(x) / central_difference(f, x, step)
        return Update(new_x, converged=abs(new_x - x) < step)

    return run(iterations, variables={"x": x0}, update_rule=update)
