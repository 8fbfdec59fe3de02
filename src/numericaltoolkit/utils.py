from __future__ import annotations

from typing import Callable

from numericaltoolkit.config import FINITE_DIFFERENCE_STEP


def central_difference(f: Callable[[float], float], x: float, step: float = FINITE_DIFFERENCE_STEP) -> float:
    """Approximate f'(x) with a central difference of total width `step`."""
    return (f(x + step / 2.0) - f(x - step / 2.0)) / step

