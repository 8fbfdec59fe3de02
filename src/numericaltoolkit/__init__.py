"""
Numerical Toolkit
=================
Small numerical-methods library for exploratory scripts.

Subpackages:
    core: The iterative update engine (fixed-point / population updates).
    calculus: Cubic spline interpolation and closed-form integration.
    data: Data bundles and descriptive statistics.
    probability: Random-variate generators.
    solvers: Root finding and optimization built on the engine.
"""
from numericaltoolkit.calculus.integration import Integral
from numericaltoolkit.calculus.interpolation import CubicSpline, spline
from numericaltoolkit.core.engine import IterationResult, IterativeEngine, Update, run
from numericaltoolkit.exceptions import InvalidInputError, NumericalToolkitError, OutOfRangeError

__all__ = [
    "CubicSpline",
    "Integral",
    "InvalidInputError",
    "IterationResult",
    "IterativeEngine",
    "NumericalToolkitError",
    "OutOfRangeError",
    "Update",
    "run",
    "spline",
]
