"""
Error Taxonomy
==============
Every failure raised by the toolkit derives from `NumericalToolkitError`.

Both concrete kinds also derive from `ValueError`, so callers that already
guard numpy/scipy argument errors with ``except ValueError`` keep working.
"""
from __future__ import annotations


class NumericalToolkitError(Exception):
    """Base class for all toolkit errors."""


class InvalidInputError(NumericalToolkitError, ValueError):
    """
    Malformed construction or call arguments.

    Raised immediately at call time (e.g. fewer than two spline knots,
    a negative iteration count, mismatched weights).
    """


class OutOfRangeError(NumericalToolkitError, ValueError):
    """
    A query outside the valid domain of an otherwise valid object.

    The object that raised it stays valid and reusable.
    """

    def __init__(self, value: float, lower: float, upper: float) -> None:
        self.value = value
        self.lower = lower
        self.upper = upper
        super().__init__(f"Value {value!r} is outside the interval [{lower!r}, {upper!r}].")
