"""
Global Constants
================
Central registry for the defaults shared across the toolkit.

Exports:
    DEFAULT_VARIABLE_NAME (str): Name of the variable an engine seeds when none is declared.
    DEFAULT_VARIABLE_VALUE (float): Initial value of undeclared/bare-name variables.
    FINITE_DIFFERENCE_STEP (float): Default width of the central-difference stencil.
    ROOT_FINDING_ITERATIONS (int): Default iteration cap for bisection and Newton.
    GRADIENT_DESCENT_ITERATIONS (int): Default iteration cap for gradient descent.
    LEARNING_RATE (float): Default gradient-descent learning rate.
    PLOT_SAMPLES (int): Number of points used when plotting a curve.
"""

DEFAULT_VARIABLE_NAME: str = "x"
DEFAULT_VARIABLE_VALUE: float = 0.0

FINITE_DIFFERENCE_STEP: float = 1e-3

ROOT_FINDING_ITERATIONS: int = 16
GRADIENT_DESCENT_ITERATIONS: int = 48
LEARNING_RATE: float = 0.1

PLOT_SAMPLES: int = 200
