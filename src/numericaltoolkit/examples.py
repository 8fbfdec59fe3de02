"""
Example Programs
================
Short exploratory scripts showing how the pieces compose.

Every function returns its result (and logs it), so the demos double as
smoke tests. `numericaltoolkit.main.main` runs them all.
"""
from __future__ import annotations

import logging
import math
import string
import time
from typing import Optional

import numpy as np
from scipy import integrate

from numericaltoolkit.calculus.integration import Integral
from numericaltoolkit.calculus.interpolation import CubicSpline
from numericaltoolkit.core.engine import IterativeEngine
from numericaltoolkit.data import statistics
from numericaltoolkit.data.bundle import DataBundle
from numericaltoolkit.exceptions import InvalidInputError
from numericaltoolkit.probability.distributions import gaussian, uniform
from numericaltoolkit.solvers.optimization import gradient_descent, gradient_descent_nd
from numericaltoolkit.solvers.root_finding import bisection, newton

logger = logging.getLogger(__name__)


def bisection_method() -> list[float]:
    """Root of x^2 - 2 between 0 and 2; both final bounds approximate sqrt(2)."""
    result = bisection(lambda x: x**2 - 2.0, 0.0, 2.0, iterations=16)
    logger.info(f"Bisection: {result.values}")
    return result.values


def newtons_method() -> float:
    """Double root of (x - 2)^2 starting from 0, stopping once the step is tiny."""
    result = newton(lambda x: (x - 2.0) ** 2, 0.0, iterations=16)
    logger.info(f"Newton: {result.value()} after {result.iterations} iterations")
    return result.value()


def minimum_with_gradient_descent() -> float:
    """Minimum of (x - 3)^2."""
    result = gradient_descent(lambda x: (x - 3.0) ** 2, 0.0, learning_rate=0.1, iterations=48)
    logger.info(f"Gradient descent: {result.value()}")
    return result.value()


def fifteen_dimensional_minimum(iterations: int = 50) -> list[float]:
    """Minimum of sum_i (x_i - i)^2 for i = 1..15; converges to [1, 2, ..., 15]."""
    names = list(string.ascii_lowercase[:15])

    def f(x):
        return sum((xi - (i + 1)) ** 2 for i, xi in enumerate(x))

    result = gradient_descent_nd(f, {name: 0.0 for name in names}, iterations=iterations)
    logger.info(f"15-D gradient descent: {[round(v, 3) for v in result.values]}")
    return result.values


# Payoff of the row player in one round (years in prison, negated)
PAYOFF_BOTH_COOPERATE = -10
PAYOFF_SUCKER = -20
PAYOFF_TEMPTATION = 0
PAYOFF_BOTH_DEFECT = -3


class Population:
    """
    Cooperation rates of a population, regenerated around an average each generation.
    """

    def __init__(self, size: int, average: float, spread: float = 0.1, rng: Optional[np.random.Generator] = None) -> None:
        self.size = size
        self.spread = spread
        self.rng = rng if rng is not None else np.random.default_rng()
        self.rates = self.spawn(average)

    def spawn(self, average: float) -> np.ndarray:
        """Draw a new generation, cropping every rate to [0, 1]."""
        mu = gaussian(average, self.spread, rng=self.rng)
        return np.clip(mu.samples(self.size), 0.0, 1.0)

    def play(self, i: int, j: int) -> int:
        """One round between individuals i and j; payoff for i."""
        coop1 = self.rng.random() < self.rates[i]
        coop2 = self.rng.random() < self.rates[j]

        if coop1 and coop2:
            return PAYOFF_BOTH_COOPERATE
        if coop1:
            return PAYOFF_SUCKER
        if coop2:
            return PAYOFF_TEMPTATION
        return PAYOFF_BOTH_DEFECT


def prisoners_dilemma(
    generations: int = 10,
    population_size: int = 200,
    survivors: int = 20,
    initial_average: float = 0.5,
    rng: Optional[np.random.Generator] = None
) -> float:
    """
    Evolve the average cooperation rate of a population.

    Each engine variable is one individual's fitness. The update rule plays
    the individual against everyone else in the current generation; the
    post-update hook keeps the fittest `survivors`, averages their cooperation
    rate and breeds the next generation around it.

    Returns:
        The final average cooperation rate.

    Raises:
        InvalidInputError: If `survivors` is not between 1 and `population_size`.
    """
    if not 1 <= survivors <= population_size:
        raise InvalidInputError(f"Survivors must be between 1 and {population_size}, got {survivors}.")

    population = Population(population_size, initial_average, rng=rng)
    state = {"average": initial_average}

    def fitness(_, name, __):
        me = int(name)
        return float(sum(population.play(me, other) for other in range(population_size) if other != me))

    def select(fits):
        ranked = sorted(fits, key=fits.get)
        survived = [int(name) for name in ranked[population_size - survivors:]]
        state["average"] = float(population.rates[survived].mean())
        population.rates = population.spawn(state["average"])

    engine = IterativeEngine(
        update_rule=fitness,
        variables=[str(i) for i in range(population_size)],
        post_update_hook=select,
    )
    engine.run(generations)

    logger.info(f"Prisoner's dilemma: average cooperation rate {state['average']:.3f}")
    return state["average"]


def find_pi(n: int = 1_000_000, rng: Optional[np.random.Generator] = None) -> float:
    """Monte Carlo estimate of pi from points of the unit square falling in the quarter circle."""
    rng = rng if rng is not None else np.random.default_rng()
    x = uniform(0.0, 1.0, rng=rng)
    y = uniform(0.0, 1.0, rng=rng)

    data = DataBundle.of(np.hypot(x.samples(n), y.samples(n)), condition=lambda r: r < 1.0)

    estimate = 4.0 * len(data) / n
    logger.info(f"Pi estimate: {estimate}")
    return estimate


def compare_integrals(steps: int = 1000, samples: int = 1_000_000, rng: Optional[np.random.Generator] = None) -> dict[str, tuple[float, float]]:
    """
    Integrate sin over [0, pi] (exactly 2) with every rule.

    Returns:
        Rule name -> (value, elapsed milliseconds), including the scipy reference.
    """
    f = math.sin
    lower, upper = 0.0, math.pi

    rules = {
        "Trapezoidal": lambda: Integral.trapezoidal(f, lower, upper, steps),
        "Midpoint": lambda: Integral.midpoint(f, lower, upper, steps),
        "Simpson": lambda: Integral.simpson(f, lower, upper, steps),
        "Gauss-Legendre": lambda: Integral.gauss_legendre(f, lower, upper, steps, n_points=3),
        "Monte-Carlo": lambda: Integral.monte_carlo(f, lower, upper, samples, rng=rng),
        "scipy.quad": lambda: integrate.quad(f, lower, upper)[0],
    }

    results: dict[str, tuple[float, float]] = {}
    for name, rule in rules.items():
        start = time.perf_counter()
        value = rule()
        elapsed = (time.perf_counter() - start) * 1000.0
        results[name] = (value, elapsed)
        logger.info(f"{name}: {value:.8f} | {elapsed:.1f} ms")

    return results


def spline_interpolation(segments: int = 5, query: float = 1.1) -> tuple[float, float]:
    """
    Interpolate sin on [0, pi] from `segments` + 1 knots.

    Returns:
        (spline value, exact value) at `query`.
    """
    knots = [(i * math.pi / segments, math.sin(i * math.pi / segments)) for i in range(segments + 1)]
    interpolant = CubicSpline(knots)

    approx = interpolant(query)
    logger.info(f"Spline: {approx} vs sin: {math.sin(query)}")
    return approx, math.sin(query)


def data_bundle_features() -> dict[str, float]:
    """Tour of the descriptive statistics on 1..6 with weights selecting 2 and 3."""
    data = DataBundle.of([1, 2, 3, 4, 5, 6])
    weights = [0.0, 1.0, 1.0, 0.0, 0.0, 0.0]

    results = {
        "weighted_average_by": statistics.weighted_average_by(data, lambda _, x: x * 2.0),
        "weighted_average": statistics.weighted_average(data, weights),
        "variance": statistics.variance(data),
        "deviation": statistics.deviation(data),
        "median": statistics.median(data),
        "median_weighted": statistics.median_weighted(data, weights),
        "geometric_mean": statistics.geometric_mean(data),
        "geometric_mean_weighted": statistics.geometric_mean_weighted(data, weights),
        "harmonic_mean": statistics.harmonic_mean(data),
        "harmonic_mean_weighted": statistics.harmonic_mean_weighted(data, weights),
        "rms": statistics.rms(data),
    }
    for name, value in results.items():
        logger.info(f"{name}: {value}")

    return results
