from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import numpy as np

from numericaltoolkit.exceptions import InvalidInputError

if TYPE_CHECKING:
    import numpy.typing as npt


class Distribution(ABC):
    """
    Abstract base class for probability distributions.

    Calling a distribution draws one sample, so a distribution bound to a
    name reads like a random variable: ``x = uniform(0.0, 1.0); x() + x()``.
    """
    NAME: str = "Distribution"

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    @abstractmethod
    def samples(self, n: int) -> npt.NDArray:
        """
        Draw `n` independent samples.

        Args:
            n: Number of samples.

        Returns:
            Array of samples.
        """
        pass

    def sample(self) -> float | int:
        """Draw a single sample."""
        return self.samples(1)[0].item()

    def __call__(self) -> float | int:
        return self.sample()


class FloatUniform(Distribution):
    """
    Equal probability density over [low, high).
    """
    NAME = "Uniform"

    def __init__(self, low: float, high: float, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None) -> None:
        if not low <= high:
            raise InvalidInputError(f"Lower limit {low} must not exceed upper limit {high}.")
        super().__init__(rng=rng, seed=seed)
        self.low = float(low)
        self.high = float(high)

    def samples(self, n: int) -> npt.NDArray[np.float64]:
        return self.rng.uniform(self.low, self.high, n)

    def __repr__(self) -> str:
        return f"FloatUniform(low={self.low}, high={self.high})"


class IntUniform(Distribution):
    """
    Equal probability for every integer in [low, high] (both inclusive).
    """
    NAME = "Discrete uniform"

    def __init__(self, low: int, high: int, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None) -> None:
        if not low <= high:
            raise InvalidInputError(f"Lower limit {low} must not exceed upper limit {high}.")
        super().__init__(rng=rng, seed=seed)
        self.low = int(low)
        self.high = int(high)

    def samples(self, n: int) -> npt.NDArray[np.int64]:
        return self.rng.integers(self.low, self.high, n, endpoint=True)

    def __repr__(self) -> str:
        return f"IntUniform(low={self.low}, high={self.high})"


class FloatGaussian(Distribution):
    """
    Normal distribution: a peak at the mean and symmetrical sides.
    Well suited for modelling deviations in natural processes.
    """
    NAME = "Gaussian"

    def __init__(self, mean: float, deviation: float, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None) -> None:
        if deviation < 0.0:
            raise InvalidInputError(f"Standard deviation must be non-negative, got {deviation}.")
        super().__init__(rng=rng, seed=seed)
        self.mean = float(mean)
        self.deviation = float(deviation)

    def samples(self, n: int) -> npt.NDArray[np.float64]:
        return self.rng.normal(self.mean, self.deviation, n)

    def __repr__(self) -> str:
        return f"FloatGaussian(mean={self.mean}, deviation={self.deviation})"


def uniform(low: float, high: float, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None) -> Distribution:
    """
    Uniform distribution: discrete and inclusive for two integer limits, continuous otherwise.
    """
    if all(isinstance(v, numbers.Integral) and not isinstance(v, bool) for v in (low, high)):
        return IntUniform(low, high, rng=rng, seed=seed)
    return FloatUniform(low, high, rng=rng, seed=seed)


def gaussian(mean: float, deviation: float, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None) -> FloatGaussian:
    """Normal distribution with the given mean and standard deviation."""
    return FloatGaussian(mean, deviation, rng=rng, seed=seed)
