"""Shared test fixtures."""

from __future__ import annotations

import math

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so stochastic tests are reproducible."""
    return np.random.default_rng(12345)


@pytest.fixture
def sine_knots() -> list[tuple[float, float]]:
    """Six knots of sin on [0, pi]."""
    return [(i * math.pi / 5, math.sin(i * math.pi / 5)) for i in range(6)]


@pytest.fixture
def irregular_knots() -> list[tuple[float, float]]:
    """Unevenly spaced knots."""
    return [(-1.0, 2.0), (0.0, 0.5), (0.3, -1.0), (1.7, 4.0), (2.0, 3.5), (5.0, 0.0)]
