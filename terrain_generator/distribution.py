# terrain_generator/distribution.py

"""
================================================================================
GRADIENT MAGNITUDE DISTRIBUTION
================================================================================
This module turns 32-bit hash values into gradient magnitudes in [0, 1]. A
uniform hash is reshaped by a closed-form inverse CDF into an exponential
distribution, and a second, independent hash decides whether a lattice point
is instead drawn from the flat (uniform) distribution. That second branch
"lifts the tail" so that magnitudes do not all collapse towards zero.

It also provides the pluggable magnitude strategies consumed by the amortized
noise engine.

Data Contract:
---------------
- Inputs:
    - Hash values (ints or integer NumPy arrays) in [0, max_value].
    - omega: The tail multiplier. Values outside [0, 1] are clamped.
- Outputs:
    - float64 magnitudes (scalars or arrays matching the input shape).
- Side Effects: None.
================================================================================
"""

from typing import Protocol

import numpy as np

from . import config as DEFAULTS
from .hashing import hash2d, hash2d_lattice


def uniform_hash(value, max_value: int = DEFAULTS.HASH_MAX):
    """Maps a hash in [0, max_value] uniformly into the open interval (0, 1)."""
    # float64 keeps (max + 1) / (max + 2) strictly below 1.
    return (np.asarray(value, dtype=np.float64) + 1.0) / (float(max_value) + 2.0)


def exponential_hash(value, max_value: int = DEFAULTS.HASH_MAX):
    """
    Maps a uniform hash into [0, 1] with an exponential distribution.
    A hash of 0 maps to exactly 1 and a hash of max_value to exactly 0.
    """
    scale = 1.0 / np.log(0.5 * (float(max_value) + 2.0))
    return -scale * np.log(0.5 * np.asarray(value, dtype=np.float64) + 1.0) + 1.0


def tail_lifted_hash(value, selector, max_value: int = DEFAULTS.HASH_MAX, omega: float = DEFAULTS.DEFAULT_TAIL_MULTIPLIER):
    """
    Exponentially distributed hash with a lifted tail.

    With probability omega (decided by `selector`) the result is drawn from the
    uniform distribution instead of the exponential one.
    """
    omega = min(max(float(omega), 0.0), 1.0)
    flat = uniform_hash(selector, max_value) < omega
    result = np.where(flat, uniform_hash(value, max_value), exponential_hash(value, max_value))
    # Unwrap 0-d results so scalar inputs give scalar outputs.
    return result[()]


def magnitude(x, y, seed1: int, seed2: int, max_value: int = DEFAULTS.HASH_MAX, omega: float = DEFAULTS.DEFAULT_TAIL_MULTIPLIER) -> float:
    """Gradient magnitude of lattice point (x, y)."""
    return float(tail_lifted_hash(hash2d(x, y, seed1), hash2d(x, y, seed2), max_value, omega))


# --- Magnitude Strategies ---
class GradientMagnitude(Protocol):
    """Anything that can assign a gradient magnitude to a lattice point."""

    def magnitude_at(self, x: int, y: int) -> float:
        ...

    def magnitude_lattice(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        ...


class FlatMagnitude:
    """Every gradient has unit length. Reproduces plain amortized noise."""

    def magnitude_at(self, x: int, y: int) -> float:
        return 1.0

    def magnitude_lattice(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        return np.ones((len(xs), len(ys)), dtype=np.float64)

    def __repr__(self) -> str:
        return "FlatMagnitude()"


class ExponentialMagnitude:
    """
    Gradient magnitudes drawn from the tail-lifted exponential distribution,
    using two independent hashes per lattice point.
    """

    def __init__(self, seed1: int, seed2: int, omega: float, max_value: int = DEFAULTS.HASH_MAX):
        self.seed1 = seed1
        self.seed2 = seed2
        self.omega = min(max(float(omega), 0.0), 1.0)
        self.max_value = max_value

    @classmethod
    def from_seed(cls, seed: int, omega: float) -> "ExponentialMagnitude":
        """Derives both magnitude seeds from a master hash seed."""
        return cls(seed + DEFAULTS.MAGNITUDE_SEED_OFFSET, seed + DEFAULTS.TAIL_SEED_OFFSET, omega)

    def magnitude_at(self, x: int, y: int) -> float:
        return magnitude(x, y, self.seed1, self.seed2, self.max_value, self.omega)

    def magnitude_lattice(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        xs = np.asarray(xs, dtype=np.int64)
        ys = np.asarray(ys, dtype=np.int64)
        values = hash2d_lattice(xs, ys, self.seed1)
        selectors = hash2d_lattice(xs, ys, self.seed2)
        return tail_lifted_hash(values, selectors, self.max_value, self.omega)

    def __repr__(self) -> str:
        return f"ExponentialMagnitude(seed1={self.seed1}, seed2={self.seed2}, omega={self.omega})"
