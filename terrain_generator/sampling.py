# terrain_generator/sampling.py

"""
================================================================================
SCALAR RANDOM SAMPLING
================================================================================
This module draws uniform, exponential and tail-lifted random numbers in
[0, 1] using the same closed-form mappings as the gradient magnitude hashes,
applied to integers from a NumPy random Generator instead of hash values. It
also runs the experiment that histograms the tail-lifted distribution.

Data Contract:
---------------
- Inputs:
    - rng: A numpy.random.Generator. Seeding it makes every draw repeatable.
    - omega: The tail multiplier. Values outside [0, 1] are clamped.
- Outputs:
    - float64 arrays in [0, 1].
- Side Effects: Advances the state of rng.
================================================================================
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from . import config as DEFAULTS
from .distribution import exponential_hash, tail_lifted_hash, uniform_hash


def _draw(rng: np.random.Generator, size):
    return rng.integers(0, DEFAULTS.RAND_MAX, size=size, endpoint=True)

def uniform_rand(rng: np.random.Generator, size=None):
    """Uniformly distributed numbers in (0, 1)."""
    return uniform_hash(_draw(rng, size), DEFAULTS.RAND_MAX)

def exponential_rand(rng: np.random.Generator, size=None):
    """Exponentially distributed numbers in [0, 1]."""
    return exponential_hash(_draw(rng, size), DEFAULTS.RAND_MAX)

def tail_lifted_rand(rng: np.random.Generator, omega: float, size=None):
    """Exponentially distributed numbers whose tail is lifted by omega."""
    selector = _draw(rng, size)
    value = _draw(rng, size)
    return tail_lifted_hash(value, selector, DEFAULTS.RAND_MAX, omega)


@dataclass
class DistributionReport:
    """Outcome of one run of the distribution experiment."""
    omega: float
    repeats: int
    frequencies: np.ndarray
    minimum: float
    maximum: float
    missed_small: int
    missed_large: int

    @property
    def successes(self) -> int:
        return self.repeats - self.missed_small - self.missed_large


def measure_distribution(omega: float, repeats: int = DEFAULTS.DISTRIBUTION_REPEATS,
                         granularity: int = DEFAULTS.DISTRIBUTION_GRANULARITY,
                         rng: Optional[np.random.Generator] = None, batch_size: int = 1000000) -> DistributionReport:
    """
    Samples the tail-lifted distribution `repeats` times and histograms the
    results into `granularity` buckets over [0, 1].
    """
    rng = rng if rng is not None else np.random.default_rng(DEFAULTS.DEFAULT_SEED)
    counts = np.zeros(granularity, dtype=np.int64)
    minimum, maximum = np.inf, -np.inf
    missed_small = missed_large = 0

    remaining = repeats
    # Sample in batches so ten million draws do not need ten million floats at once.
    while remaining > 0:
        size = min(batch_size, remaining)
        samples = tail_lifted_rand(rng, omega, size)
        minimum = min(minimum, float(samples.min()))
        maximum = max(maximum, float(samples.max()))
        buckets = (samples * (granularity - 1)).astype(np.int64)
        missed_small += int(np.count_nonzero(buckets < 0))
        missed_large += int(np.count_nonzero(buckets >= granularity))
        valid = buckets[(buckets >= 0) & (buckets < granularity)]
        counts += np.bincount(valid, minlength=granularity)
        remaining -= size

    return DistributionReport(
        omega=omega,
        repeats=repeats,
        frequencies=counts / repeats,
        minimum=minimum,
        maximum=maximum,
        missed_small=missed_small,
        missed_large=missed_large,
    )


def save_distribution(path: str, report: DistributionReport, logger: Optional[logging.Logger] = None) -> bool:
    """Writes one relative frequency per line. Returns False if the file cannot be written."""
    logger = logger if logger is not None else logging.getLogger(__name__)
    try:
        with open(path, 'w') as f:
            for frequency in report.frequencies:
                f.write(f"{frequency:0.4f}\n")
            f.write("\n")
    except OSError as e:
        logger.error(f"Save failed: {e}")
        return False
    return True
