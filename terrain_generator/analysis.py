# terrain_generator/analysis.py

"""
================================================================================
GRADIENT STATISTICS
================================================================================
This module measures how steep a height grid is at different scales. For
octave k, it compares every point with the points 2**k cells to its right and
below, and records the absolute slope (height difference over horizontal
distance). Comparing these distributions between real and generated terrain
is how the tail multiplier is chosen.

Data Contract:
---------------
- Inputs:
    - heights: A 2D NumPy array of elevations in metres.
    - octave: The log2 of the sample spacing in cells.
    - cell_size: Horizontal distance between neighbouring cells in metres.
    - nodata: Marker for missing samples. Non-positive heights are treated as
      missing too.
- Outputs:
    - A GradientStats record.
- Side Effects: None.
================================================================================
"""

from dataclasses import dataclass

import numpy as np
from scipy import stats

from . import config as DEFAULTS


@dataclass
class GradientStats:
    """Slope statistics for one octave."""
    octave: int
    count: int
    maximum: float
    mean: float
    frequencies: np.ndarray
    exponential_scale: float


def _pair_gradients(h0: np.ndarray, h1: np.ndarray, distance: float) -> np.ndarray:
    good = (h0 > 0) & (h1 > 0)
    return np.abs(h0[good] - h1[good]) / distance


def gradient_statistics(heights: np.ndarray, octave: int, cell_size: float = DEFAULTS.DEM_CELL_SIZE_M,
                        nodata: float = DEFAULTS.DEM_NODATA_VALUE,
                        granularity: int = DEFAULTS.GRADIENT_GRANULARITY,
                        max_gradient: float = DEFAULTS.MAX_GRADIENT) -> GradientStats:
    """Collects the slope distribution of a height grid at spacing 2**octave."""
    heights = np.where(heights == nodata, 0.0, heights).astype(np.float64)
    spacing = 2 ** octave
    distance = spacing * cell_size

    if spacing >= min(heights.shape):
        gradients = np.empty(0)
    else:
        # Neighbours along the first axis, then along the second.
        gradients = np.concatenate([
            _pair_gradients(heights[:-spacing, :], heights[spacing:, :], distance),
            _pair_gradients(heights[:, :-spacing], heights[:, spacing:], distance),
        ])
    gradients = gradients[gradients < max_gradient]

    count = int(gradients.size)
    if count == 0:
        return GradientStats(octave, 0, 0.0, 0.0, np.zeros(granularity), float('nan'))

    # Round to the nearest bucket of width max_gradient / granularity.
    buckets = np.floor(gradients * granularity / max_gradient + 0.5).astype(np.int64)
    buckets = buckets[buckets < granularity]
    frequencies = np.bincount(buckets, minlength=granularity) / count

    # Location fixed at zero: slopes are non-negative by construction.
    _, exponential_scale = stats.expon.fit(gradients, floc=0.0)

    return GradientStats(
        octave=octave,
        count=count,
        maximum=float(gradients.max()),
        mean=float(gradients.mean()),
        frequencies=frequencies,
        exponential_scale=float(exponential_scale),
    )


def gradient_profile(heights: np.ndarray, octaves: int = DEFAULTS.DEFAULT_ANALYSIS_OCTAVES, **kwargs) -> list[GradientStats]:
    """Gradient statistics for octaves 0..octaves-1."""
    return [gradient_statistics(heights, k, **kwargs) for k in range(octaves)]
