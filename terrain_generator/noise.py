# terrain_generator/noise.py

"""
================================================================================
REFERENCE GRADIENT NOISE
================================================================================
This module evaluates classic 2D gradient noise directly, one dot product per
corner per sample, over the same hashed gradient field the amortized engine
uses. It is slow and exists as a comparison baseline: any amortized tile can
be checked against it point by point.

Data Contract:
---------------
- Inputs:
    - x, y: NumPy arrays (or scalars) of coordinates in lattice units. The
      first coordinate runs along a tile's rows (axis 0).
    - seed: The gradient-direction hash seed.
    - magnitude: A gradient magnitude strategy (see distribution.py).
    - octaves, persistence, lacunarity: Standard noise parameters.
- Outputs:
    - A float64 array of noise values with the broadcast shape of x and y.
- Side Effects: None.
================================================================================
"""

import numpy as np

from . import config as DEFAULTS
from .distribution import FlatMagnitude
from .engine import gradient_components
from .hashing import hash2d_lattice


def _lerp(a, b, t):
    "Linear interpolation."
    return a + t * (b - a)

def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (10.0 + 3.0 * t * (2.0 * t - 5.0))

def _corner_lookup(xi, yi, seed, magnitude):
    """Gradient components at integer corners (xi, yi), any shape."""
    xs, x_index = np.unique(xi, return_inverse=True)
    ys, y_index = np.unique(yi, return_inverse=True)
    hashes = hash2d_lattice(xs.astype(np.int64), ys.astype(np.int64), seed)
    cos_part, sin_part = gradient_components(hashes, magnitude.magnitude_lattice(xs, ys))
    x_index = x_index.reshape(xi.shape)
    y_index = y_index.reshape(yi.shape)
    return cos_part[x_index, y_index].astype(np.float64), sin_part[x_index, y_index].astype(np.float64)

def _cell_value(fx, fy, corners):
    """Blends the four corner dot products at local offsets (fx, fy)."""
    (c00, s00), (c01, s01), (c10, s10), (c11, s11) = corners
    # The sine component pairs with the first axis, the cosine with the second.
    d00 = s00 * fx + c00 * fy
    d01 = s01 * fx + c01 * (fy - 1.0)
    d10 = s10 * (fx - 1.0) + c10 * fy
    d11 = s11 * (fx - 1.0) + c11 * (fy - 1.0)
    sx = _fade(fx)
    sy = _fade(fy)
    a = _lerp(d00, d01, sy)
    b = _lerp(d10, d11, sy)
    return _lerp(a, b, sx)

def cell_noise(x0: int, y0: int, fx, fy, seed: int, magnitude=None):
    """
    Noise inside lattice cell (x0, y0) at local offsets fx, fy in [0, 1].
    Both ends of the range are allowed, so the value on a shared cell edge can
    be taken from either neighbour.
    """
    magnitude = magnitude if magnitude is not None else FlatMagnitude()
    fx, fy = np.broadcast_arrays(np.asarray(fx, dtype=np.float64), np.asarray(fy, dtype=np.float64))
    xs = np.array([x0, x0 + 1], dtype=np.int64)
    ys = np.array([y0, y0 + 1], dtype=np.int64)
    cos_part, sin_part = gradient_components(hash2d_lattice(xs, ys, seed), magnitude.magnitude_lattice(xs, ys))
    corners = [(float(cos_part[a, c]), float(sin_part[a, c])) for a, c in ((0, 0), (0, 1), (1, 0), (1, 1))]
    return _cell_value(fx, fy, corners)

def gradient_noise_2d(x, y, seed: int, magnitude=None):
    """One octave of gradient noise at arbitrary lattice-unit coordinates."""
    magnitude = magnitude if magnitude is not None else FlatMagnitude()
    x, y = np.broadcast_arrays(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64))
    xi = np.floor(x).astype(np.int64)
    yi = np.floor(y).astype(np.int64)
    corners = [
        _corner_lookup(xi + a, yi + c, seed, magnitude)
        for a, c in ((0, 0), (0, 1), (1, 0), (1, 1))
    ]
    return _cell_value(x - xi, y - yi, corners)

def fractal_noise_2d(x, y, seed: int, octaves: int = 1, magnitude=None,
                     persistence: float = DEFAULTS.PERSISTENCE, lacunarity: float = DEFAULTS.LACUNARITY):
    """
    Sum of `octaves` octaves of gradient noise, the first at amplitude 1.
    With the default persistence and lacunarity this is the unscaled sum the
    octave compositor writes into a tile.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    total_noise = np.zeros(np.broadcast(x, y).shape)
    amplitude = 1.0
    frequency = 1.0
    for _ in range(octaves):
        total_noise += amplitude * gradient_noise_2d(x * frequency, y * frequency, seed, magnitude)
        amplitude *= persistence
        frequency *= lacunarity
    return total_noise
