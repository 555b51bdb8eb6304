# terrain_generator/engine.py

"""
================================================================================
AMORTIZED NOISE ENGINE
================================================================================
This module generates one octave of 2D gradient noise over a square tile using
amortized tables. Instead of computing four dot products per sample, the
contribution of each corner gradient is ramped linearly along the tile edges
once per subcell ("edge tables"), so every sample costs only table lookups and
additions. A quintic spline table replaces the per-sample fade evaluation.

Gradient directions come from the corner hash interpreted as a pseudo-angle;
gradient lengths come from a pluggable magnitude strategy (see
distribution.py), injected at construction.

Data Contract:
---------------
- Inputs:
    - Lattice coordinates of the subcell corners and the subcell side n.
    - tile: A caller-owned 2D float array, written in place.
- Outputs:
    - Noise values in roughly [-1/sqrt(2), 1/sqrt(2)] per octave.
- Side Effects: Overwrites this engine's scratch tables. One engine must not
  be shared between concurrent generation calls.
================================================================================
"""

from typing import Optional

import numpy as np
from numba import njit

from .distribution import FlatMagnitude, GradientMagnitude
from .hashing import hash2d_lattice

# Rows of the edge-table array. The "x" tables hold cosine components and are
# indexed along the tile's second axis (j), the "y" tables hold sine
# components and are indexed along the first axis (i).
UAX, VAX, UBX, VBX, UAY, VAY, UBY, VBY = range(8)
EDGE_TABLE_NAMES = ("uax", "vax", "ubx", "vbx", "uay", "vay", "uby", "vby")

@njit
def fill_up(t, s, n):
    """Fill an amortized table bottom up, from 0 at index 0 in steps of s/n."""
    d = s / n
    t[0] = 0.0
    for i in range(1, n):
        t[i] = t[i - 1] + d
    return t

@njit
def fill_dn(t, s, n):
    """Fill an amortized table top down, from -s/n at index n-1 in steps of -s/n."""
    d = -s / n
    t[n - 1] = d
    for i in range(n - 2, -1, -1):
        t[i] = t[i + 1] + d
    return t

@njit
def _init_edges(cos_grid, sin_grid, i0, j0, n, edges):
    # Corner (a, c) of the subcell lives at cos_grid[i0 + a, j0 + c].
    fill_up(edges[UAX], cos_grid[i0, j0], n)
    fill_dn(edges[VAX], cos_grid[i0, j0 + 1], n)
    fill_up(edges[UBX], cos_grid[i0 + 1, j0], n)
    fill_dn(edges[VBX], cos_grid[i0 + 1, j0 + 1], n)
    fill_up(edges[UAY], sin_grid[i0, j0], n)
    fill_up(edges[VAY], sin_grid[i0, j0 + 1], n)
    fill_dn(edges[UBY], sin_grid[i0 + 1, j0], n)
    fill_dn(edges[VBY], sin_grid[i0 + 1, j0 + 1], n)

@njit
def _init_spline(spline, n):
    for i in range(n):
        t = np.float32(i) / n
        spline[i] = t * t * t * (10.0 + 3.0 * t * (2.0 * t - 5.0))

@njit
def _sample(i, j, spline, edges):
    u = edges[UAX, j] + edges[UAY, i]
    v = edges[VAX, j] + edges[VAY, i]
    a = u + spline[j] * (v - u)
    u = edges[UBX, j] + edges[UBY, i]
    v = edges[VBX, j] + edges[VBY, i]
    b = u + spline[j] * (v - u)
    return a + spline[i] * (b - a)

@njit
def _write_block(n, i0, j0, spline, edges, tile):
    for i in range(n):
        for j in range(n):
            tile[i0 + i, j0 + j] = _sample(i, j, spline, edges)

@njit
def _add_block(n, i0, j0, scale, spline, edges, tile):
    for i in range(n):
        for j in range(n):
            tile[i0 + i, j0 + j] += scale * _sample(i, j, spline, edges)

@njit
def _octave_kernel(cos_grid, sin_grid, r, n, scale, accumulate, spline, edges, tile):
    for i0 in range(r):
        for j0 in range(r):
            _init_edges(cos_grid, sin_grid, i0, j0, n, edges)
            if accumulate:
                _add_block(n, i0 * n, j0 * n, scale, spline, edges, tile)
            else:
                _write_block(n, i0 * n, j0 * n, spline, edges, tile)


def gradient_components(hashes, magnitudes):
    """
    Converts corner hashes and magnitudes into (cos, sin) gradient components.
    The hash, rounded to float32, is used directly as an angle in radians.
    """
    angle = np.asarray(hashes).astype(np.float32)
    magnitudes = np.asarray(magnitudes, dtype=np.float64)
    cos_part = (magnitudes * np.cos(angle)).astype(np.float32)
    sin_part = (magnitudes * np.sin(angle)).astype(np.float32)
    return cos_part, sin_part


class AmortizedNoiseEngine:
    """
    Generates single octaves of amortized gradient noise into tiles.
    The engine owns its scratch tables; callers own the tiles.
    """
    def __init__(self, n: int, seed: int, magnitude: Optional[GradientMagnitude] = None):
        """
        Args:
            n (int): Tile side the scratch tables are sized for. Larger
                requests grow the tables on demand.
            seed (int): Hash seed for gradient directions.
            magnitude (GradientMagnitude, optional): Gradient length strategy.
                Defaults to unit-length gradients.
        """
        self.seed = seed
        self.magnitude = magnitude if magnitude is not None else FlatMagnitude()
        self.capacity = 0
        self.ensure_capacity(max(int(n), 1))

    def ensure_capacity(self, n: int):
        """Grows the scratch tables so they hold at least n entries."""
        if n <= self.capacity:
            return
        self.capacity = n
        self.edges = np.zeros((len(EDGE_TABLE_NAMES), n), dtype=np.float32)
        self.spline = np.zeros(n, dtype=np.float32)
        # Named views of the edge tables (self.uax, self.vax, ...).
        for index, name in enumerate(EDGE_TABLE_NAMES):
            setattr(self, name, self.edges[index])

    # --- Table Initialization ---
    def corner_gradients(self, x: int, y: int, r: int):
        """
        Gradient components for the (r+1) x (r+1) lattice corners starting at
        (x, y). Entry [a, c] belongs to corner (x + a, y + c).
        """
        xs = np.arange(x, x + r + 1, dtype=np.int64)
        ys = np.arange(y, y + r + 1, dtype=np.int64)
        hashes = hash2d_lattice(xs, ys, self.seed)
        magnitudes = self.magnitude.magnitude_lattice(xs, ys)
        return gradient_components(hashes, magnitudes)

    def init_edge_tables(self, x0: int, y0: int, n: int):
        """Seeds the eight edge tables for the subcell whose top left corner is (x0, y0)."""
        self.ensure_capacity(n)
        cos_grid, sin_grid = self.corner_gradients(x0, y0, 1)
        _init_edges(cos_grid, sin_grid, 0, 0, n, self.edges)

    def init_spline_table(self, n: int):
        """Fills the spline table with the quintic smoothstep at i/n."""
        self.ensure_capacity(n)
        _init_spline(self.spline, n)

    # --- Sampling ---
    def get_noise(self, i: int, j: int) -> float:
        """One sample of the current subcell at grid-relative position (i/n, j/n)."""
        return float(_sample(i, j, self.spline, self.edges))

    def get_noise_block(self, n: int, i0: int, j0: int, tile: np.ndarray):
        """Writes the current subcell's n x n samples into tile at (i0, j0)."""
        _write_block(n, i0, j0, self.spline, self.edges, tile)

    def add_noise_block(self, n: int, i0: int, j0: int, scale: float, tile: np.ndarray):
        """Adds scale times the current subcell's n x n samples into tile at (i0, j0)."""
        _add_block(n, i0, j0, scale, self.spline, self.edges, tile)

    def render_octave(self, x: int, y: int, r: int, n: int, tile: np.ndarray, scale: float = 1.0, accumulate: bool = False):
        """
        Renders one octave made of r x r subcells of side n. Subcell (i0, j0)
        uses lattice corner (x + i0, y + j0) and lands at tile offset
        (i0 * n, j0 * n). Equivalent to init_edge_tables followed by
        get_noise_block / add_noise_block for every subcell.
        """
        self.init_spline_table(n)
        cos_grid, sin_grid = self.corner_gradients(x, y, r)
        _octave_kernel(cos_grid, sin_grid, r, n, scale, accumulate, self.spline, self.edges, tile)
