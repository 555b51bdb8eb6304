# terrain_generator/octaves.py

"""
================================================================================
OCTAVE COMPOSITION
================================================================================
This module sums several octaves of amortized noise into one tile, producing
1/f noise with persistence 0.5 and lacunarity 2. Each octave halves the
subcell side, doubles the number of subcells per tile side and the lattice
coordinates, and halves its contribution.

Data Contract:
---------------
- Inputs:
    - x, y: Lattice coordinates of the tile's top left corner, in units of the
      first generated octave.
    - m0, m1: First and last octave (inclusive). Octaves below m0 are skipped
      by shrinking the subcell side before anything is generated.
    - n: Tile side. Should be a power of two so every octave covers the tile.
    - tile: A caller-owned 2D float array of at least n x n.
- Outputs:
    - The rescale factor that maps the summed noise into [-1, 1].
- Side Effects: Writes into tile; logs progress.
- Invariants: The result is identical to zero-filling the tile and adding
  every octave in turn.
================================================================================
"""

import logging
import math
from typing import Optional

import numpy as np

from . import config as DEFAULTS
from .engine import AmortizedNoiseEngine


def rescale_factor(scale: float) -> float:
    """
    1 / (peak magnitude) of octaves summed down to amplitude `scale`.

    One octave peaks at 1/sqrt(2), so the scaled octaves 1 + 1/2 + ... + scale
    peak at (2 - scale)/sqrt(2).
    """
    return math.sqrt(2.0) / (2.0 - scale)


class OctaveCompositor:
    """Drives an AmortizedNoiseEngine over a range of octaves."""

    def __init__(self, engine: AmortizedNoiseEngine, logger: Optional[logging.Logger] = None):
        self.engine = engine
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def generate(self, x: int, y: int, m0: int, m1: int, n: int, tile: np.ndarray) -> float:
        """
        Generates octaves m0..m1 of amortized noise into tile.

        Returns:
            float: Multiply the tile by this to bring it into [-1, 1]. If the
            tile is too small for octave m0 the tile is left untouched and 1.0
            is returned.
        """
        if tile.ndim != 2 or tile.shape[0] < n or tile.shape[1] < n:
            raise ValueError(f"Tile of shape {tile.shape} cannot hold {n}x{n} samples.")

        r = 1 # Subcells per tile side.

        # --- Skip Unwanted Octaves ---
        for _ in range(1, m0):
            n //= 2
            r += r

        if n < DEFAULTS.MIN_SUBCELL_SIDE:
            self.logger.warning(
                f"Octave {m0} would need subcells of side {n}; nothing generated. "
                f"Lower the first octave or enlarge the tile."
            )
            return 1.0

        # --- First Octave ---
        # Written directly into the tile, which avoids a separate zero-fill pass.
        self.logger.debug(f"Octave {m0}: {r}x{r} subcells of side {n}.")
        self.engine.render_octave(x, y, r, n, tile)

        scale = 1.0
        k = m0
        # --- Remaining Octaves ---
        while k < m1 and n >= DEFAULTS.MIN_SUBCELL_SIDE:
            n //= DEFAULTS.LACUNARITY
            r *= DEFAULTS.LACUNARITY
            x *= DEFAULTS.LACUNARITY
            y *= DEFAULTS.LACUNARITY
            scale *= DEFAULTS.PERSISTENCE
            k += 1
            self.logger.debug(f"Octave {k}: {r}x{r} subcells of side {n}, scale {scale}.")
            self.engine.render_octave(x, y, r, n, tile, scale=scale, accumulate=True)

        if k < m1:
            self.logger.info(f"Stopped after octave {k} of {m1}: subcells cannot be subdivided further.")

        return rescale_factor(scale)
