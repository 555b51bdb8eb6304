# terrain_generator/generator.py

"""
================================================================================
CORE TERRAIN GENERATOR
================================================================================
This module contains the main TerrainGenerator class, responsible for turning
a hash seed and a tail multiplier into tiles of amortized noise and terrain
elevations.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict): A dictionary of generation parameters which can override
      the internal defaults. Expected keys include 'seed', 'tail_multiplier',
      'tile_side', 'first_octave', 'last_octave', 'elevation_cap_m'.
    - logger: A configured Python logging object for runtime messages.
- Outputs (from methods):
    - float32 NumPy tiles of raw noise plus their rescale factor, or of
      elevations in metres.
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same seed and configuration, the output is
  deterministic. The seed and tail multiplier never change after construction.
================================================================================
"""

import logging
import time
from typing import Optional

import numpy as np

from . import config as DEFAULTS
from .distribution import ExponentialMagnitude, FlatMagnitude
from .engine import AmortizedNoiseEngine
from .octaves import OctaveCompositor


class TerrainGenerator:
    """
    Generates tiles of amortized noise with an exponentially distributed
    gradient magnitude, and maps them to terrain elevations.
    This class is backend-only and does not handle any file output.
    """
    def __init__(self, config: dict, logger: Optional[logging.Logger] = None):
        """
        Initializes the terrain generator.

        Args:
            config (dict): User-defined parameters to override defaults.
            logger (logging.Logger, optional): The logger instance for all output.
        """
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.user_config = config

        # --- Consolidate Configuration ---
        self.settings = {
            'seed': self.user_config.get('seed', DEFAULTS.DEFAULT_SEED),
            'tail_multiplier': self.user_config.get('tail_multiplier', DEFAULTS.DEFAULT_TAIL_MULTIPLIER),
            'gradient_magnitude': self.user_config.get('gradient_magnitude', DEFAULTS.DEFAULT_GRADIENT_MAGNITUDE),
            'magnitude_seed_offset': self.user_config.get('magnitude_seed_offset', DEFAULTS.MAGNITUDE_SEED_OFFSET),
            'tail_seed_offset': self.user_config.get('tail_seed_offset', DEFAULTS.TAIL_SEED_OFFSET),
            'tile_side': self.user_config.get('tile_side', DEFAULTS.DEFAULT_TILE_SIDE),
            'first_octave': self.user_config.get('first_octave', DEFAULTS.DEFAULT_FIRST_OCTAVE),
            'last_octave': self.user_config.get('last_octave', DEFAULTS.DEFAULT_LAST_OCTAVE),
            'elevation_cap_m': self.user_config.get('elevation_cap_m', DEFAULTS.DEFAULT_ELEVATION_CAP_M),
        }

        if self.settings['gradient_magnitude'] not in DEFAULTS.GRADIENT_MAGNITUDE_MODES:
            raise ValueError(
                f"Unknown gradient magnitude mode '{self.settings['gradient_magnitude']}'. "
                f"Expected one of {DEFAULTS.GRADIENT_MAGNITUDE_MODES}."
            )

        # --- Public Properties for easy access ---
        self.seed = self.settings['seed']
        # Out-of-range values are clamped, never rejected.
        self.omega = min(max(float(self.settings['tail_multiplier']), 0.0), 1.0)
        self.tile_side = self.settings['tile_side']

        # --- Assemble the Noise Pipeline ---
        if self.settings['gradient_magnitude'] == 'flat':
            self.magnitude = FlatMagnitude()
        else:
            self.magnitude = ExponentialMagnitude(
                self.seed + self.settings['magnitude_seed_offset'],
                self.seed + self.settings['tail_seed_offset'],
                self.omega,
            )
        self.engine = AmortizedNoiseEngine(self.tile_side, self.seed, self.magnitude)
        self.compositor = OctaveCompositor(self.engine, self.logger)

        self.logger.info(f"TerrainGenerator initialized with seed: {self.seed}, omega: {self.omega}")
        self.logger.debug(f"Gradient magnitudes: {self.magnitude!r}")

    def generate(self, row: int, col: int, m0: int, m1: int, n: int, tile: np.ndarray) -> float:
        """
        Generates octaves m0..m1 of noise for the tile at lattice offset
        (row, col) into a caller-allocated tile.

        Returns:
            float: The rescale factor that brings the tile into [-1, 1].
        """
        return self.compositor.generate(row, col, m0, m1, n, tile)

    def get_noise_tile(self, row: int, col: int, m0: Optional[int] = None, m1: Optional[int] = None) -> tuple[np.ndarray, float]:
        """
        Allocates and generates one tile of raw noise.

        Tile indices are given in units of tiles. They are doubled once per
        skipped octave so that neighbouring indices give neighbouring tiles at
        every first octave.
        """
        m0 = self.settings['first_octave'] if m0 is None else m0
        m1 = self.settings['last_octave'] if m1 is None else m1
        n = self.tile_side

        for _ in range(1, m0):
            row *= 2
            col *= 2

        tile = np.zeros((n, n), dtype=np.float32)
        self.logger.info(f"Generating {m1 - m0 + 1} octaves of 2D noise.")
        start_time = time.process_time()
        scale = self.generate(row, col, m0, m1, n, tile)
        elapsed = time.process_time() - start_time
        self.logger.info(f"Generated {n * n} points in {elapsed:.2f} seconds CPU time.")
        return tile, scale

    def get_elevation(self, row: int, col: int, m0: Optional[int] = None, m1: Optional[int] = None, elevation_cap_m: Optional[float] = None) -> np.ndarray:
        """Generates a tile and maps its normalized noise in [-1, 1] to [0, cap] metres."""
        cap = self.settings['elevation_cap_m'] if elevation_cap_m is None else elevation_cap_m
        tile, scale = self.get_noise_tile(row, col, m0, m1)
        return (cap * (1.0 + tile * scale) / 2.0).astype(np.float32)


def new_generator(tile_side: int, hash_seed: int, tail_multiplier: float, logger: Optional[logging.Logger] = None) -> TerrainGenerator:
    """Creates a TerrainGenerator for tiles of side tile_side."""
    config = {'tile_side': tile_side, 'seed': hash_seed, 'tail_multiplier': tail_multiplier}
    return TerrainGenerator(config=config, logger=logger)
