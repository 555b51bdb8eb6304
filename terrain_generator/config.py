# terrain_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the terrain
generator. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC RUN.
Instead, pass a configuration dictionary to the TerrainGenerator instance, or
a JSON file to the command-line scripts.
================================================================================
"""

# --- Hashing ---
DEFAULT_SEED = 9999
# The largest value the 32-bit hash can return. Used to map hashes into (0, 1).
HASH_MAX = 0xFFFFFFFF
# Offsets that derive the two gradient-magnitude seeds from the master seed.
# The first selects the magnitude itself, the second selects which branch of
# the tail-lifted distribution it is drawn from.
MAGNITUDE_SEED_OFFSET = 9999
TAIL_SEED_OFFSET = 314159

# --- Gradient Magnitude Distribution ---
# Omega, the tail multiplier. The probability that a gradient magnitude is
# drawn from the uniform distribution instead of the exponential one.
DEFAULT_TAIL_MULTIPLIER = 0.3
# 'exponential' shapes gradient magnitudes for terrain, 'flat' gives every
# gradient unit length (plain amortized noise).
DEFAULT_GRADIENT_MAGNITUDE = 'exponential'
GRADIENT_MAGNITUDE_MODES = ('exponential', 'flat')

# --- Octaves ---
# Each octave halves the subcell side and the amplitude (1/f noise).
PERSISTENCE = 0.5
LACUNARITY = 2
DEFAULT_TILE_SIDE = 1024
DEFAULT_FIRST_OCTAVE = 5
DEFAULT_LAST_OCTAVE = 12
# A subcell smaller than this cannot be subdivided any further.
MIN_SUBCELL_SIDE = 2

# --- Tile Placement ---
# Tile indices are measured in units of the first generated octave.
DEFAULT_TILE_ROW = 9999
DEFAULT_TILE_COL = 7777

# --- Elevation ---
# Normalized noise in [-1, 1] is mapped to [0, cap] metres.
DEFAULT_ELEVATION_CAP_M = 5000.0

# --- DEM Output (ESRI ASCII grid) ---
DEM_CELL_SIZE_M = 5.0
DEM_NODATA_VALUE = -9999
DEM_FLOAT_FORMAT = '%0.2f'
DEM_HEADER_KEYS = ('nrows', 'ncols', 'xllcenter', 'yllcenter', 'cellsize', 'NODATA_value')
DEFAULT_OUTPUT_BASENAME = 'output'

# --- Distribution Experiment ---
# Draws are integers in [0, RAND_MAX], the range of the C library rand().
RAND_MAX = 0x7FFF
DISTRIBUTION_GRANULARITY = 100
DISTRIBUTION_REPEATS = 10000000
DEFAULT_DISTRIBUTION_FILE = 'distribution.txt'

# --- Gradient Analysis ---
GRADIENT_GRANULARITY = 50
MAX_GRADIENT = 1.0
DEFAULT_ANALYSIS_OCTAVES = 8

# --- Previews ---
# Hypsometric bands as fractions of the normalized elevation range [0, 1].
TERRAIN_LEVELS = {
    "water": 0.1,
    "sand": 0.13,
    "grass": 0.45,
    "dirt": 0.65,
    "mountain": 0.85,
    "snow": 1.0 # The rest is snow
}
