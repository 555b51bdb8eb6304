# generate_terrain.py

"""
================================================================================
TERRAIN GENERATION SCRIPT
================================================================================
This script is a command-line tool for generating square tiles of terrain
elevations with amortized noise and an exponentially distributed gradient
magnitude, and saving them as DEM files (".asc") that terrain renderers read
natively. Neighbouring tiles of a grid join without seams.

Usage:
    python generate_terrain.py --seed 9999 --omega 0.3 --elevation-cap 4000
    python generate_terrain.py --config path/to/your/config.json --grid-rows 2 --grid-cols 2
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time
from tqdm import tqdm

# Add project root to Python path to allow importing from terrain_generator
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from terrain_generator.generator import TerrainGenerator
from terrain_generator import color_maps
from terrain_generator import config as DEFAULTS
from terrain_generator.dem import save_dem

# Command-line flags and the generator settings they override.
CLI_OVERRIDES = {
    'seed': 'seed',
    'omega': 'tail_multiplier',
    'gradient_magnitude': 'gradient_magnitude',
    'tile_side': 'tile_side',
    'first_octave': 'first_octave',
    'last_octave': 'last_octave',
    'elevation_cap': 'elevation_cap_m',
}

def load_config(config_path: str, logger: logging.Logger):
    """Loads the generation parameters from a JSON file. Returns None on failure."""
    logger.info(f"Loading configuration from: {config_path}")
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return None
    return config.get('terrain_generation_parameters', {})

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Amortized noise terrain generator.")
    parser.add_argument("--config", type=str, help="Path to a JSON configuration file.")
    parser.add_argument("--seed", type=int, help="Hash seed.")
    parser.add_argument("--omega", type=float, help="Tail multiplier, between 0 and 1.")
    parser.add_argument("--gradient-magnitude", choices=DEFAULTS.GRADIENT_MAGNITUDE_MODES,
                        help="Gradient magnitude distribution.")
    parser.add_argument("--elevation-cap", type=float, help="Elevation cap in metres.")
    parser.add_argument("--tile-side", type=int, help="Samples on one side of a tile (a power of two).")
    parser.add_argument("--first-octave", type=int, help="First (largest) octave.")
    parser.add_argument("--last-octave", type=int, help="Last (smallest) octave.")
    parser.add_argument("--row", type=int, default=DEFAULTS.DEFAULT_TILE_ROW, help="Tile row index.")
    parser.add_argument("--col", type=int, default=DEFAULTS.DEFAULT_TILE_COL, help="Tile column index.")
    parser.add_argument("--grid-rows", type=int, default=1, help="Number of tile rows to generate.")
    parser.add_argument("--grid-cols", type=int, default=1, help="Number of tile columns to generate.")
    parser.add_argument("--output-dir", type=str, default=".", help="Directory for the DEM files.")
    parser.add_argument("--preview", choices=("none", "gray", "terrain"), default="none",
                        help="Also save a PNG preview of each tile.")
    return parser

def validate_settings(params: dict, parser: argparse.ArgumentParser):
    omega = params.get('tail_multiplier', DEFAULTS.DEFAULT_TAIL_MULTIPLIER)
    if omega < 0.0:
        parser.error("Omega must be at least 0.")
    if omega > 1.0:
        parser.error("Omega must be at most 1.")
    if params.get('elevation_cap_m', DEFAULTS.DEFAULT_ELEVATION_CAP_M) <= 0.0:
        parser.error("Elevation cap must be greater than 0.")
    if params.get('tile_side', DEFAULTS.DEFAULT_TILE_SIDE) < DEFAULTS.MIN_SUBCELL_SIDE:
        parser.error(f"Tile side must be at least {DEFAULTS.MIN_SUBCELL_SIDE}.")

def tile_basename(grid_row: int, grid_col: int, grid_rows: int, grid_cols: int) -> str:
    if grid_rows == 1 and grid_cols == 1:
        return DEFAULTS.DEFAULT_OUTPUT_BASENAME
    return f"{DEFAULTS.DEFAULT_OUTPUT_BASENAME}_{grid_row}_{grid_col}"

def save_tile_preview(path: str, elevation, elevation_cap_m: float, mode: str, logger: logging.Logger) -> bool:
    normalized = color_maps.normalize_elevation(elevation, elevation_cap_m)
    if mode == "terrain":
        color_array = color_maps.get_terrain_color_array(normalized)
    else:
        color_array = color_maps.get_elevation_color_array(normalized)
    return color_maps.save_preview(path, color_array, logger)

def generate_terrain(generator: TerrainGenerator, row: int, col: int, grid_rows: int, grid_cols: int,
                     output_dir: str, preview: str, logger: logging.Logger) -> bool:
    """
    Generates a grid of tiles starting at tile (row, col) and saves each as a
    DEM file. Returns False if any file could not be written.
    """
    cap = generator.settings['elevation_cap_m']
    tasks = [(r, c) for r in range(grid_rows) for c in range(grid_cols)]
    all_saved = True

    for grid_row, grid_col in tqdm(tasks, desc="Generating Tiles", disable=len(tasks) == 1):
        elevation = generator.get_elevation(row + grid_row, col + grid_col)
        basename = tile_basename(grid_row, grid_col, grid_rows, grid_cols)
        dem_path = os.path.join(output_dir, f"{basename}.asc")
        if not save_dem(dem_path, elevation, logger=logger):
            all_saved = False
            continue
        if preview != "none":
            preview_path = os.path.join(output_dir, f"{basename}.png")
            if not save_tile_preview(preview_path, elevation, cap, preview, logger):
                all_saved = False

    return all_saved

def main(argv=None) -> int:
    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("TerrainGenerator")
    logger.info("Amortized Noise Terrain Generator")

    parser = build_parser()
    args = parser.parse_args(argv)

    # 2. --- Load Configuration (file first, flags override) ---
    params = {}
    if args.config:
        params = load_config(args.config, logger)
        if params is None:
            return 1
    for flag, key in CLI_OVERRIDES.items():
        value = getattr(args, flag)
        if value is not None:
            params[key] = value
    validate_settings(params, parser)

    # 3. --- Generate and Save ---
    generator = TerrainGenerator(config=params, logger=logger)
    start_time = time.perf_counter()
    success = generate_terrain(
        generator, args.row, args.col, args.grid_rows, args.grid_cols,
        args.output_dir, args.preview, logger
    )
    end_time = time.perf_counter()

    if success:
        logger.info(f"Generation complete! Total time: {end_time - start_time:.2f} seconds.")
        return 0
    logger.error("Generation finished, but one or more files could not be saved.")
    return 1


# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
