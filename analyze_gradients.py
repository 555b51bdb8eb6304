# analyze_gradients.py

"""
================================================================================
GRADIENT ANALYSIS SCRIPT
================================================================================
This script loads one or more DEM files and reports, for each octave, how the
slopes between points 2**octave cells apart are distributed: count, maximum,
mean, the fitted exponential scale and the histogram of slopes. Run it on
real elevation data and on generated tiles to compare the two.

Usage:
    python analyze_gradients.py output.asc --octaves 8 --output gradients.txt
================================================================================
"""
import os
import sys
import logging
import argparse

import numpy as np

# Add project root to Python path to allow importing from terrain_generator
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from terrain_generator import config as DEFAULTS
from terrain_generator.analysis import gradient_profile
from terrain_generator.dem import DEMFormatError, load_dem

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gradient statistics of DEM files.")
    parser.add_argument("dem_files", nargs="+", help="DEM files to analyze.")
    parser.add_argument("--octaves", type=int, default=DEFAULTS.DEFAULT_ANALYSIS_OCTAVES,
                        help="Number of octaves to measure.")
    parser.add_argument("--output", type=str, help="Optional file to save the histograms to.")
    return parser

def save_profiles(path: str, profiles: dict, logger: logging.Logger) -> bool:
    """Writes one block per file and octave: a summary line then one frequency per line."""
    try:
        with open(path, 'w') as f:
            for dem_path, profile in profiles.items():
                for stats in profile:
                    f.write(f"{dem_path} octave {stats.octave} count {stats.count} "
                            f"max {stats.maximum:0.4f} mean {stats.mean:0.4f} "
                            f"scale {stats.exponential_scale:0.4f}\n")
                    for frequency in stats.frequencies:
                        f.write(f"{frequency:0.6f}\n")
                    f.write("\n")
    except OSError as e:
        logger.error(f"Failed to save results: {e}")
        return False
    return True

def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("GradientAnalyzer")

    args = build_parser().parse_args(argv)
    profiles = {}
    for dem_path in args.dem_files:
        try:
            header, heights = load_dem(dem_path)
        except (OSError, DEMFormatError) as e:
            logger.error(f"Could not read {dem_path}: {e}")
            return 1
        logger.info(f"Read {heights.size} points from {dem_path}, "
                    f"{int(np.count_nonzero(heights <= 0))} of which were bad.")
        profile = gradient_profile(heights, args.octaves, cell_size=header['cellsize'],
                                   nodata=header['NODATA_value'])
        for stats in profile:
            logger.info(f"  Octave {stats.octave}: {stats.count} slopes, max {stats.maximum:0.4f}, "
                        f"mean {stats.mean:0.4f}, exponential scale {stats.exponential_scale:0.4f}")
        profiles[dem_path] = profile

    if args.output and not save_profiles(args.output, profiles, logger):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
