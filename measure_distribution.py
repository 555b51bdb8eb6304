# measure_distribution.py

"""
================================================================================
TAIL-LIFTED DISTRIBUTION EXPERIMENT
================================================================================
This script samples the tail-lifted exponential distribution many times and
saves the relative frequency of each of its histogram buckets, one per line,
so the effect of omega on the shape of the distribution can be plotted.

Usage:
    python measure_distribution.py --seed 1 --omega 0.5
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
from terrain_generator.sampling import measure_distribution, save_distribution

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Exponentially distributed random numbers.")
    parser.add_argument("--seed", type=int, default=DEFAULTS.DEFAULT_SEED, help="Random number seed.")
    parser.add_argument("--omega", type=float, default=0.5, help="Tail multiplier, between 0 and 1.")
    parser.add_argument("--repeats", type=int, default=DEFAULTS.DISTRIBUTION_REPEATS,
                        help="Number of samples to draw.")
    parser.add_argument("--granularity", type=int, default=DEFAULTS.DISTRIBUTION_GRANULARITY,
                        help="Number of histogram buckets.")
    parser.add_argument("--output", type=str, default=DEFAULTS.DEFAULT_DISTRIBUTION_FILE,
                        help="File to save the frequencies to.")
    return parser

def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("Distribution")

    parser = build_parser()
    args = parser.parse_args(argv)
    if not 0.0 <= args.omega <= 1.0:
        parser.error("Omega must be between 0 and 1.")
    if args.repeats < 1 or args.granularity < 2:
        parser.error("Repeats must be positive and granularity at least 2.")

    rng = np.random.default_rng(args.seed)
    report = measure_distribution(args.omega, args.repeats, args.granularity, rng)

    if report.missed_small + report.missed_large > 0:
        logger.warning(f"Missed {report.missed_small} small, {report.missed_large} large")
    logger.info(f"{report.repeats} experiments, Min = {report.minimum:0.4f}, Max = {report.maximum:0.4f}")
    logger.info(f"{report.successes} successes out of {report.repeats}")

    if not save_distribution(args.output, report, logger):
        return 1
    logger.info(f"Distribution saved to: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
