# terrain_generator/color_maps.py

"""
================================================================================
ELEVATION PREVIEW COLOR MAPPING
================================================================================
This module converts normalized elevation tiles [0, 1] into RGB color arrays
and saves them as PNG previews, so a generated tile can be inspected without
loading the DEM into a terrain renderer.

It is a pure, stateless utility apart from save_preview, which writes a file.
================================================================================
"""

import logging
import os
from typing import Optional

import numpy as np
from PIL import Image

from . import config as DEFAULTS

# --- Band IDs ---
BAND_ID_WATER = 0
BAND_ID_SAND = 1
BAND_ID_GRASS = 2
BAND_ID_DIRT = 3
BAND_ID_MOUNTAIN = 4
BAND_ID_SNOW = 5

# --- Default Color Mappings ---
COLOR_MAP_TERRAIN = {
    "water": (26, 102, 255),
    "sand": (240, 230, 140),
    "grass": (34, 139, 34),
    "dirt": (139, 69, 19),
    "mountain": (112, 128, 144),
    "snow": (255, 255, 255)
}

def create_band_color_lut() -> np.ndarray:
    """Creates a LUT where the index is the band ID and the value is the RGB color."""
    return np.array([
        COLOR_MAP_TERRAIN["water"],
        COLOR_MAP_TERRAIN["sand"],
        COLOR_MAP_TERRAIN["grass"],
        COLOR_MAP_TERRAIN["dirt"],
        COLOR_MAP_TERRAIN["mountain"],
        COLOR_MAP_TERRAIN["snow"]
    ], dtype=np.uint8)

def normalize_elevation(elevation: np.ndarray, elevation_cap_m: float) -> np.ndarray:
    """Maps elevations in metres onto [0, 1]."""
    return np.clip(elevation / elevation_cap_m, 0.0, 1.0)

def calculate_band_map(elevation_values: np.ndarray) -> np.ndarray:
    """Classifies normalized elevations into hypsometric band IDs."""
    levels = DEFAULTS.TERRAIN_LEVELS
    conditions = [
        elevation_values < levels["water"],
        elevation_values < levels["sand"],
        elevation_values < levels["grass"],
        elevation_values < levels["dirt"],
        elevation_values < levels["mountain"]
    ]
    choices = [BAND_ID_WATER, BAND_ID_SAND, BAND_ID_GRASS, BAND_ID_DIRT, BAND_ID_MOUNTAIN]
    return np.select(conditions, choices, default=BAND_ID_SNOW).astype(np.uint8)

def get_terrain_color_array(elevation_values: np.ndarray) -> np.ndarray:
    """Converts normalized elevation data [0, 1] into banded terrain colors."""
    return create_band_color_lut()[calculate_band_map(elevation_values)]

def get_elevation_color_array(elevation_values: np.ndarray) -> np.ndarray:
    """Converts normalized elevation data [0, 1] into a grayscale RGB color array."""
    # Scale the normalized [0, 1] float values to [0, 255] integer grayscale values.
    gray_values = (np.clip(elevation_values, 0.0, 1.0) * 255).astype(np.uint8)
    return np.stack([gray_values] * 3, axis=-1)

def save_preview(path: str, color_array: np.ndarray, logger: Optional[logging.Logger] = None) -> bool:
    """
    Saves an (rows, cols, 3) color array as a PNG. Row 0 becomes the top of
    the image. Returns False if the file could not be written.
    """
    logger = logger if logger is not None else logging.getLogger(__name__)
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        Image.fromarray(np.ascontiguousarray(color_array, dtype=np.uint8)).save(path, 'PNG')
    except OSError as e:
        logger.error(f"Failed to save preview {path}: {e}")
        return False
    return True
