# terrain_generator/dem.py

"""
================================================================================
DEM FILE INPUT / OUTPUT
================================================================================
This module reads and writes elevation grids in the ESRI ASCII grid format
(".asc"), the digital elevation model format read natively by most terrain
renderers.

File layout: six "key value" header lines (nrows, ncols, xllcenter,
yllcenter, cellsize, NODATA_value) followed by nrows lines of ncols
whitespace-separated elevations.
================================================================================
"""

import logging
import os
from typing import Optional

import numpy as np

from . import config as DEFAULTS


class DEMFormatError(ValueError):
    """Raised when a file does not look like an ESRI ASCII grid."""


def save_dem(path: str, elevation: np.ndarray, cell_size: float = DEFAULTS.DEM_CELL_SIZE_M,
             nodata: float = DEFAULTS.DEM_NODATA_VALUE, logger: Optional[logging.Logger] = None) -> bool:
    """
    Saves a 2D elevation array as a DEM file.

    Returns:
        bool: True on success, False if the file could not be written.
    """
    logger = logger if logger is not None else logging.getLogger(__name__)
    nrows, ncols = elevation.shape
    header = "\n".join([
        f"nrows {nrows}",
        f"ncols {ncols}",
        f"xllcenter {0.0:0.6f}",
        f"yllcenter {0.0:0.6f}",
        f"cellsize {cell_size:0.6f}",
        f"NODATA_value  {nodata}",
    ])
    logger.info(f"Saving to {nrows}x{ncols} DEM file {path}")
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        np.savetxt(path, elevation, fmt=DEFAULTS.DEM_FLOAT_FORMAT, header=header, comments='')
    except OSError as e:
        logger.error(f"Failed to write DEM file {path}: {e}")
        return False
    return True


def load_dem(path: str) -> tuple[dict, np.ndarray]:
    """
    Loads a DEM file.

    Returns:
        tuple: The header as a dict (counts as int, everything else as float)
        and the elevations as a float32 array of shape (nrows, ncols).
    """
    header = {}
    with open(path, 'r') as f:
        for expected_key in DEFAULTS.DEM_HEADER_KEYS:
            parts = f.readline().split()
            if len(parts) != 2 or parts[0].lower() != expected_key.lower():
                raise DEMFormatError(f"{path}: expected header field '{expected_key}', got {parts!r}")
            header[expected_key] = float(parts[1])
        heights = np.loadtxt(f, dtype=np.float32, ndmin=2)

    header['nrows'] = int(header['nrows'])
    header['ncols'] = int(header['ncols'])
    if heights.shape != (header['nrows'], header['ncols']):
        raise DEMFormatError(
            f"{path}: header declares {header['nrows']}x{header['ncols']} "
            f"but the grid is {heights.shape[0]}x{heights.shape[1]}"
        )
    return header, heights
