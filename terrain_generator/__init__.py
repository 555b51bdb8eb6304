# terrain_generator/__init__.py

# This file makes the 'terrain_generator' directory a Python package.
# We can also use it to define the public API of the package.

from .distribution import ExponentialMagnitude, FlatMagnitude
from .engine import AmortizedNoiseEngine
from .generator import TerrainGenerator, new_generator
from .hashing import hash2d
from .octaves import OctaveCompositor

__all__ = [
    "AmortizedNoiseEngine",
    "ExponentialMagnitude",
    "FlatMagnitude",
    "OctaveCompositor",
    "TerrainGenerator",
    "hash2d",
    "new_generator",
]
