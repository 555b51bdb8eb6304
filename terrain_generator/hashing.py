# terrain_generator/hashing.py

"""
================================================================================
LATTICE HASHING
================================================================================
This module maps integer lattice coordinates to well-mixed 32-bit values using
MurmurHash3 (x86, 32-bit variant). It is a pure, stateless utility.

Data Contract:
---------------
- Inputs:
    - x, y: Integer lattice coordinates. Reduced modulo 2**32, so negative
      coordinates wrap exactly as unsigned 32-bit integers do.
    - seed: Integer hash seed, also reduced modulo 2**32.
- Outputs:
    - An integer in [0, 2**32).
- Side Effects: None.
- Invariants: The same (x, y, seed) always hashes to the same value.
================================================================================
"""

import numpy as np
from numba import njit

# MurmurHash3 x86_32 block constants.
_C1 = 0xcc9e2d51
_C2 = 0x1b873593
# The packed (x, y) key is always 8 bytes long.
_KEY_LENGTH = 8

@njit(inline='always')
def _u32(x):
    return x & 0xFFFFFFFF

@njit(inline='always')
def _rotl32(x, r):
    x = _u32(x)
    return _u32((x << r) | (x >> (32 - r)))

@njit(inline='always')
def _mix_block(h, k):
    k = _u32(k * _C1)
    k = _rotl32(k, 15)
    k = _u32(k * _C2)
    h ^= k
    h = _rotl32(h, 13)
    return _u32(h * 5 + 0xe6546b64)

@njit
def fmix32(h):
    """MurmurHash3 finalizer. Forces every input bit to affect every output bit."""
    h = _u32(h)
    h ^= h >> 16
    h = _u32(h * 0x85ebca6b)
    h ^= h >> 13
    h = _u32(h * 0xc2b2ae35)
    h ^= h >> 16
    return h

@njit
def hash2d(x, y, seed):
    """
    Hashes the lattice point (x, y) with the given seed.

    The key is the 64-bit value (x << 32) | y read as little-endian bytes, so
    y forms the first 4-byte block and x the second.
    """
    h = _u32(np.int64(seed))
    h = _mix_block(h, _u32(np.int64(y)))
    h = _mix_block(h, _u32(np.int64(x)))
    h ^= _KEY_LENGTH
    return fmix32(h)

@njit
def hash2d_lattice(xs, ys, seed):
    """
    Hashes every lattice point (xs[a], ys[c]) into a (len(xs), len(ys)) array.
    Used to seed a whole octave's corner gradients in one compiled loop.
    """
    out = np.empty((xs.shape[0], ys.shape[0]), dtype=np.int64)
    for a in range(xs.shape[0]):
        for c in range(ys.shape[0]):
            out[a, c] = hash2d(xs[a], ys[c], seed)
    return out
