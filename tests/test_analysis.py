import math

import numpy as np
import pytest

from terrain_generator.analysis import gradient_profile, gradient_statistics


def _ramp(size=32, rise=1.0):
    # Rises `rise` metres per cell along the first axis, flat along the second.
    return np.tile(100.0 + rise * np.arange(size)[:, None], (1, size))


@pytest.mark.parametrize("octave", [0, 1, 3])
def test_constant_slope_lands_in_a_single_bucket(octave):
    stats = gradient_statistics(_ramp(), octave, cell_size=5.0)
    spacing = 2 ** octave
    assert stats.count == 2 * 32 * (32 - spacing)
    assert stats.maximum == pytest.approx(0.2)
    assert stats.mean == pytest.approx(0.1)
    assert stats.frequencies[10] == pytest.approx(0.5)
    assert stats.frequencies[0] == pytest.approx(0.5)
    assert stats.frequencies.sum() == pytest.approx(1.0)


def test_exponential_scale_is_the_mean_slope():
    heights = 1000.0 + np.random.default_rng(5).exponential(0.5, size=(64, 64)).cumsum(axis=0)
    stats = gradient_statistics(heights, 0, cell_size=5.0)
    assert stats.exponential_scale == pytest.approx(stats.mean, rel=1e-6)


def test_missing_samples_are_ignored():
    heights = _ramp()
    heights[5, :] = -9999
    heights[:, 7] = 0.0
    stats = gradient_statistics(heights, 0, cell_size=5.0)
    assert stats.count < 2 * 32 * 31
    assert stats.maximum == pytest.approx(0.2)


def test_steep_slopes_are_dropped():
    stats = gradient_statistics(_ramp(rise=10.0), 0, cell_size=5.0)
    # Only the flat direction survives the cut-off.
    assert stats.count == 32 * 31
    assert stats.maximum == 0.0


def test_spacing_larger_than_grid_gives_no_data():
    stats = gradient_statistics(_ramp(8), 3)
    assert stats.count == 0
    assert math.isnan(stats.exponential_scale)
    assert stats.frequencies.shape == (50,)


def test_profile_covers_each_octave():
    profile = gradient_profile(_ramp(), 4, cell_size=5.0)
    assert [stats.octave for stats in profile] == [0, 1, 2, 3]
