import numpy as np
import pytest

from terrain_generator.sampling import (
    DistributionReport,
    exponential_rand,
    measure_distribution,
    save_distribution,
    tail_lifted_rand,
    uniform_rand,
)


def test_uniform_draws_lie_in_open_unit_interval():
    samples = uniform_rand(np.random.default_rng(1), 50000)
    assert samples.min() > 0.0
    assert samples.max() < 1.0
    assert samples.mean() == pytest.approx(0.5, abs=0.01)


def test_exponential_draws_are_skewed_small():
    samples = exponential_rand(np.random.default_rng(2), 50000)
    assert samples.max() <= 1.0
    assert np.median(samples) < 0.1


def test_scalar_draw():
    value = uniform_rand(np.random.default_rng(3))
    assert np.ndim(value) == 0


def test_tail_lifting_raises_the_mean():
    means = [tail_lifted_rand(np.random.default_rng(4), omega, 50000).mean() for omega in (0.0, 0.5, 1.0)]
    assert means[0] < means[1] < means[2]
    assert means[2] == pytest.approx(0.5, abs=0.01)


def test_measurement_is_repeatable():
    first = measure_distribution(0.3, 20000, 50, np.random.default_rng(7))
    second = measure_distribution(0.3, 20000, 50, np.random.default_rng(7))
    np.testing.assert_array_equal(first.frequencies, second.frequencies)


def test_histogram_accounts_for_every_sample():
    report = measure_distribution(0.5, 30000, 100, np.random.default_rng(8), batch_size=7000)
    assert report.missed_small == 0
    assert report.missed_large == 0
    assert report.successes == 30000
    assert report.frequencies.shape == (100,)
    assert report.frequencies.sum() == pytest.approx(1.0)
    assert 0.0 <= report.minimum <= report.maximum <= 1.0


def test_lifted_tail_holds_more_mass_in_upper_half():
    plain = measure_distribution(0.0, 30000, 100, np.random.default_rng(9))
    lifted = measure_distribution(0.5, 30000, 100, np.random.default_rng(9))
    assert lifted.frequencies[50:].sum() > plain.frequencies[50:].sum() + 0.1


def test_save_writes_one_frequency_per_line(tmp_path):
    report = DistributionReport(0.5, 4, np.array([0.25, 0.5, 0.25]), 0.1, 0.9, 0, 0)
    path = tmp_path / "distribution.txt"
    assert save_distribution(str(path), report)
    assert path.read_text() == "0.2500\n0.5000\n0.2500\n\n"


def test_save_failure_is_reported(tmp_path):
    report = DistributionReport(0.5, 1, np.array([1.0]), 0.5, 0.5, 0, 0)
    assert not save_distribution(str(tmp_path), report)
