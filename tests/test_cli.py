import json

import numpy as np
import pytest

import analyze_gradients
import generate_terrain
import measure_distribution
from terrain_generator import config as DEFAULTS
from terrain_generator.dem import load_dem
from terrain_generator.distribution import ExponentialMagnitude
from terrain_generator.noise import cell_noise

SMALL_TILE = ["--tile-side", "16", "--first-octave", "1", "--last-octave", "3"]


def test_generates_a_single_tile_with_preview(tmp_path):
    exit_code = generate_terrain.main(SMALL_TILE + ["--seed", "11", "--elevation-cap", "1000",
                                                    "--output-dir", str(tmp_path), "--preview", "terrain"])
    assert exit_code == 0
    header, heights = load_dem(str(tmp_path / "output.asc"))
    assert heights.shape == (16, 16)
    assert heights.min() >= 0.0
    assert heights.max() <= 1000.0
    assert (tmp_path / "output.png").exists()


def test_grid_tiles_join_without_seams(tmp_path):
    exit_code = generate_terrain.main(SMALL_TILE + ["--last-octave", "1", "--row", "3", "--col", "4",
                                                    "--grid-rows", "2", "--output-dir", str(tmp_path)])
    assert exit_code == 0
    _, top = load_dem(str(tmp_path / "output_0_0.asc"))
    _, bottom = load_dem(str(tmp_path / "output_1_0.asc"))
    magnitude = ExponentialMagnitude.from_seed(DEFAULTS.DEFAULT_SEED, DEFAULTS.DEFAULT_TAIL_MULTIPLIER)
    steps = np.arange(16) / 16
    cap = DEFAULTS.DEFAULT_ELEVATION_CAP_M

    def to_elevation(noise):
        return cap * (1.0 + np.sqrt(2.0) * noise) / 2.0

    # The far edge of the upper tile's cell is the first row of the lower tile.
    edge = cell_noise(3, 4, 1.0, steps, DEFAULTS.DEFAULT_SEED, magnitude)
    np.testing.assert_allclose(bottom[0], to_elevation(edge), atol=0.05)
    inner = cell_noise(3, 4, 15 / 16, steps, DEFAULTS.DEFAULT_SEED, magnitude)
    np.testing.assert_allclose(top[-1], to_elevation(inner), atol=0.05)


def test_config_file_is_overridden_by_flags(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({
        "terrain_generation_parameters": {"seed": 3, "tile_side": 8, "first_octave": 1, "last_octave": 2}
    }))
    exit_code = generate_terrain.main(["--config", str(config_path), "--tile-side", "16",
                                       "--output-dir", str(tmp_path)])
    assert exit_code == 0
    _, heights = load_dem(str(tmp_path / "output.asc"))
    assert heights.shape == (16, 16)


def test_unreadable_config_fails(tmp_path):
    assert generate_terrain.main(["--config", str(tmp_path / "missing.json")]) == 1


@pytest.mark.parametrize("flags", [["--omega", "1.5"], ["--omega", "-0.1"], ["--elevation-cap", "0"], ["--tile-side", "1"]])
def test_invalid_settings_are_rejected(flags):
    with pytest.raises(SystemExit):
        generate_terrain.main(flags)


def test_distribution_experiment_writes_frequencies(tmp_path):
    output = tmp_path / "distribution.txt"
    exit_code = measure_distribution.main(["--seed", "1", "--omega", "0.5", "--repeats", "5000",
                                           "--granularity", "20", "--output", str(output)])
    assert exit_code == 0
    lines = output.read_text().splitlines()
    assert len(lines) == 21
    assert sum(float(line) for line in lines[:20]) == pytest.approx(1.0, abs=2e-3)


def test_distribution_experiment_rejects_bad_omega():
    with pytest.raises(SystemExit):
        measure_distribution.main(["--omega", "2"])


def test_gradient_analysis_of_generated_tile(tmp_path):
    assert generate_terrain.main(SMALL_TILE + ["--output-dir", str(tmp_path)]) == 0
    output = tmp_path / "gradients.txt"
    exit_code = analyze_gradients.main([str(tmp_path / "output.asc"), "--octaves", "3", "--output", str(output)])
    assert exit_code == 0
    summaries = [line for line in output.read_text().splitlines() if " octave " in line]
    assert len(summaries) == 3


def test_gradient_analysis_of_missing_file_fails(tmp_path):
    assert analyze_gradients.main([str(tmp_path / "missing.asc")]) == 1
