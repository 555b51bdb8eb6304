import numpy as np
import pytest

from terrain_generator.dem import DEMFormatError, load_dem, save_dem


def test_header_layout(tmp_path):
    path = tmp_path / "tile.asc"
    assert save_dem(str(path), np.array([[1.0, 2.5, 3.0], [4.0, 5.0, 6.125]], dtype=np.float32))
    lines = path.read_text().splitlines()
    assert lines[:6] == [
        "nrows 2",
        "ncols 3",
        "xllcenter 0.000000",
        "yllcenter 0.000000",
        "cellsize 5.000000",
        "NODATA_value  -9999",
    ]
    assert lines[6].split() == ["1.00", "2.50", "3.00"]
    assert lines[7].split() == ["4.00", "5.00", "6.12"]
    assert len(lines) == 8


def test_saved_tile_loads_back(tmp_path):
    elevation = np.random.default_rng(0).uniform(0.0, 5000.0, size=(16, 24)).astype(np.float32)
    path = tmp_path / "nested" / "tile.asc"
    assert save_dem(str(path), elevation, cell_size=2.0)
    header, heights = load_dem(str(path))
    assert header['nrows'] == 16
    assert header['ncols'] == 24
    assert header['cellsize'] == 2.0
    assert header['NODATA_value'] == -9999.0
    assert heights.dtype == np.float32
    np.testing.assert_allclose(heights, elevation, atol=0.006)


def test_unwritable_path_is_reported(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    assert not save_dem(str(blocker / "tile.asc"), np.zeros((2, 2)))


def test_missing_header_field_is_rejected(tmp_path):
    path = tmp_path / "bad.asc"
    path.write_text("nrows 1\nncols 1\ncellsize 5\n1.0\n")
    with pytest.raises(DEMFormatError, match="xllcenter"):
        load_dem(str(path))


def test_grid_size_must_match_header(tmp_path):
    path = tmp_path / "short.asc"
    path.write_text(
        "nrows 3\nncols 2\nxllcenter 0\nyllcenter 0\ncellsize 5\nNODATA_value -9999\n"
        "1 2\n3 4\n"
    )
    with pytest.raises(DEMFormatError, match="3x2"):
        load_dem(str(path))
