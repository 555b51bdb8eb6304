import numpy as np
from PIL import Image

from terrain_generator import color_maps


def test_bands_follow_terrain_levels():
    values = np.array([0.0, 0.12, 0.2, 0.5, 0.7, 0.9])
    np.testing.assert_array_equal(
        color_maps.calculate_band_map(values),
        [color_maps.BAND_ID_WATER, color_maps.BAND_ID_SAND, color_maps.BAND_ID_GRASS,
         color_maps.BAND_ID_DIRT, color_maps.BAND_ID_MOUNTAIN, color_maps.BAND_ID_SNOW],
    )


def test_terrain_colors_come_from_the_lookup_table():
    colors = color_maps.get_terrain_color_array(np.array([[0.0, 0.95]]))
    assert colors.shape == (1, 2, 3)
    assert tuple(colors[0, 0]) == color_maps.COLOR_MAP_TERRAIN["water"]
    assert tuple(colors[0, 1]) == color_maps.COLOR_MAP_TERRAIN["snow"]


def test_elevations_normalize_against_cap():
    normalized = color_maps.normalize_elevation(np.array([-10.0, 0.0, 250.0, 600.0]), 500.0)
    np.testing.assert_allclose(normalized, [0.0, 0.0, 0.5, 1.0])


def test_grayscale_keeps_tile_orientation():
    values = np.zeros((2, 3))
    values[1, 2] = 1.0
    gray = color_maps.get_elevation_color_array(values)
    assert gray.shape == (2, 3, 3)
    assert gray.dtype == np.uint8
    assert tuple(gray[1, 2]) == (255, 255, 255)
    assert tuple(gray[0, 0]) == (0, 0, 0)


def test_preview_is_saved_as_png(tmp_path):
    path = tmp_path / "previews" / "tile.png"
    colors = color_maps.get_terrain_color_array(np.linspace(0.0, 1.0, 24).reshape(4, 6))
    assert color_maps.save_preview(str(path), colors)
    with Image.open(path) as image:
        assert image.format == "PNG"
        assert image.size == (6, 4)
        assert image.getpixel((0, 0)) == color_maps.COLOR_MAP_TERRAIN["water"]


def test_preview_failure_is_reported(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    colors = np.zeros((2, 2, 3), dtype=np.uint8)
    assert not color_maps.save_preview(str(blocker / "tile.png"), colors)
