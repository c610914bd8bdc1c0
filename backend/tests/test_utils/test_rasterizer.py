"""Tests for the polygon mask rasterizer."""

from __future__ import annotations

from lulc_overlay.models.feature import EsriGeometry
from lulc_overlay.utils.geometry import Extent
from lulc_overlay.utils.rasterizer import (
    geometry_to_mask,
    geometry_to_path_data,
    geometry_to_svg_mask,
)
from tests.conftest import ANGUL_RINGS


def test_path_data_flips_y_and_closes_rings():
    geom = EsriGeometry(rings=[[[0, 0], [10, 0], [10, 10], [0, 0]]])
    d = geometry_to_path_data(geom, 100, 100, Extent(0, 0, 10, 10))
    assert d == "M 0.00 100.00 L 100.00 100.00 L 100.00 0.00 L 0.00 100.00 Z"


def test_one_subpath_per_ring():
    geom = EsriGeometry(rings=ANGUL_RINGS)
    d = geometry_to_path_data(geom, 64, 64, Extent(9300000, 2400000, 9310000, 2410000))
    assert d.count("M ") == 2
    assert d.count("Z") == 2


def test_svg_document():
    geom = EsriGeometry(rings=[[[0, 0], [1, 0], [1, 1], [0, 0]]])
    svg = geometry_to_svg_mask(geom, 40, 30, Extent(0, 0, 1, 1)).decode()
    assert 'width="40"' in svg
    assert 'height="30"' in svg
    assert 'viewBox="0 0 40 30"' in svg
    assert 'fill-rule="evenodd"' in svg


def test_mask_square_inside_outside():
    # Square occupying the middle half of a 100x100 image.
    geom = EsriGeometry(rings=[[[25, 25], [75, 25], [75, 75], [25, 75], [25, 25]]])
    mask = geometry_to_mask(geom, 100, 100, Extent(0, 0, 100, 100))
    assert mask.shape == (100, 100)
    assert mask[50, 50] == 255
    assert mask[30, 30] == 255
    assert mask[5, 5] == 0
    assert mask[95, 50] == 0


def test_mask_vertical_flip():
    # Polygon in the lower half of the extent lands in the bottom image rows.
    geom = EsriGeometry(rings=[[[0, 0], [100, 0], [100, 40], [0, 40], [0, 0]]])
    mask = geometry_to_mask(geom, 100, 100, Extent(0, 0, 100, 100))
    assert mask[90, 50] == 255
    assert mask[10, 50] == 0


def test_mask_hole_is_transparent():
    extent = Extent(9300000, 2400000, 9310000, 2410000)
    mask = geometry_to_mask(EsriGeometry(rings=ANGUL_RINGS), 100, 100, extent)
    assert mask[50, 50] == 0  # inside the hole
    assert mask[15, 15] == 255  # between outer ring and hole
    assert mask[85, 85] == 255


def test_mask_non_square_size():
    geom = EsriGeometry(rings=[[[0, 0], [200, 0], [200, 100], [0, 100], [0, 0]]])
    mask = geometry_to_mask(geom, 64, 32, Extent(0, 0, 200, 100))
    assert mask.shape == (32, 64)
    assert mask[16, 32] == 255
