"""Polygon → SVG path → alpha mask.

The mask is drawn as an SVG path so CairoSVG does the even-odd scanline work;
holes (inner rings) come out transparent without any ring orientation logic.
"""

from __future__ import annotations

import io
import logging

import cairosvg
import numpy as np
from numpy.typing import NDArray
from PIL import Image

from lulc_overlay.models.feature import EsriGeometry
from lulc_overlay.utils.geometry import Extent

logger = logging.getLogger(__name__)


def _ring_to_subpath(ring: list[list[float]], extent: Extent, height: int, sx: float, sy: float) -> str:
    coords = []
    for point in ring:
        px = (point[0] - extent.xmin) * sx
        py = height - (point[1] - extent.ymin) * sy  # image rows grow downward
        coords.append(f"{px:.2f} {py:.2f}")
    return "M " + " L ".join(coords) + " Z"


def geometry_to_path_data(geometry: EsriGeometry, width: int, height: int, extent: Extent) -> str:
    """SVG path ``d`` with one closed subpath per ring, in pixel coordinates."""
    sx = width / extent.width
    sy = height / extent.height
    return " ".join(
        _ring_to_subpath(ring, extent, height, sx, sy) for ring in geometry.rings if ring
    )


def geometry_to_svg_mask(geometry: EsriGeometry, width: int, height: int, extent: Extent) -> bytes:
    """SVG document of exactly ``width``×``height`` with the polygon filled opaque white."""
    d = geometry_to_path_data(geometry, width, height, extent)
    svg = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}"'
        f' viewBox="0 0 {width} {height}">'
        f'<path d="{d}" fill="#fff" fill-rule="evenodd"/></svg>'
    )
    return svg.encode("utf-8")


def rasterize_mask(svg_mask: bytes, width: int, height: int) -> NDArray[np.uint8]:
    """Render an SVG mask with CairoSVG and return its alpha channel (255 = inside)."""
    png_data = cairosvg.svg2png(bytestring=svg_mask, output_width=width, output_height=height)
    img = Image.open(io.BytesIO(png_data)).convert("RGBA")
    if img.size != (width, height):
        logger.debug("Mask rendered at %s, resizing to %dx%d", img.size, width, height)
        img = img.resize((width, height), Image.Resampling.NEAREST)
    return np.array(img)[:, :, 3]


def geometry_to_mask(geometry: EsriGeometry, width: int, height: int, extent: Extent) -> NDArray[np.uint8]:
    return rasterize_mask(geometry_to_svg_mask(geometry, width, height, extent), width, height)
