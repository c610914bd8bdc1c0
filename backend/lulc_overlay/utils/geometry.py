"""Leaf-node extent and projection helpers. No service imports."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from lulc_overlay.models.feature import EsriGeometry

# WGS84 semi-major axis, used as the sphere radius by EPSG:3857.
EARTH_RADIUS_M = 6378137.0

# Latitude where Web Mercator maps to a square world: atan(sinh(π)) in degrees.
MAX_MERCATOR_LAT = 85.05112878

# Bound on y/R so exp() stays finite; anything past it is already at ±90°.
_MAX_MERCATOR_Y_RATIO = 700.0

# Floor for extent width/height when deriving an aspect ratio (1 projected metre).
_MIN_EXTENT_SPAN = 1.0

# Narrowest image side we hand to the export service.
_MIN_PIXELS = 2


@dataclass(frozen=True)
class Extent:
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    @property
    def center(self) -> tuple[float, float]:
        return ((self.xmin + self.xmax) / 2, (self.ymin + self.ymax) / 2)

    @property
    def is_empty(self) -> bool:
        """True for the inverted box of a geometry without points, or a zero-area box."""
        if not (math.isfinite(self.width) and math.isfinite(self.height)):
            return True
        return self.width <= 0 or self.height <= 0

    def as_bbox(self) -> str:
        return f"{self.xmin},{self.ymin},{self.xmax},{self.ymax}"


def ring_points(geometry: EsriGeometry) -> NDArray[np.float64]:
    """All ring vertices stacked into an Nx2 array (extra z/m ordinates dropped)."""
    rings = [np.asarray(ring, dtype=np.float64)[:, :2] for ring in geometry.rings if len(ring)]
    if not rings:
        return np.empty((0, 2), dtype=np.float64)
    return np.vstack(rings)


def extent_from_geometry(geometry: EsriGeometry) -> Extent:
    """Enclosing box of every point of every ring.

    A geometry without points gives Extent(inf, inf, -inf, -inf); callers
    check ``is_empty`` instead of passing it on.
    """
    pts = ring_points(geometry)
    if len(pts) == 0:
        return Extent(math.inf, math.inf, -math.inf, -math.inf)
    return Extent(
        float(np.min(pts[:, 0])),
        float(np.min(pts[:, 1])),
        float(np.max(pts[:, 0])),
        float(np.max(pts[:, 1])),
    )


def expand_extent(extent: Extent, factor: float = 1.04) -> Extent:
    """Scale width and height about the center by ``factor``."""
    cx, cy = extent.center
    w = extent.width * factor
    h = extent.height * factor
    return Extent(cx - w / 2, cy - h / 2, cx + w / 2, cy + h / 2)


def size_from_extent(extent: Extent, max_size: int = 1024) -> tuple[int, int]:
    """Pixel (width, height) with the extent's aspect ratio and longer side ``max_size``."""
    w = max(_MIN_EXTENT_SPAN, extent.width)
    h = max(_MIN_EXTENT_SPAN, extent.height)
    aspect = w / h

    width, height = max_size, round(max_size / aspect)
    if height > max_size:
        height = max_size
        width = round(max_size * aspect)
    return max(_MIN_PIXELS, width), max(_MIN_PIXELS, height)


def clamp_size(value: str | int | None, default: int = 1024, lo: int = 128, hi: int = 4096) -> int:
    """Parse a ``size`` query value; unparseable or zero falls back to ``default``."""
    try:
        size = int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        size = 0
    if not size:
        size = default
    return min(hi, max(lo, size))


def _mercator_x_to_lon(x: float) -> float:
    return math.degrees(x / EARTH_RADIUS_M)


def _mercator_y_to_lat(y: float) -> float:
    ratio = max(-_MAX_MERCATOR_Y_RATIO, min(_MAX_MERCATOR_Y_RATIO, y / EARTH_RADIUS_M))
    return math.degrees(2 * math.atan(math.exp(ratio)) - math.pi / 2)


def _clamp_lat(lat: float) -> float:
    return max(-MAX_MERCATOR_LAT, min(MAX_MERCATOR_LAT, lat))


def mercator_to_wgs84_bounds(extent: Extent) -> list[float]:
    """Inverse spherical Web Mercator: extent → [west, south, east, north] in degrees."""
    west = _mercator_x_to_lon(extent.xmin)
    east = _mercator_x_to_lon(extent.xmax)
    south = _clamp_lat(_mercator_y_to_lat(extent.ymin))
    north = _clamp_lat(_mercator_y_to_lat(extent.ymax))
    return [west, south, east, north]


def wgs84_to_mercator(lon: float, lat: float) -> tuple[float, float]:
    """Forward spherical Web Mercator; latitude is clamped to the projection limit.

    Not used on the request path. It is the counterpart that
    ``mercator_to_wgs84_bounds`` is checked against.
    """
    lat = _clamp_lat(lat)
    x = math.radians(lon) * EARTH_RADIUS_M
    y = EARTH_RADIUS_M * math.log(math.tan(math.pi / 4 + math.radians(lat) / 2))
    return x, y
