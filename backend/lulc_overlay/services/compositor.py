"""Overlay pipeline: resolve → extent → export → mask → composite.

One pass, no retries. Any failure aborts the request with an OverlayError
subclass; the API layer turns that into the JSON error body.
"""

from __future__ import annotations

import asyncio
import base64
import io
import logging
from dataclasses import dataclass

import httpx
import numpy as np
from numpy.typing import NDArray
from PIL import Image

from lulc_overlay.config import Settings, settings as default_settings
from lulc_overlay.errors import BadRequest, UpstreamError
from lulc_overlay.models.feature import EsriGeometry, Level
from lulc_overlay.services.arcgis import export_image
from lulc_overlay.services.resolver import resolve_region
from lulc_overlay.utils.geometry import (
    Extent,
    clamp_size,
    expand_extent,
    extent_from_geometry,
    mercator_to_wgs84_bounds,
    size_from_extent,
)
from lulc_overlay.utils.rasterizer import geometry_to_mask

logger = logging.getLogger(__name__)


@dataclass
class OverlayResult:
    png: bytes
    bounds: list[float]
    width: int
    height: int
    level: Level

    @property
    def bounds_header(self) -> str:
        return ",".join(str(v) for v in self.bounds)

    def to_data_url(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.png).decode("ascii")


def apply_mask(raster_png: bytes, mask: NDArray[np.uint8]) -> bytes:
    """Destination-in composite: keep raster color, multiply its alpha by the mask."""
    height, width = mask.shape
    try:
        img = Image.open(io.BytesIO(raster_png)).convert("RGBA")
    except (OSError, ValueError) as exc:
        raise UpstreamError("Export returned an unreadable image") from exc

    if img.size != (width, height):
        logger.debug("Export image is %s, resizing to %dx%d", img.size, width, height)
        img = img.resize((width, height), Image.Resampling.NEAREST)

    rgba = np.array(img)
    alpha = rgba[:, :, 3].astype(np.uint16) * mask.astype(np.uint16)
    rgba[:, :, 3] = ((alpha + 127) // 255).astype(np.uint8)

    out = io.BytesIO()
    Image.fromarray(rgba).save(out, format="PNG")
    return out.getvalue()


def _mask_raster(raster_png: bytes, geometry: EsriGeometry, width: int, height: int, extent: Extent) -> bytes:
    mask = geometry_to_mask(geometry, width, height, extent)
    return apply_mask(raster_png, mask)


async def build_overlay(
    client: httpx.AsyncClient,
    state: str = "",
    village: str = "",
    size: str | int | None = None,
    settings: Settings = default_settings,
) -> OverlayResult:
    """Produce the masked LULC PNG and its geographic bounds for a region."""
    if not state.strip() and not village.strip():
        raise BadRequest("Provide state and/or village")

    region = await resolve_region(client, state=state, village=village, settings=settings)
    geometry = region.feature.geometry or EsriGeometry()

    raw_extent = extent_from_geometry(geometry)
    if raw_extent.is_empty:
        raise UpstreamError("Feature has no geometry")

    extent = expand_extent(raw_extent, settings.pad_factor)
    max_size = clamp_size(
        size if size is not None else settings.default_size,
        default=settings.default_size,
        lo=settings.min_size,
        hi=settings.max_size,
    )
    width, height = size_from_extent(extent, max_size)

    raster = await export_image(
        client, settings.lulc_export_url, extent, width, height, dpi=settings.export_dpi
    )

    # Mask rendering and PNG encoding are CPU-bound; keep the event loop free.
    loop = asyncio.get_running_loop()
    png = await loop.run_in_executor(None, _mask_raster, raster, geometry, width, height, extent)

    bounds = mercator_to_wgs84_bounds(extent)
    logger.info("Built %s overlay %dx%d bounds=%s", region.level, width, height, bounds)
    return OverlayResult(png=png, bounds=bounds, width=width, height=height, level=region.level)
