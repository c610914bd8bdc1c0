"""Thin async wrappers over the ArcGIS REST ``query`` and ``export`` operations."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from lulc_overlay.errors import UpstreamError
from lulc_overlay.utils.geometry import Extent

logger = logging.getLogger(__name__)

# Spatial reference used for both the query output and the export box/image.
WEB_MERCATOR_WKID = "3857"


async def arcgis_query(client: httpx.AsyncClient, url: str, params: dict[str, str]) -> dict[str, Any]:
    """GET a feature-service query with ``f=json`` and return the decoded body.

    Raises UpstreamError on transport failure, non-2xx status, or an
    ``error`` object embedded in a 200 response (ArcGIS reports most
    failures that way).
    """
    query = {"f": "json", **params}
    logger.debug("ArcGIS query %s where=%s", url, params.get("where", ""))
    try:
        resp = await client.get(url, params=query)
    except httpx.HTTPError as exc:
        logger.warning("ArcGIS query to %s failed: %s", url, exc)
        raise UpstreamError(f"ArcGIS query failed: {exc}") from exc

    if not resp.is_success:
        logger.warning("ArcGIS query returned status %s for %s", resp.status_code, url)
        raise UpstreamError(f"ArcGIS query failed: {resp.status_code}")

    try:
        data = resp.json()
    except ValueError as exc:
        raise UpstreamError("ArcGIS query returned invalid JSON") from exc

    if data.get("error"):
        err = data["error"]
        message = err.get("message") if isinstance(err, dict) else None
        raise UpstreamError(message or "ArcGIS error")
    return data


def export_params(extent: Extent, width: int, height: int, dpi: int = 192) -> dict[str, str]:
    """Query string for a transparent PNG32 export of layer 0 over ``extent``."""
    return {
        "f": "image",
        "format": "png32",
        "transparent": "true",
        "bbox": extent.as_bbox(),
        "bboxSR": WEB_MERCATOR_WKID,
        "imageSR": WEB_MERCATOR_WKID,
        "size": f"{width},{height}",
        "dpi": str(dpi),
        "layers": "show:0",
    }


async def export_image(
    client: httpx.AsyncClient,
    url: str,
    extent: Extent,
    width: int,
    height: int,
    dpi: int = 192,
) -> bytes:
    """Fetch the raw raster bytes for ``extent`` from a map-service export endpoint."""
    params = export_params(extent, width, height, dpi)
    logger.debug("ArcGIS export %s bbox=%s size=%s", url, params["bbox"], params["size"])
    try:
        resp = await client.get(url, params=params)
    except httpx.HTTPError as exc:
        logger.warning("ArcGIS export from %s failed: %s", url, exc)
        raise UpstreamError(f"Export failed: {exc}") from exc

    if not resp.is_success:
        logger.warning("ArcGIS export returned status %s for %s", resp.status_code, url)
        raise UpstreamError(f"Export failed: {resp.status_code}")
    return resp.content
