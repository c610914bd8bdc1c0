"""GET /overlay and /api/overlay — masked LULC raster as PNG or JSON."""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from lulc_overlay.config import Settings
from lulc_overlay.dependencies import get_http_client, get_settings
from lulc_overlay.models.responses import OverlayJsonResponse
from lulc_overlay.services.compositor import build_overlay

router = APIRouter()


async def overlay(
    state: str = "",
    village: str = "",
    size: str = "",
    fmt: str = Query("png", alias="format"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> Response:
    result = await build_overlay(
        client, state=state, village=village, size=size or None, settings=settings
    )

    if fmt.strip().lower() == "json":
        body = OverlayJsonResponse(
            image=result.to_data_url(),
            bounds=result.bounds,
            width=result.width,
            height=result.height,
        )
        return JSONResponse(
            content=body.model_dump(),
            headers={"Cache-Control": settings.cache_control},
        )

    return Response(
        content=result.png,
        media_type="image/png",
        headers={
            "Cache-Control": settings.cache_control,
            "X-Bounds": result.bounds_header,
        },
    )


router.add_api_route("/overlay", overlay, methods=["GET"], response_class=Response)
