"""GET /api/mask — boundary feature for a state or village."""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends

from lulc_overlay.config import Settings
from lulc_overlay.dependencies import get_http_client, get_settings
from lulc_overlay.models.feature import ResolvedRegion
from lulc_overlay.services.resolver import resolve_region

router = APIRouter()


@router.get("/mask", response_model=ResolvedRegion)
async def mask(
    state: str = "",
    village: str = "",
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> ResolvedRegion:
    return await resolve_region(client, state=state, village=village, settings=settings)
