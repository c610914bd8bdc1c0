"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from lulc_overlay.api import health, mask, overlay

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(mask.router)
api_router.include_router(overlay.router)

# Unprefixed routes: service descriptor and the /overlay alias.
root_router = APIRouter()

root_router.include_router(health.root_router)
root_router.include_router(overlay.router)
