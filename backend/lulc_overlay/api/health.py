"""Health check + service descriptor."""

from __future__ import annotations

from fastapi import APIRouter

from lulc_overlay.models.responses import HealthResponse, ServiceDescriptor

router = APIRouter()
root_router = APIRouter()

_EXAMPLE_ENDPOINTS = [
    "/overlay?state=Odisha",
    "/overlay?state=Odisha&village=Angul",
    "/overlay?state=Odisha&village=Angul&size=2048&format=json",
    "/api/mask?state=Odisha",
]


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


@root_router.get("/", response_model=ServiceDescriptor)
async def root() -> ServiceDescriptor:
    return ServiceDescriptor(endpoints=_EXAMPLE_ENDPOINTS)
