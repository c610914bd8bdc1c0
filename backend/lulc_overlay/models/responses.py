"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from lulc_overlay import __version__


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = __version__


class ServiceDescriptor(BaseModel):
    name: str = "GIS Sentinel Overlay API"
    endpoints: list[str] = Field(default_factory=list)


class OverlayJsonResponse(BaseModel):
    image: str = Field(..., description="PNG as a base64 data URL")
    bounds: list[float] = Field(..., description="[west, south, east, north] in degrees")
    width: int
    height: int


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
