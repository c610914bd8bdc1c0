"""FastAPI dependency injection."""

from __future__ import annotations

import httpx
from fastapi import Request

from lulc_overlay.config import Settings, settings


def get_settings() -> Settings:
    return settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound client created in the app lifespan."""
    return request.app.state.http_client
