"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    env: str = "development"
    log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["*"]

    # Upstream ArcGIS services
    village_query_url: str = (
        "https://livingatlas.esri.in/server/rest/services/IAB2024/IAB_Village_2024/MapServer/0/query"
    )
    state_query_url: str = (
        "https://services5.arcgis.com/73n8CSGpSSyHr1T9/arcgis/rest/services/state_boundary/FeatureServer/0/query"
    )
    lulc_export_url: str = (
        "https://livingatlas.esri.in/server/rest/services/Sentinel_Lulc/MapServer/export"
    )
    http_timeout: float = 30.0

    # Overlay rendering
    pad_factor: float = 1.06
    default_size: int = 1024
    min_size: int = 128
    max_size: int = 4096
    export_dpi: int = 192
    cache_control: str = "public, max-age=3600, s-maxage=86400, stale-while-revalidate=600"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
