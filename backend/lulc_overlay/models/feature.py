"""Esri JSON feature model (the shape ArcGIS query endpoints return)."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class EsriGeometry(BaseModel):
    """Polygon geometry: closed rings of [x, y] points in EPSG:3857.

    Outer rings and holes share one list; even-odd filling tells them apart.
    """

    model_config = ConfigDict(extra="allow")

    rings: list[list[list[float]]] = Field(default_factory=list)


class EsriFeature(BaseModel):
    model_config = ConfigDict(extra="allow")

    attributes: dict[str, Any] = Field(default_factory=dict)
    geometry: EsriGeometry | None = None


Level = Literal["state", "village"]


class ResolvedRegion(BaseModel):
    level: Level
    feature: EsriFeature
