"""Resolve a state / village name to its boundary feature."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import httpx

from lulc_overlay.config import Settings, settings as default_settings
from lulc_overlay.errors import BadRequest, NotFound
from lulc_overlay.models.feature import EsriFeature, ResolvedRegion
from lulc_overlay.services.arcgis import WEB_MERCATOR_WKID, arcgis_query

logger = logging.getLogger(__name__)

# Characters that would break out of, or widen, a LIKE pattern literal.
_UNSAFE_LIKE_CHARS = re.compile(r"[%'_]")

# Attribute fields on the upstream layers.
VILLAGE_NAME_FIELD = "name"
VILLAGE_STATE_FIELD = "state"
STATE_NAME_FIELD = "State_FSI"


def sanitize_like_value(value: str) -> str:
    return _UNSAFE_LIKE_CHARS.sub("", str(value).lower())


@dataclass(frozen=True)
class Predicate:
    """Case-insensitive ``contains`` test on one attribute field."""

    field: str
    value: str

    def to_sql(self) -> str:
        return f"LOWER({self.field}) LIKE '%{sanitize_like_value(self.value)}%'"


def build_where(predicates: list[Predicate]) -> str:
    return " AND ".join(p.to_sql() for p in predicates)


def _feature_params(where: str) -> dict[str, str]:
    return {
        "where": where,
        "returnGeometry": "true",
        "outFields": "*",
        "outSR": WEB_MERCATOR_WKID,
        "num": "1",
    }


async def resolve_region(
    client: httpx.AsyncClient,
    state: str = "",
    village: str = "",
    settings: Settings = default_settings,
) -> ResolvedRegion:
    """Return the first boundary feature matching the query.

    A village name selects the village layer (optionally narrowed by state);
    otherwise the state layer is searched.
    """
    state = state.strip()
    village = village.strip()
    if not state and not village:
        raise BadRequest("Provide state and/or village")

    if village:
        predicates = [Predicate(VILLAGE_NAME_FIELD, village)]
        if state:
            predicates.append(Predicate(VILLAGE_STATE_FIELD, state))
        data = await arcgis_query(client, settings.village_query_url, _feature_params(build_where(predicates)))
        features = data.get("features") or []
        if not features:
            raise NotFound("Village not found")
        logger.info("Resolved village %r (state %r)", village, state)
        return ResolvedRegion(level="village", feature=EsriFeature.model_validate(features[0]))

    where = build_where([Predicate(STATE_NAME_FIELD, state)])
    data = await arcgis_query(client, settings.state_query_url, _feature_params(where))
    features = data.get("features") or []
    if not features:
        raise NotFound("State not found")
    logger.info("Resolved state %r", state)
    return ResolvedRegion(level="state", feature=EsriFeature.model_validate(features[0]))
