"""Shared test fixtures: a fake ArcGIS backend served through httpx.MockTransport."""

from __future__ import annotations

import io
import re
from collections.abc import Callable

import httpx
import pytest
from PIL import Image


# Boundaries in EPSG:3857 metres. Odisha is a plain square; Angul is a
# square with a square hole so even-odd filling can be checked.
ODISHA_RINGS = [
    [[9000000.0, 2200000.0], [9400000.0, 2200000.0], [9400000.0, 2600000.0],
     [9000000.0, 2600000.0], [9000000.0, 2200000.0]],
]

ANGUL_RINGS = [
    [[9300000.0, 2400000.0], [9310000.0, 2400000.0], [9310000.0, 2410000.0],
     [9300000.0, 2410000.0], [9300000.0, 2400000.0]],
    [[9303000.0, 2403000.0], [9303000.0, 2407000.0], [9307000.0, 2407000.0],
     [9307000.0, 2403000.0], [9303000.0, 2403000.0]],
]

STATES = {
    "odisha": {"attributes": {"State_FSI": "Odisha"}, "geometry": {"rings": ODISHA_RINGS}},
}

VILLAGES = {
    "angul": {
        "attributes": {"name": "Angul", "state": "Odisha"},
        "geometry": {"rings": ANGUL_RINGS},
    },
}

# Color every exported pixel gets from the fake export service.
EXPORT_RGBA = (34, 139, 34, 255)

_LIKE_RE = re.compile(r"LOWER\((\w+)\) LIKE '%(.*?)%'")


def solid_png(width: int, height: int, rgba: tuple[int, int, int, int] = EXPORT_RGBA) -> bytes:
    buf = io.BytesIO()
    Image.new("RGBA", (width, height), rgba).save(buf, format="PNG")
    return buf.getvalue()


def _match(records: dict[str, dict], where: str, name_field: str) -> list[dict]:
    filters = dict(_LIKE_RE.findall(where))
    needle = filters.get(name_field, "")
    hits = []
    for key, record in records.items():
        if needle not in key:
            continue
        state_needle = filters.get("state")
        if state_needle is not None and name_field != "State_FSI":
            if state_needle not in record["attributes"]["state"].lower():
                continue
        hits.append(record)
    return hits


class FakeArcGIS:
    """Records requests and answers like the three upstream ArcGIS layers."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.export_status = 200
        self.query_status = 200
        self.query_error: dict | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params
        path = request.url.path

        if path.endswith("/export"):
            if self.export_status != 200:
                return httpx.Response(self.export_status, text="export broke")
            width, height = (int(v) for v in params["size"].split(","))
            return httpx.Response(200, content=solid_png(width, height), headers={"Content-Type": "image/png"})

        if self.query_status != 200:
            return httpx.Response(self.query_status, text="query broke")
        if self.query_error is not None:
            return httpx.Response(200, json={"error": self.query_error})

        where = params["where"]
        if "IAB_Village" in path:
            features = _match(VILLAGES, where, "name")
        else:
            features = _match(STATES, where, "State_FSI")
        return httpx.Response(200, json={"features": features[: int(params.get("num", "1"))]})

    @property
    def query_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/query")]

    @property
    def export_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/export")]


@pytest.fixture
def fake_arcgis() -> FakeArcGIS:
    return FakeArcGIS()


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler), timeout=5.0)

    return _make
