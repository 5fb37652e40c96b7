from __future__ import annotations

from collections.abc import Callable

from pyproj import CRS, Transformer

WGS84 = "EPSG:4326"

# (x, y) in the source CRS -> (lng, lat) in WGS84
CoordinateTransform = Callable[[float, float], tuple[float, float]]


def build_coordinate_transform(source_crs: str | None) -> CoordinateTransform | None:
    """Return a transform to WGS84, or None when the source already is WGS84.

    Raises ``pyproj.exceptions.CRSError`` for an unknown CRS.
    """
    if not source_crs:
        return None
    crs = CRS.from_user_input(source_crs)
    if crs.equals(CRS.from_epsg(4326)):
        return None
    transformer = Transformer.from_crs(crs, WGS84, always_xy=True)

    def transform(x: float, y: float) -> tuple[float, float]:
        lng, lat = transformer.transform(x, y)
        return float(lng), float(lat)

    return transform
