from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from district_engine.cache import DatasetRecord
from district_engine.models import DatasetKey

from boundary_pipeline.core.exceptions import FeatureParseError
from boundary_pipeline.core.projection import CoordinateTransform

FeatureParser = Callable[[dict[str, Any], Optional[CoordinateTransform]], DatasetRecord]


@dataclass(frozen=True)
class DatasetAdapter:
    tag: str
    key: DatasetKey
    parse_feature: FeatureParser


def _pick(item: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in item and item[key] is not None:
            return item[key]
    return None


def _to_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value).strip()


def _to_optional_str(value: Any) -> str | None:
    text = _to_str(value)
    return text or None


def _to_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def properties_of(feature: dict[str, Any]) -> dict[str, Any]:
    properties = feature.get("properties")
    if properties is None:
        return {}
    if not isinstance(properties, dict):
        raise FeatureParseError("feature properties is not an object")
    return properties


def require_name(properties: dict[str, Any], *keys: str) -> str:
    name = _to_str(_pick(properties, *keys))
    if not name:
        raise FeatureParseError(f"missing name field, expected one of: {', '.join(keys)}")
    return name


def resolve_identifier(
    feature: dict[str, Any],
    properties: dict[str, Any],
    id_keys: tuple[str, ...],
    *fallbacks: str | None,
) -> str:
    """Explicit id property, then feature ``id``, then the first non-empty fallback."""
    candidates = (_pick(properties, *id_keys), feature.get("id"), *fallbacks)
    for candidate in candidates:
        text = _to_str(candidate)
        if text:
            return text
    raise FeatureParseError("feature has no usable identifier")
