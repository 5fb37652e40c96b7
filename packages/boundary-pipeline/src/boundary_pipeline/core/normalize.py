from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from district_engine.cache import DatasetRecord

from boundary_pipeline.adapters.base import DatasetAdapter
from boundary_pipeline.core.exceptions import DatasetNormalizationError, FeatureParseError
from boundary_pipeline.core.projection import CoordinateTransform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionResult:
    records: tuple[DatasetRecord, ...]
    total: int
    skipped_count: int
    skip_samples: tuple[str, ...] = ()


def decode_feature_collection(raw: bytes) -> list[Any]:
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise DatasetNormalizationError(f"dataset is not valid json: {exc}") from exc
    if not isinstance(payload, dict):
        raise DatasetNormalizationError("dataset payload is not a json object")
    features = payload.get("features")
    if not isinstance(features, list):
        raise DatasetNormalizationError("dataset payload missing list field 'features'")
    return features


def normalize_feature_collection(
    features: list[Any],
    adapter: DatasetAdapter,
    transform: CoordinateTransform | None = None,
    skip_sample_size: int = 5,
) -> IngestionResult:
    records: list[DatasetRecord] = []
    samples: list[str] = []
    skipped = 0
    for index, feature in enumerate(features):
        try:
            if not isinstance(feature, dict):
                raise FeatureParseError("feature is not an object")
            records.append(adapter.parse_feature(feature, transform))
        except FeatureParseError as exc:
            skipped += 1
            if len(samples) < skip_sample_size:
                samples.append(f"#{index}: {exc}")
            logger.warning(
                "feature_skipped",
                extra={"dataset": adapter.tag, "feature_index": index, "reason": str(exc)},
            )
    return IngestionResult(
        records=tuple(records),
        total=len(features),
        skipped_count=skipped,
        skip_samples=tuple(samples),
    )
