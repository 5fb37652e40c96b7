from __future__ import annotations

from boundary_pipeline.core.metrics import InMemoryIngestionMetricsCollector
from boundary_pipeline.core.prometheus_exporter import IngestionPrometheusExporter

ingestion_metrics = InMemoryIngestionMetricsCollector()
ingestion_exporter = IngestionPrometheusExporter()
