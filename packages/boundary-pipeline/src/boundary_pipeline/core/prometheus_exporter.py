from __future__ import annotations

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from boundary_pipeline.core.metrics import InMemoryIngestionMetricsCollector


class IngestionPrometheusExporter:
    def __init__(self) -> None:
        self._registry = CollectorRegistry()
        self._load_total = Gauge(
            "dataset_load_total",
            "Dataset loads grouped by dataset and status",
            labelnames=("dataset", "status"),
            registry=self._registry,
        )
        self._records_total = Gauge(
            "dataset_records_total",
            "Dataset feature counts grouped by dataset and result",
            labelnames=("dataset", "result"),
            registry=self._registry,
        )
        self._read_retries_total = Gauge(
            "dataset_read_retries_total",
            "Transient dataset read failures that were retried",
            labelnames=("dataset",),
            registry=self._registry,
        )
        self._load_duration_seconds = Gauge(
            "dataset_load_duration_seconds",
            "Duration of the latest dataset load",
            labelnames=("dataset",),
            registry=self._registry,
        )
        self._snapshot_generation = Gauge(
            "dataset_snapshot_generation",
            "Generation of the published dataset snapshot",
            labelnames=("dataset",),
            registry=self._registry,
        )
        self._snapshot_records = Gauge(
            "dataset_snapshot_records",
            "Record count of the published dataset snapshot",
            labelnames=("dataset",),
            registry=self._registry,
        )
        self._assignment_total = Gauge(
            "station_assignment_total",
            "Station assignments grouped by agency and method",
            labelnames=("agency", "method"),
            registry=self._registry,
        )

    def render(self, metrics: InMemoryIngestionMetricsCollector) -> str:
        for (dataset, status), count in metrics.dataset_load_total.items():
            self._load_total.labels(dataset=dataset, status=status).set(count)
        for (dataset, result), count in metrics.dataset_records_total.items():
            self._records_total.labels(dataset=dataset, result=result).set(count)
        for dataset, count in metrics.dataset_read_retries_total.items():
            self._read_retries_total.labels(dataset=dataset).set(count)
        for dataset, duration in metrics.dataset_load_duration_seconds.items():
            self._load_duration_seconds.labels(dataset=dataset).set(duration)
        for dataset, generation in metrics.dataset_snapshot_generation.items():
            self._snapshot_generation.labels(dataset=dataset).set(generation)
        for dataset, count in metrics.dataset_snapshot_records.items():
            self._snapshot_records.labels(dataset=dataset).set(count)
        for (agency, method), count in metrics.assignment_total.items():
            self._assignment_total.labels(agency=agency, method=method).set(count)
        return generate_latest(self._registry).decode("utf-8")
