from boundary_pipeline.core.metrics import InMemoryIngestionMetricsCollector
from boundary_pipeline.core.prometheus_exporter import IngestionPrometheusExporter


def test_ingestion_metrics_ignore_empty_record_batches() -> None:
    metrics = InMemoryIngestionMetricsCollector()
    metrics.add_records("hospitals", "skipped", 0)
    metrics.add_records("hospitals", "accepted", 3)

    assert dict(metrics.dataset_records_total) == {("hospitals", "accepted"): 3}


def test_ingestion_prometheus_exporter_renders_metrics() -> None:
    metrics = InMemoryIngestionMetricsCollector()
    metrics.increment_load("fire_districts", "loaded")
    metrics.increment_load("police_stations", "failed")
    metrics.add_records("fire_districts", "accepted", 120)
    metrics.add_records("fire_districts", "skipped", 2)
    metrics.increment_read_retry("police_stations")
    metrics.observe_load_duration("fire_districts", 0.4)
    metrics.set_snapshot("fire_districts", generation=3, record_count=120)
    metrics.increment_assignment("Fire", "District")

    output = IngestionPrometheusExporter().render(metrics)

    assert 'dataset_load_total{dataset="fire_districts",status="loaded"} 1.0' in output
    assert 'dataset_records_total{dataset="fire_districts",result="skipped"} 2.0' in output
    assert "dataset_read_retries_total" in output
    assert "dataset_load_duration_seconds" in output
    assert 'dataset_snapshot_generation{dataset="fire_districts"} 3.0' in output
    assert "dataset_snapshot_records" in output
    assert 'station_assignment_total{agency="Fire",method="District"} 1.0' in output


def test_reset_clears_every_series() -> None:
    metrics = InMemoryIngestionMetricsCollector()
    metrics.increment_load("hospitals", "loaded")
    metrics.increment_assignment("Hospital", "Nearest")

    metrics.reset()

    assert not metrics.dataset_load_total
    assert not metrics.assignment_total
