from __future__ import annotations

from collections import defaultdict


class InMemoryIngestionMetricsCollector:
    def __init__(self) -> None:
        self.dataset_load_total: dict[tuple[str, str], int] = defaultdict(int)
        self.dataset_records_total: dict[tuple[str, str], int] = defaultdict(int)
        self.dataset_read_retries_total: dict[str, int] = defaultdict(int)
        self.dataset_load_duration_seconds: dict[str, float] = {}
        self.dataset_snapshot_generation: dict[str, int] = {}
        self.dataset_snapshot_records: dict[str, int] = {}
        self.assignment_total: dict[tuple[str, str], int] = defaultdict(int)

    def increment_load(self, dataset: str, status: str) -> None:
        self.dataset_load_total[(dataset, status)] += 1

    def add_records(self, dataset: str, result: str, count: int) -> None:
        if count <= 0:
            return
        self.dataset_records_total[(dataset, result)] += count

    def increment_read_retry(self, dataset: str) -> None:
        self.dataset_read_retries_total[dataset] += 1

    def observe_load_duration(self, dataset: str, duration_seconds: float) -> None:
        self.dataset_load_duration_seconds[dataset] = duration_seconds

    def set_snapshot(self, dataset: str, generation: int, record_count: int) -> None:
        self.dataset_snapshot_generation[dataset] = generation
        self.dataset_snapshot_records[dataset] = record_count

    def increment_assignment(self, agency: str, method: str) -> None:
        self.assignment_total[(agency, method)] += 1

    def reset(self) -> None:
        self.dataset_load_total.clear()
        self.dataset_records_total.clear()
        self.dataset_read_retries_total.clear()
        self.dataset_load_duration_seconds.clear()
        self.dataset_snapshot_generation.clear()
        self.dataset_snapshot_records.clear()
        self.assignment_total.clear()
