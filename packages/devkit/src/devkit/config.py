from __future__ import annotations

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SOURCE_CRS = "EPSG:4326"


class DatasetSettings(BaseModel):
    source_ref: str = ""
    enable_loading: bool = False
    max_retry_attempts: int = Field(default=3, ge=0)
    retry_delay_ms: int = Field(default=1000, ge=0)
    read_timeout_seconds: float = Field(default=10.0, gt=0)
    source_crs: str = DEFAULT_SOURCE_CRS

    @model_validator(mode="after")
    def _require_source_when_enabled(self) -> DatasetSettings:
        if self.enable_loading and not self.source_ref.strip():
            raise ValueError("source_ref is required when enable_loading is true")
        return self

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay_ms / 1000.0


class AssignmentSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore", env_nested_delimiter="__")

    SERVICE_NAME: str = "station-assignment"
    DATASET_REFRESH_INTERVAL_SECONDS: float | None = Field(default=None, gt=0)
    BOUNDARY_SIMPLIFY_TOLERANCE: float = Field(default=0.0005, ge=0)

    FIRE_DISTRICTS: DatasetSettings = Field(default_factory=DatasetSettings)
    FIRE_STATIONS: DatasetSettings = Field(default_factory=DatasetSettings)
    POLICE_STATIONS: DatasetSettings = Field(default_factory=DatasetSettings)
    COAST_GUARD_STATIONS: DatasetSettings = Field(default_factory=DatasetSettings)
    HOSPITALS: DatasetSettings = Field(default_factory=DatasetSettings)

    def datasets(self) -> list[tuple[str, DatasetSettings]]:
        """Dataset tag and settings pairs, districts first."""
        return [
            ("fire_districts", self.FIRE_DISTRICTS),
            ("fire_stations", self.FIRE_STATIONS),
            ("police_stations", self.POLICE_STATIONS),
            ("coast_guard_stations", self.COAST_GUARD_STATIONS),
            ("hospitals", self.HOSPITALS),
        ]


def load_settings(service_name: str | None = None) -> AssignmentSettings:
    if service_name:
        return AssignmentSettings(SERVICE_NAME=service_name)
    return AssignmentSettings()
