"""Common runtime devkit for configuration and tracing."""

from devkit.config import AssignmentSettings, DatasetSettings, load_settings
from devkit.observability import configure_otel

__all__ = [
    "AssignmentSettings",
    "DatasetSettings",
    "configure_otel",
    "load_settings",
]
