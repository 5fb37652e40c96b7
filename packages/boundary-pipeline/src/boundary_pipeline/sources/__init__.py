"""Raw dataset sources."""

from boundary_pipeline.sources.base import DatasetSource
from boundary_pipeline.sources.factory import build_dataset_source
from boundary_pipeline.sources.file import FileDatasetSource
from boundary_pipeline.sources.http import HttpDatasetSource

__all__ = [
    "DatasetSource",
    "FileDatasetSource",
    "HttpDatasetSource",
    "build_dataset_source",
]
