class PipelineError(Exception):
    """Base pipeline exception."""


class DatasetRequestError(PipelineError):
    """Raised when a dataset read failed after retries."""


class DatasetTemporaryError(DatasetRequestError):
    """Raised when a dataset read can be retried."""


class ValidationError(PipelineError):
    """Raised when a document or feature is invalid."""


class DatasetNormalizationError(ValidationError):
    """Raised when a dataset document cannot be normalized."""


class FeatureParseError(ValidationError):
    """Raised when a single feature is malformed."""
