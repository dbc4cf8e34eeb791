"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class PayloadError(PipelineError):
    """Raised when payloads are handed to the aggregator under an unknown series type."""

    error_code = "PAYLOAD_ERROR"


class LoadError(PipelineError):
    """Raised when a load cycle cannot produce a collection."""

    error_code = "LOAD_ERROR"


class SourceUnavailableError(LoadError):
    error_code = "SOURCE_UNAVAILABLE"

    def __init__(self, message: str, *, series_types: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.series_types = series_types
