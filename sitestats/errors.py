"""
Error types raised by the site statistics pipeline.

Only configuration and setup failures surface to the caller. Per-record
problems (an unreadable file, a malformed line) are logged and skipped by
the aggregation engine and never propagate.
"""


class SiteStatsError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(SiteStatsError):
    """Invalid run configuration, detected before any aggregation starts."""


class SetupError(SiteStatsError):
    """The run cannot start: no report is produced."""


class DataDirectoryNotFoundError(SetupError):
    def __init__(self, data_dir):
        super().__init__(f"Could not open data directory: {data_dir}")
        self.data_dir = data_dir


class NoMatchingFilesError(SetupError):
    def __init__(self, data_dir, extension: str):
        super().__init__(f"No {extension} files found in {data_dir}")
        self.data_dir = data_dir
        self.extension = extension


class PoolConstructionError(SetupError):
    """The worker pool could not be built with the requested size."""


class MalformedRecordError(SiteStatsError, ValueError):
    """A line could not be decoded into a question record."""
