"""
GPX processing errors.

Point-level defects are never raised (the point is skipped and logged).
File-level defects raise GPXParseError / SourceReadError and are caught
by the batch processor. Only NoPointsError escapes a batch run.
"""


class GPXProcessingError(Exception):
    """Base class for all GPX processing errors."""


class GPXParseError(GPXProcessingError):
    """File cannot be parsed as XML or is not a GPX document."""

    def __init__(self, message: str, file_name: str | None = None):
        super().__init__(message)
        self.file_name = file_name


class SourceReadError(GPXProcessingError):
    """Input file could not be read or decoded."""


class NoPointsError(GPXProcessingError):
    """Merge run finished without a single valid trackpoint."""

    def __init__(self, message: str = "No points found in any GPX files!"):
        super().__init__(message)
