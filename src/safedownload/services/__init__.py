"""Services module."""

from .download import DownloadService, PreparedDownload
from .media_types import DEFAULT_MIME_TYPE, MIME_TYPES, guess_mime_type
from .params import read_parameter
from .validation import DownloadValidator, FailureReason, ValidationResult

__all__ = [
    "DownloadService",
    "PreparedDownload",
    "DEFAULT_MIME_TYPE",
    "MIME_TYPES",
    "guess_mime_type",
    "read_parameter",
    "DownloadValidator",
    "FailureReason",
    "ValidationResult",
]
