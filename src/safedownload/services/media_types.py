"""Extension to MIME type mapping for downloads."""

from pathlib import Path
from types import MappingProxyType

# Unknown types are forced into a save dialog
DEFAULT_MIME_TYPE = "application/force-download"

# Keys are lowercase extensions without the dot. Extend as needed; Apache's
# mime.types list is a good source.
MIME_TYPES = MappingProxyType({
    "avi": "video/x-msvideo",
    "doc": "application/msword",
    "exe": "application/octet-stream",
    "flac": "audio/flac",
    "gif": "image/gif",
    "jpeg": "image/jpg",
    "jpg": "image/jpg",
    "json": "application/json",
    "mp3": "audio/mpeg",
    "mp4": "application/mp4",
    "ogg": "audio/ogg",
    "pdf": "application/pdf",
    "png": "image/png",
    "ppt": "application/vnd.ms-powerpoint",
    "rtf": "application/rtf",
    "sql": "application/sql",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "xml": "application/xml",
    "zip": "application/zip",
})


def file_extension(file: str) -> str:
    """Return the text after the last '.' of the base name, or ''."""
    name = Path(file).name
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1]


def guess_mime_type(file: str) -> str:
    """Get the MIME type for a file name, falling back to force-download."""
    return MIME_TYPES.get(file_extension(file).lower(), DEFAULT_MIME_TYPE)
