"""Download service: reads the requested file name, validates it, and
prepares the file for streaming."""

import logging
import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO
from urllib.parse import quote

from ..config import DownloadPolicy
from .media_types import guess_mime_type
from .params import read_parameter
from .validation import DownloadValidator, ValidationResult

logger = logging.getLogger(__name__)

FILE_PARAM = "file"
FAILURE_MESSAGE = "Download failed."


def _is_plain(char: str) -> bool:
    """Printable ASCII that is safe inside a quoted header string."""
    return " " <= char <= "~" and char not in '"\\'


def content_disposition(filename: str) -> str:
    """Build an attachment Content-Disposition for a base name.

    Plain ASCII names are sent as ``filename="..."``. Anything else gets an
    ASCII fallback with unsafe characters replaced by '_', followed by the
    RFC 5987 ``filename*`` form.
    """
    if all(_is_plain(char) for char in filename):
        return f'attachment; filename="{filename}"'

    fallback = "".join(char if _is_plain(char) else "_" for char in filename)
    return f"attachment; filename=\"{fallback}\"; filename*=utf-8''{quote(filename)}"


@dataclass
class PreparedDownload:
    """An opened file ready to be sent as an attachment."""

    path: Path
    filename: str  # Base name only, never the requested path
    media_type: str
    size: int  # Taken from the open handle, sent as Content-Length
    handle: BinaryIO
    chunk_size: int = 65536

    def headers(self, compression_active: bool = False) -> list[tuple[str, str]]:
        """Response headers in emission order.

        Cache-Control appears twice on purpose; some browsers need both.
        """
        headers = [
            ("Pragma", "public"),
            ("Expires", "0"),
            ("Cache-Control", "must-revalidate, post-check=0, pre-check=0"),
            ("Cache-Control", "private"),
            ("Content-Type", self.media_type),
            ("Content-Disposition", content_disposition(self.filename)),
            ("Content-Transfer-Encoding", "binary"),
            ("Content-Length", str(self.size)),
        ]
        if compression_active:
            # Compressed output would not match Content-Length
            headers.append(("Content-Encoding", "identity"))
        return headers

    def iter_bytes(self) -> Iterator[bytes]:
        """Yield the file contents, at most ``size`` bytes, then close it."""
        try:
            remaining = self.size
            while remaining > 0:
                chunk = self.handle.read(min(self.chunk_size, remaining))
                if not chunk:
                    logger.warning(f"{self.path} shrank while streaming, {remaining} bytes short")
                    break
                remaining -= len(chunk)
                yield chunk
        finally:
            self.close()

    def close(self) -> None:
        if not self.handle.closed:
            self.handle.close()


class DownloadService:
    """Serves files from the download directory under a fixed policy."""

    def __init__(self, policy: DownloadPolicy, chunk_size: int = 65536):
        self.policy = policy
        self.validator = DownloadValidator(policy)
        self.chunk_size = chunk_size

    def read_parameter(
        self,
        query: Mapping[str, str] | None,
        form: Mapping | None,
        name: str = FILE_PARAM,
        default: str | None = None,
    ) -> str | None:
        """Read a request parameter from the sources the policy enables."""
        return read_parameter(
            name,
            query,
            form,
            allow_get=self.policy.allow_get,
            allow_post=self.policy.allow_post,
            default=default,
        )

    def check(self, file: str | None) -> ValidationResult:
        return self.validator.check(file)

    def validate(self, file: str | None) -> bool:
        return self.validator.validate(file)

    def prepare(self, file: str) -> PreparedDownload:
        """Open a validated file for streaming.

        Raises:
            OSError: If the file cannot be opened or stat'ed. Nothing has been
                sent at this point, so callers can still answer with an error.
        """
        path = self.policy.base_path / file
        handle = open(path, "rb")
        try:
            size = os.fstat(handle.fileno()).st_size
        except OSError:
            handle.close()
            raise

        return PreparedDownload(
            path=path,
            filename=Path(file).name,
            media_type=guess_mime_type(file),
            size=size,
            handle=handle,
            chunk_size=self.chunk_size,
        )
