"""Application configuration."""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Get project root for the default log directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

DEFAULT_ALLOWED_EXTENSIONS = (
    ".gif", ".png", ".jpg", ".jpeg",
    ".pdf", ".rar", ".zip", ".doc",
    ".xsl", ".xlsx", ".ppt", ".pptx",
)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _parse_extensions(raw: str) -> tuple[str, ...]:
    """Split a comma-separated extension list, dropping empty entries."""
    return tuple(ext.strip() for ext in raw.split(",") if ext.strip())


@dataclass(frozen=True)
class DownloadPolicy:
    """Immutable download policy shared by all requests.

    The download directory must be relative, end with '/', and never
    contain a '..' segment: any '..' in a requested path is rejected, so a
    directory containing one could not be served from at all.
    """

    download_dir: str = "download/"
    allowed_extensions: tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS
    allow_get: bool = True
    allow_post: bool = True
    base_path: Path = Path(".")
    strict_containment: bool = False

    def __post_init__(self):
        if not self.download_dir:
            raise ValueError("Download directory must not be empty")
        if not self.download_dir.endswith("/"):
            raise ValueError(f"Download directory must end with '/': {self.download_dir!r}")
        if self.download_dir.startswith("/") or Path(self.download_dir).is_absolute():
            raise ValueError(f"Download directory must be relative: {self.download_dir!r}")
        if ".." in self.download_dir:
            raise ValueError(f"Download directory must not contain '..': {self.download_dir!r}")
        # Accept any iterable of suffixes but store a tuple
        extensions = tuple(ext for ext in self.allowed_extensions if ext)
        object.__setattr__(self, "allowed_extensions", extensions)
        object.__setattr__(self, "base_path", Path(self.base_path))


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        # Server settings
        self.host: str = os.getenv("SAFEDL_HOST", "0.0.0.0")
        self.port: int = int(os.getenv("SAFEDL_PORT", "8000"))
        self.debug: bool = _env_bool("SAFEDL_DEBUG", "false")
        self.log_dir: Path = Path(
            os.getenv("SAFEDL_LOG_DIR", str(PROJECT_ROOT / "logs"))
        ).resolve()

        # Download policy
        self.download_dir: str = os.getenv("SAFEDL_DOWNLOAD_DIR", "download/")
        self.allowed_extensions: tuple[str, ...] = _parse_extensions(
            os.getenv("SAFEDL_ALLOWED_EXTENSIONS", ",".join(DEFAULT_ALLOWED_EXTENSIONS))
        )
        self.allow_get: bool = _env_bool("SAFEDL_ALLOW_GET", "true")
        self.allow_post: bool = _env_bool("SAFEDL_ALLOW_POST", "true")
        self.base_path: Path = Path(os.getenv("SAFEDL_BASE_PATH", "."))
        self.strict_containment: bool = _env_bool("SAFEDL_STRICT_CONTAINMENT", "false")

        # Response settings
        # Legacy clients expect 200 with the failure text in the body
        self.failure_status: int = int(os.getenv("SAFEDL_FAILURE_STATUS", "200"))
        self.gzip: bool = _env_bool("SAFEDL_GZIP", "false")
        self.chunk_size: int = int(os.getenv("SAFEDL_CHUNK_SIZE", "65536"))

        # Fail at startup rather than on the first request
        self.policy: DownloadPolicy = DownloadPolicy(
            download_dir=self.download_dir,
            allowed_extensions=self.allowed_extensions,
            allow_get=self.allow_get,
            allow_post=self.allow_post,
            base_path=self.base_path,
            strict_containment=self.strict_containment,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
