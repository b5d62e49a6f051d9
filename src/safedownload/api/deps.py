"""API dependencies."""

from typing import Annotated

from fastapi import Depends

from ..config import Settings, get_settings
from ..services.download import DownloadService


def get_download_service() -> DownloadService:
    """Get download service instance bound to the configured policy."""
    settings = get_settings()
    return DownloadService(settings.policy, chunk_size=settings.chunk_size)


# Type aliases for cleaner dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
Downloads = Annotated[DownloadService, Depends(get_download_service)]
