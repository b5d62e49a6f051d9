"""File download route (unauthenticated).

Usage from a page:

    <form method="POST" action="/download">
        <input type="hidden" name="file" value="download/file.jpg">
        <input type="submit" value="Download">
    </form>

or from a script: ``document.location.href = '/download?file=' + path``.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, StreamingResponse
from starlette.background import BackgroundTask

from ..deps import AppSettings, Downloads
from ...services.download import FAILURE_MESSAGE, DownloadService

logger = logging.getLogger(__name__)

router = APIRouter()


def serve_download(
    service: DownloadService,
    file: str,
    compression_active: bool = False,
) -> StreamingResponse:
    """Stream a validated file back as an attachment.

    Raises:
        OSError: If the file cannot be opened; no headers are sent yet.
    """
    download = service.prepare(file)

    response = StreamingResponse(
        download.iter_bytes(),
        # Covers a response that is never iterated
        background=BackgroundTask(download.close),
    )
    for name, value in download.headers(compression_active):
        response.headers.append(name, value)

    logger.info(f"Serving {file} ({download.size} bytes, {download.media_type})")
    return response


@router.api_route("", methods=["GET", "POST"])
async def download_file(request: Request, service: Downloads, settings: AppSettings):
    """Download the file named by the ``file`` GET or POST parameter.

    Every refusal answers with the same body so clients cannot tell which
    check failed.
    """
    form = await request.form() if request.method == "POST" else None
    file = service.read_parameter(request.query_params, form)

    if not service.validate(file):
        return PlainTextResponse(FAILURE_MESSAGE, status_code=settings.failure_status)

    compression_active = getattr(request.app.state, "compression_enabled", False)
    try:
        return serve_download(service, file, compression_active)
    except OSError:
        logger.exception(f"Could not open {file} for download")
        return PlainTextResponse(FAILURE_MESSAGE, status_code=500)
