"""HTML page routes."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from ..deps import AppSettings

router = APIRouter()


def get_templates(request: Request):
    """Get Jinja2 templates from app state."""
    return request.app.state.templates


@router.get("/", response_class=HTMLResponse)
async def download_form(request: Request, settings: AppSettings):
    """Show a form that requests a file through the download route."""
    templates = get_templates(request)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "download_dir": settings.policy.download_dir,
            "allowed_extensions": settings.policy.allowed_extensions,
            "allow_get": settings.policy.allow_get,
            "allow_post": settings.policy.allow_post,
        },
    )
