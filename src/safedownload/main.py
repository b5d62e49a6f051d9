"""FastAPI application entry point."""

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.templating import Jinja2Templates

from .api.routes import api_router
from .config import get_settings

logger = logging.getLogger(__name__)

_log_handler: logging.Handler | None = None


def setup_logging():
    """Configure file-based logging. Wipes the log file on each restart."""
    global _log_handler
    if _log_handler is not None:
        return

    settings = get_settings()
    log_dir = settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    formatter = logging.Formatter(log_format)

    # Truncated on every start
    app_handler = logging.FileHandler(log_dir / "app.log", mode="w", encoding="utf-8")
    app_handler.setFormatter(formatter)
    app_handler.setLevel(logging.DEBUG)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    root.addHandler(app_handler)

    # Quiet down noisy loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)

    _log_handler = app_handler


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    setup_logging()

    app = FastAPI(
        title="safedownload",
        description="Validated file download endpoint",
        version="0.1.0",
        debug=settings.debug,
    )

    # Downloads opt out via Content-Encoding: identity
    app.state.compression_enabled = settings.gzip
    if settings.gzip:
        app.add_middleware(GZipMiddleware)

    # Set up Jinja2 templates
    templates_path = Path(__file__).parent / "web" / "templates"
    app.state.templates = Jinja2Templates(directory=str(templates_path))

    # Include routes
    app.include_router(api_router)

    logger.info(
        f"Serving {settings.policy.download_dir} under {settings.policy.base_path.resolve()} "
        f"(GET={settings.allow_get}, POST={settings.allow_post})"
    )
    return app


# Create app instance
app = create_app()


def run():
    """Run the download server."""
    settings = get_settings()
    logger.info(f"Starting download server on {settings.host}:{settings.port}")

    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
