"""API routes."""

from fastapi import APIRouter

from . import download, pages

api_router = APIRouter()

# Page routes (HTML)
api_router.include_router(pages.router, tags=["pages"])

# Download route
api_router.include_router(download.router, prefix="/download", tags=["download"])
