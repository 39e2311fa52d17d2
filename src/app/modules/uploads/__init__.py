"""Uploads module - image hosting through Cloudinary."""

from fastapi import APIRouter


router = APIRouter(prefix="/uploads", tags=["uploads"])

__module_info__ = {
    "name": "uploads",
    "version": "1.0.0",
    "description": "Upload product images by URL",
    "dependencies": [],
}

from app.modules.uploads import routes  # noqa: E402, F401
