"""PTO module - vacation requests and their review."""

from fastapi import APIRouter


router = APIRouter(prefix="/pto", tags=["pto"])

__module_info__ = {
    "name": "pto",
    "version": "1.0.0",
    "description": "Paid time off requests",
    "dependencies": ["staff", "notifications"],
}

from app.modules.pto import routes  # noqa: E402, F401
