"""Events module - company calendar."""

from fastapi import APIRouter


router = APIRouter(prefix="/events", tags=["events"])

__module_info__ = {
    "name": "events",
    "version": "1.0.0",
    "description": "Company events calendar",
    "dependencies": ["notifications"],
}

from app.modules.events import routes  # noqa: E402, F401
