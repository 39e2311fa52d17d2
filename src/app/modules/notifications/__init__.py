"""Notifications module - templates, trigger rules and delivery."""

from fastapi import APIRouter


router = APIRouter(prefix="/notifications", tags=["notifications"])

__module_info__ = {
    "name": "notifications",
    "version": "1.0.0",
    "description": "Notification templates, rules and per-user inbox",
    "dependencies": ["users"],
}

from app.modules.notifications import routes  # noqa: E402, F401
