"""Sync module - pulls received tax documents from OpenFactura."""

from fastapi import APIRouter


router = APIRouter(prefix="/sync", tags=["sync"])

__module_info__ = {
    "name": "sync",
    "version": "1.0.0",
    "description": "OpenFactura received-document synchronisation",
    "dependencies": ["tenants", "invoices", "notifications"],
}

from app.modules.sync import routes  # noqa: E402, F401
