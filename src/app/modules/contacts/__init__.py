"""Contacts module - customers, suppliers and other business contacts."""

from fastapi import APIRouter


router = APIRouter(prefix="/contacts", tags=["contacts"])

__module_info__ = {
    "name": "contacts",
    "version": "1.0.0",
    "description": "Business contacts directory",
    "dependencies": ["tenants"],
}

from app.modules.contacts import routes  # noqa: E402, F401
