"""Invoices module - Chilean tax documents (DTE) and the OpenFactura viewer."""

from fastapi import APIRouter


router = APIRouter(prefix="/invoices", tags=["invoices"])

__module_info__ = {
    "name": "invoices",
    "version": "1.0.0",
    "description": "Tax documents, totals and OpenFactura document proxy",
    "dependencies": ["tenants"],
}

from app.modules.invoices import routes  # noqa: E402, F401
