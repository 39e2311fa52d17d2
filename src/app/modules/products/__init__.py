"""Products module - catalogue items and their variants."""

from fastapi import APIRouter


router = APIRouter(prefix="/products", tags=["products"])

__module_info__ = {
    "name": "products",
    "version": "1.0.0",
    "description": "Product catalogue with variants",
    "dependencies": ["tenants"],
}

from app.modules.products import routes  # noqa: E402, F401
