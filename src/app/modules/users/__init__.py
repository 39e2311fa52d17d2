"""Users module - tenant user accounts and refresh tokens."""

from fastapi import APIRouter


router = APIRouter(prefix="/users", tags=["users"])

__module_info__ = {
    "name": "users",
    "version": "1.0.0",
    "description": "User accounts of a tenant",
    "dependencies": ["tenants"],
}

from app.modules.users import routes  # noqa: E402, F401
