"""Staff module - employees, shifts and attendance."""

from fastapi import APIRouter


router = APIRouter(prefix="/staff", tags=["staff"])

__module_info__ = {
    "name": "staff",
    "version": "1.0.0",
    "description": "Employees, work shifts and attendance",
    "dependencies": ["tenants"],
}

from app.modules.staff import routes  # noqa: E402, F401
