"""Payroll module - pay calculation from attendance and payroll runs."""

from fastapi import APIRouter


router = APIRouter(prefix="/payroll", tags=["payroll"])

__module_info__ = {
    "name": "payroll",
    "version": "1.0.0",
    "description": "Payroll calculation and payroll runs",
    "dependencies": ["staff", "notifications"],
}

from app.modules.payroll import routes  # noqa: E402, F401
