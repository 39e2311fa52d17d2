"""Contact database models."""

from enum import StrEnum

from sqlalchemy import Boolean, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import MAX_EMAIL_LENGTH, MAX_PHONE_LENGTH, MAX_RUT_LENGTH
from app.core.database.base import (
    Base,
    SoftDeleteMixin,
    TenantMixin,
    TimestampMixin,
    UUIDMixin,
)


class ContactType(StrEnum):
    CUSTOMER = "CUSTOMER"
    SUPPLIER = "SUPPLIER"
    EMPLOYEE = "EMPLOYEE"
    OTHER = "OTHER"


class Contact(Base, UUIDMixin, TimestampMixin, TenantMixin, SoftDeleteMixin):
    __tablename__ = "contacts"
    __table_args__ = (
        Index(
            "uq_contacts_tenant_rut",
            "tenant_id",
            "rut",
            unique=True,
            postgresql_where=text("rut IS NOT NULL AND is_deleted = false"),
        ),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    rut: Mapped[str | None] = mapped_column(String(MAX_RUT_LENGTH))
    email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH))
    phone: Mapped[str | None] = mapped_column(String(MAX_PHONE_LENGTH))
    company: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str | None] = mapped_column(String(500))
    contact_type: Mapped[str] = mapped_column(
        String(32), nullable=False, default=ContactType.CUSTOMER, index=True
    )
    notes: Mapped[str | None] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
