"""Factories for events, contacts, tax documents and notifications."""

import datetime as dt
from decimal import Decimal
from uuid import uuid4

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from app.modules.contacts.models import Contact, ContactType
from app.modules.events.models import Event, EventCategory, EventStatus
from app.modules.invoices.models import (
    DocumentSource,
    TaxDocument,
    TaxDocumentStatus,
    TaxDocumentType,
)
from app.modules.notifications.models import (
    Notification,
    NotificationRule,
    NotificationStatus,
    NotificationTemplate,
    NotificationTrigger,
    NotificationType,
)


class EventFactory(SQLAlchemyFactory[Event]):
    __model__ = Event

    title = "Degustación de temporada"
    description = None
    start_date = dt.datetime(2026, 5, 1, 18, 0, tzinfo=dt.UTC)
    end_date = dt.datetime(2026, 5, 1, 21, 0, tzinfo=dt.UTC)
    location = None
    category = EventCategory.GENERAL
    status = EventStatus.UPCOMING
    is_public = True
    created_by_id = None
    is_deleted = False
    deleted_at = None


class ContactFactory(SQLAlchemyFactory[Contact]):
    __model__ = Contact

    @classmethod
    def name(cls) -> str:
        return cls.__faker__.name()

    rut = None
    email = None
    phone = None
    company = None
    address = None
    contact_type = ContactType.CUSTOMER
    notes = None
    is_active = True
    is_deleted = False
    deleted_at = None


class TaxDocumentFactory(SQLAlchemyFactory[TaxDocument]):
    __model__ = TaxDocument

    @classmethod
    def folio(cls) -> str:
        return str(cls.__faker__.random_int(1, 999999))

    document_type = TaxDocumentType.FACTURA
    document_code = 33
    emitter_rut = "76543210-3"
    emitter_name = "Distribuidora Sur SpA"
    receiver_rut = "76123456-0"
    receiver_name = "Muralla Café"
    issued_at = dt.date(2026, 2, 10)
    received_at = None
    exempt_amount = Decimal("0.00")
    net_amount = Decimal("10000.00")
    tax_amount = Decimal("1900.00")
    total_amount = Decimal("11900.00")
    currency = "CLP"
    status = TaxDocumentStatus.DRAFT
    payment_form = None
    purchase_transaction_type = None
    source = DocumentSource.MANUAL
    raw_response = None
    notes = None
    is_deleted = False
    deleted_at = None


class NotificationTemplateFactory(SQLAlchemyFactory[NotificationTemplate]):
    __model__ = NotificationTemplate

    @classmethod
    def name(cls) -> str:
        return f"template-{uuid4().hex[:6]}"

    type = NotificationType.IN_APP
    subject = "Hola {{name}}"
    content = "Tu solicitud de {{days_requested}} días fue recibida"

    @classmethod
    def variables(cls) -> list[str]:
        return ["name", "days_requested"]

    is_active = True
    created_by = None
    is_deleted = False
    deleted_at = None


class NotificationRuleFactory(SQLAlchemyFactory[NotificationRule]):
    __model__ = NotificationRule

    name = "Aviso de PTO"
    trigger = NotificationTrigger.PTO_REQUESTED

    @classmethod
    def conditions(cls) -> list[dict]:
        return []

    @classmethod
    def recipients(cls) -> list[dict]:
        return [{"type": "all"}]

    is_active = True


class NotificationFactory(SQLAlchemyFactory[Notification]):
    __model__ = Notification

    template_id = None
    rule_id = None
    subject = "Aviso"
    content = "Contenido"
    type = NotificationType.IN_APP
    status = NotificationStatus.PENDING
    read_at = None
    sent_at = None
    failed_at = None
    error_message = None
    context_type = None
    context_id = None
    scheduled_for = None
