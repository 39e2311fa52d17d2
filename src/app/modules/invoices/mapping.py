"""Translation of OpenFactura payloads into tax document fields.

Received documents carry the SII field names (``TipoDTE``, ``RUTEmisor``,
``MntTotal``...). The JSON detail of a document holds its lines under
``Detalle``, as a single object when there is one line.
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Any

from app.core.utils.chile import (
    DOCUMENT_TYPE_NAMES,
    PAYMENT_FORM_NAMES,
    PURCHASE_TRANSACTION_NAMES,
    get_document_type,
)
from app.modules.invoices.models import DocumentSource, TaxDocumentStatus


def to_decimal(value: Any) -> Decimal:
    if value in (None, ""):
        return Decimal(0)
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal(0)


def to_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_date(value: Any) -> dt.date | None:
    if not value:
        return None
    try:
        return dt.date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def parse_datetime(value: Any) -> dt.datetime | None:
    """SII timestamps come as ``YYYY-MM-DD HH:MM:SS`` or ISO 8601, Chilean local time."""
    if not value:
        return None
    try:
        parsed = dt.datetime.fromisoformat(str(value).replace(" ", "T"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=dt.UTC)


def emitter_rut(document: dict[str, Any]) -> str:
    return f"{document.get('RUTEmisor')}-{str(document.get('DV', '')).upper()}"


def document_fields(
    document: dict[str, Any],
    receiver_rut: str | None,
    receiver_name: str | None,
) -> dict[str, Any]:
    """Column values for a received document; the tenant is the receiver."""
    code = to_int(document.get("TipoDTE"))
    issued = parse_date(document.get("FchEmis")) or dt.date.today()
    payment_form = document.get("FmaPago")

    return {
        "folio": str(document.get("Folio")),
        "document_type": get_document_type(code),
        "document_code": code or 33,
        "emitter_rut": emitter_rut(document),
        "emitter_name": document.get("RznSoc"),
        "receiver_rut": receiver_rut,
        "receiver_name": receiver_name,
        "issued_at": issued,
        "received_at": parse_datetime(document.get("FchRecepSII")),
        "exempt_amount": to_decimal(document.get("MntExe")),
        "net_amount": to_decimal(document.get("MntNeto")),
        "tax_amount": to_decimal(document.get("IVA")),
        "total_amount": to_decimal(document.get("MntTotal")),
        "currency": "CLP",
        "status": TaxDocumentStatus.APPROVED,
        "payment_form": str(payment_form) if payment_form is not None else None,
        "purchase_transaction_type": to_int(document.get("TpoTranCompra")),
        "source": DocumentSource.OPENFACTURA,
        "raw_response": document,
    }


def detail_lines(detail: dict[str, Any]) -> list[dict[str, Any]]:
    """Item values from a document's JSON detail. Unusable lines are dropped."""
    if not isinstance(detail, dict):
        return []
    body = detail.get("json", detail)
    if isinstance(body, dict) and "Documento" in body:
        body = body["Documento"]
    lines = body.get("Detalle") if isinstance(body, dict) else None
    if isinstance(lines, dict):
        lines = [lines]
    if not isinstance(lines, list):
        return []

    items = []
    for index, line in enumerate(lines, start=1):
        if not isinstance(line, dict):
            continue
        name = line.get("NmbItem") or line.get("DscItem")
        if not name:
            continue
        quantity = to_decimal(line.get("QtyItem") or 1)
        unit_price = to_decimal(line.get("PrcItem"))
        discount = to_decimal(line.get("DescuentoMonto"))
        amount = line.get("MontoItem")
        items.append(
            {
                "line_number": to_int(line.get("NroLinDet")) or index,
                "name": str(name)[:500],
                "description": line.get("DscItem"),
                "quantity": quantity,
                "unit_price": unit_price,
                "discount": discount,
                "amount": (
                    to_decimal(amount)
                    if amount is not None
                    else quantity * unit_price - discount
                ),
            }
        )
    return items


def describe_received(document: dict[str, Any]) -> dict[str, Any]:
    """A received document with type, payment and transaction names attached."""
    code = to_int(document.get("TipoDTE"))
    payment_form = to_int(document.get("FmaPago"))
    transaction = to_int(document.get("TpoTranCompra"))

    return {
        "id": f"{document.get('RUTEmisor')}-{code}-{document.get('Folio')}",
        "emitter_rut": emitter_rut(document),
        "emitter_name": document.get("RznSoc"),
        "document_code": code,
        "document_type_name": DOCUMENT_TYPE_NAMES.get(code) or f"Documento {code or '?'}",
        "folio": document.get("Folio"),
        "issued_at": document.get("FchEmis"),
        "received_sii_at": document.get("FchRecepSII"),
        "received_of_at": document.get("FchRecepOF"),
        "exempt_amount": to_decimal(document.get("MntExe")),
        "net_amount": to_decimal(document.get("MntNeto")),
        "tax_amount": to_decimal(document.get("IVA")),
        "total_amount": to_decimal(document.get("MntTotal")),
        "payment_form": (
            str(document["FmaPago"]) if document.get("FmaPago") is not None else None
        ),
        "payment_form_name": PAYMENT_FORM_NAMES.get(payment_form),
        "purchase_transaction_type": transaction,
        "purchase_transaction_name": PURCHASE_TRANSACTION_NAMES.get(transaction),
        "acknowledgements": document.get("Acuses") or [],
    }
