"""Chilean tax identifiers, document codes and phone numbers.

RUT (Rol Único Tributario) values are accepted in any common spelling
(``12.345.678-5``, ``12345678-5``, ``123456785``) and normalised here.
"""

import re
from decimal import ROUND_HALF_UP, Decimal

from app.core.constants import FOLIO_PAD_LENGTH, IVA_RATE


_RUT_BODY = re.compile(r"^\d{7,8}$")

# SII document codes
DOCUMENT_CODES: dict[str, int] = {
    "FACTURA": 33,
    "FACTURA_EXENTA": 34,
    "BOLETA": 39,
    "BOLETA_EXENTA": 41,
    "GUIA_DESPACHO": 52,
    "NOTA_DEBITO": 56,
    "NOTA_CREDITO": 61,
}
DOCUMENT_TYPES_BY_CODE: dict[int, str] = {v: k for k, v in DOCUMENT_CODES.items()}

DOCUMENT_TYPE_NAMES: dict[int, str] = {
    33: "Factura Electrónica",
    34: "Factura No Afecta o Exenta Electrónica",
    39: "Boleta Electrónica",
    41: "Boleta Exenta Electrónica",
    43: "Liquidación Factura Electrónica",
    46: "Factura de Compra Electrónica",
    52: "Guía de Despacho Electrónica",
    56: "Nota de Débito Electrónica",
    61: "Nota de Crédito Electrónica",
}

PAYMENT_FORM_NAMES: dict[int, str] = {
    1: "Contado",
    2: "Crédito",
    3: "Sin costo (entrega gratuita)",
}

PURCHASE_TRANSACTION_NAMES: dict[int, str] = {
    1: "Compras del giro",
    2: "Compras en supermercados o similares",
    3: "Adquisición de bien raíz",
    4: "Compra de activo fijo",
    5: "Compra con IVA de uso común",
    6: "Compra sin derecho a crédito",
    7: "Compra que no corresponde incluir",
}


def clean_rut(rut: str) -> str:
    """Strip dots, dashes and whitespace and upper-case the check digit."""
    return re.sub(r"[.\-\s]", "", rut).upper()


def compute_verifier(body: str) -> str:
    """Mod-11 check digit for a RUT body."""
    total = 0
    multiplier = 2
    for digit in reversed(body):
        total += int(digit) * multiplier
        multiplier = 2 if multiplier == 7 else multiplier + 1

    remainder = total % 11
    if remainder == 0:
        return "0"
    if remainder == 1:
        return "K"
    return str(11 - remainder)


def validate_rut(rut: str | None) -> bool:
    if not rut:
        return False
    cleaned = clean_rut(rut)
    body, verifier = cleaned[:-1], cleaned[-1:]
    if not _RUT_BODY.match(body):
        return False
    return compute_verifier(body) == verifier


def format_rut(rut: str) -> str:
    """Format as ``12.345.678-5``."""
    cleaned = clean_rut(rut)
    body, verifier = cleaned[:-1], cleaned[-1:]
    if not body:
        return cleaned
    grouped = f"{int(body):,}".replace(",", ".") if body.isdigit() else body
    return f"{grouped}-{verifier}"


def rut_for_api(rut: str) -> str:
    """Format as ``12345678-5``, the spelling OpenFactura expects."""
    cleaned = clean_rut(rut)
    return f"{cleaned[:-1]}-{cleaned[-1:]}"


def get_rut_number(rut: str) -> str:
    return clean_rut(rut)[:-1]


def get_rut_verifier(rut: str) -> str:
    return clean_rut(rut)[-1:]


def calculate_iva(net_amount: Decimal | int | float) -> Decimal:
    """IVA (19%) on a net amount, rounded to whole pesos."""
    iva = Decimal(str(net_amount)) * Decimal(str(IVA_RATE))
    return iva.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def generate_folio_number(sequence: int) -> str:
    return str(sequence).zfill(FOLIO_PAD_LENGTH)


def get_document_code(document_type: str) -> int:
    """SII code for a document type; unknown types fall back to a factura."""
    return DOCUMENT_CODES.get(document_type, DOCUMENT_CODES["FACTURA"])


def get_document_type(code: int | str | None) -> str:
    """Document type for an SII code; unknown codes map to FACTURA."""
    try:
        return DOCUMENT_TYPES_BY_CODE.get(int(code), "FACTURA")  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return "FACTURA"


def _phone_digits(phone: str) -> str:
    return re.sub(r"[\s\-+()]", "", phone)


def validate_phone(phone: str | None) -> bool:
    """Chilean mobile (9 XXXX XXXX) or landline, with or without +56."""
    if not phone:
        return False
    digits = _phone_digits(phone)
    if digits.startswith("56"):
        digits = digits[2:]
    if not digits.isdigit():
        return False
    if digits.startswith("9"):
        return len(digits) == 9
    return digits[0] in "2345678" and len(digits) in (8, 9)


def format_phone(phone: str) -> str:
    """Format as ``+56 9 XXXX XXXX`` (mobile) or ``+56 X XXXX XXXX`` (landline).

    Values that are not recognisable Chilean numbers are returned unchanged.
    """
    digits = _phone_digits(phone)
    if digits.startswith("56"):
        digits = digits[2:]
    if not digits.isdigit():
        return phone
    if digits.startswith("9") and len(digits) == 9:
        return f"+56 9 {digits[1:5]} {digits[5:]}"
    if len(digits) in (8, 9):
        return f"+56 {digits[0]} {digits[1:5]} {digits[5:]}"
    return phone
