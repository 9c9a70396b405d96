from __future__ import annotations

from typing import NamedTuple


class NumberFormat(NamedTuple):
    code: str
    width: int
    use_initials: bool = True


DOCUMENT_NUMBER_FORMATS: dict[str, NumberFormat] = {
    "rfq": NumberFormat("RFQ-", 4, use_initials=False),
    "quotation": NumberFormat("QUO-", 3),
    "contract": NumberFormat("CON-", 3),
    "purchase_order": NumberFormat("PO-", 3),
    "sales_order": NumberFormat("SO-", 3),
    "delivery_note": NumberFormat("DN", 3),
    "packing_list": NumberFormat("PL", 4),
    "invoice": NumberFormat("INV", 4),
}


def company_initials(name: str | None) -> str:
    """First letter of each word, uppercased, fitted to three characters."""
    letters = "".join(word[0] for word in (name or "").split())
    return letters.upper()[:3].ljust(3, "X")


def format_document_number(document_type: str, sequence: int, company_name: str | None = None) -> str:
    try:
        number_format = DOCUMENT_NUMBER_FORMATS[document_type]
    except KeyError as exc:
        raise ValueError(f"Unknown document type: {document_type}") from exc

    prefix = company_initials(company_name) if number_format.use_initials else ""
    return f"{prefix}{number_format.code}{sequence:0{number_format.width}d}"


def next_document_number(document_type: str, company, queryset) -> str:
    """Next display number for ``company``, counting its existing documents.

    Two concurrent creations can read the same count and produce the same
    display number; primary keys stay unique either way.
    """
    return format_document_number(document_type, queryset.count() + 1, getattr(company, "name", ""))
