"""
Fixed report wording.

Label tables are closed over the record enums and read-only; they are
versioned together with the report layout.
"""

from datetime import date
from types import MappingProxyType
from typing import Optional

from pubreport.contracts.records import DocumentType, TechnicalDomain

NOT_SPECIFIED = "Not specified"
UNKNOWN_CONTRIBUTOR = "Unknown contributor"
THIS_CONTRIBUTOR = "this contributor"
EMPTY_CELL = "-"

DOCUMENT_TYPE_LABELS = MappingProxyType({
    DocumentType.ARTICLE: "Scientific Article",
    DocumentType.BOOK_CHAPTER: "Book Chapter",
    DocumentType.MONOGRAPH: "Scientific Monograph",
    DocumentType.TECHNOLOGY: "Technology",
    DocumentType.INNOVATION: "Innovation",
})

DOMAIN_LABELS = MappingProxyType({
    TechnicalDomain.ST: "Sciences and Technologies",
    TechnicalDomain.SDS: "Health Sciences",
    TechnicalDomain.LSH: "Letters and Human Sciences",
    TechnicalDomain.SEG: "Economic and Management Sciences",
    TechnicalDomain.SJP: "Legal and Political Sciences",
})

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

def check_complete(labels, enum) -> None:
    """Raise if a label table does not cover every member of its enum."""
    missing = set(enum) - set(labels)
    if missing:
        names = ", ".join(sorted(m.name for m in missing))
        raise RuntimeError(f"No {enum.__name__} label for: {names}")


check_complete(DOCUMENT_TYPE_LABELS, DocumentType)
check_complete(DOMAIN_LABELS, TechnicalDomain)


def document_type_label(document_type: Optional[DocumentType]) -> str:
    """Label for a document type; absent types read as articles."""
    return DOCUMENT_TYPE_LABELS[document_type or DocumentType.ARTICLE]


def domain_label(domain: Optional[TechnicalDomain]) -> str:
    if domain is None:
        return NOT_SPECIFIED
    return DOMAIN_LABELS[domain]


def domain_code(domain: Optional[TechnicalDomain]) -> str:
    """Short code shown in summary tables."""
    return domain.value if domain is not None else EMPTY_CELL


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def or_not_specified(value) -> str:
    """Render a nullable field, using the placeholder for None or ''."""
    if value is None or value == "":
        return NOT_SPECIFIED
    return str(value)


def format_export_date(day: date) -> str:
    """
    Format a date as '<day> <Month> <year>'.

    Example:
        >>> format_export_date(date(2026, 10, 8))
        '8 October 2026'
    """
    return f"{day.day} {MONTH_NAMES[day.month - 1]} {day.year}"
