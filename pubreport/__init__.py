"""
pubreport - Publication registry report exporter.

Turns publication records into a downloadable DOCX report.

Usage:
    from pubreport import ReportRequest, ExportMode, export_report

    result = export_report(ReportRequest(records=records, mode=ExportMode.ADMIN,
                                         profiles=profiles))
"""

from pubreport.contracts import (
    DocumentType,
    TechnicalDomain,
    ExportMode,
    PublicationRecord,
    ProfileSummary,
    ReportRequest,
    ReportExportError,
    InvalidRecordError,
    SerializationError,
)
from pubreport.export import ExportResult, export_report

__version__ = "1.0.0"

__all__ = [
    'DocumentType',
    'TechnicalDomain',
    'ExportMode',
    'PublicationRecord',
    'ProfileSummary',
    'ReportRequest',
    'ReportExportError',
    'InvalidRecordError',
    'SerializationError',
    'ExportResult',
    'export_report',
]
