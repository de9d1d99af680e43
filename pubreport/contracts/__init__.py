"""
Contracts - Input values and error types shared by the export pipeline.
"""

from .records import (
    DocumentType,
    TechnicalDomain,
    ExportMode,
    PublicationRecord,
    ProfileSummary,
    ReportRequest,
)
from .errors import (
    ReportExportError,
    InvalidRecordError,
    SerializationError,
)

__all__ = [
    # Records
    'DocumentType',
    'TechnicalDomain',
    'ExportMode',
    'PublicationRecord',
    'ProfileSummary',
    'ReportRequest',
    # Errors
    'ReportExportError',
    'InvalidRecordError',
    'SerializationError',
]
