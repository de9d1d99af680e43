#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Export Error Classes

Every failure surfaced by the export pipeline derives from ReportExportError.
Nothing is retried inside the pipeline; callers decide whether to re-run.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .records import PublicationRecord


class ReportExportError(Exception):
    """Base error for report export failures"""
    pass


class InvalidRecordError(ReportExportError):
    """Raised when a record cannot be rendered (blank title)"""
    def __init__(self, record: "PublicationRecord", reason: str):
        self.record = record
        self.reason = reason
        super().__init__(
            f"Invalid publication record (owner={record.owner_id!r}): {reason}"
        )


class SerializationError(ReportExportError):
    """Raised when the document package cannot be produced"""
    pass
