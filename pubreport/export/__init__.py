"""
Report Export - Aggregation, layout and delivery

Module structure:
- labels: Fixed report wording and label tables
- aggregator: Grouping, ordering and numbering of records
- report_builder: Grouped records → DocumentAST
- delivery: Full pipeline → ExportResult (bytes + filename)
"""

from .aggregator import (
    NumberedRecord,
    RecordGroup,
    OrderedGroups,
    aggregate,
)
from .report_builder import (
    ReportBuilder,
    build_report,
    format_author_lines,
)
from .delivery import (
    ExportResult,
    export_report,
    report_filename,
)

__all__ = [
    # Aggregation
    'NumberedRecord',
    'RecordGroup',
    'OrderedGroups',
    'aggregate',
    # Layout
    'ReportBuilder',
    'build_report',
    'format_author_lines',
    # Delivery
    'ExportResult',
    'export_report',
    'report_filename',
]
