"""
Delivery - Runs the export pipeline and names the result

Flow:
    ReportRequest → aggregate → build_report → render_docx_bytes → ExportResult

Usage:
    from pubreport.export.delivery import export_report

    result = export_report(request)
    response_body, filename = result.content, result.filename
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Union

from config.constants import PACKAGE_MEDIA_TYPE
from config.logging_config import get_logger
from config.settings import Settings, settings as default_settings
from pubreport.contracts.records import ReportRequest
from pubreport.export.aggregator import aggregate
from pubreport.export.report_builder import build_report
from pubreport.rendering.docx_adapter import render_docx_bytes

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """Serialized report and its download filename."""
    content: bytes
    filename: str
    media_type: str = PACKAGE_MEDIA_TYPE
    output_dir: Optional[Path] = None

    def __iter__(self):
        # Allows: content, filename = export_report(request)
        return iter((self.content, self.filename))

    def write_to(self, directory: Optional[Union[str, Path]] = None) -> Path:
        """
        Save the report under its filename.

        Args:
            directory: Target directory (default: the output_dir of the
                settings the report was exported with)

        Returns:
            Path of the written file
        """
        if directory is None:
            directory = self.output_dir or default_settings.output_dir
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.filename
        path.write_bytes(self.content)
        logger.info(f"Report saved: {path}")
        return path


def report_filename(is_admin: bool, export_date: date,
                    settings: Optional[Settings] = None) -> str:
    """
    Build the download filename.

    Example:
        >>> report_filename(True, date(2026, 10, 18))
        'report-publications-2026-10-18.docx'
    """
    settings = settings or default_settings
    prefix = settings.filename_prefix(is_admin)
    return f"{prefix}-{export_date.isoformat()}.{settings.package_extension}"


def export_report(
    request: ReportRequest,
    export_date: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> ExportResult:
    """
    Export a report request to a DOCX package.

    Args:
        request: Records, profiles/requester and mode
        export_date: Date printed in the report and filename (default: today)
        settings: Report settings (default: global settings)

    Returns:
        ExportResult with package bytes and filename

    Raises:
        InvalidRecordError: If a record has a blank title
        SerializationError: If the package cannot be produced
    """
    export_date = export_date or date.today()
    settings = settings or default_settings

    logger.info(f"Exporting {len(request.records)} records ({request.mode.value})")

    groups = aggregate(
        request.records,
        request.profiles if request.is_admin else None,
        request.mode,
    )
    ast = build_report(
        groups,
        request.mode,
        requester=None if request.is_admin else request.requester,
        export_date=export_date,
        settings=settings,
    )
    content = render_docx_bytes(ast)
    filename = report_filename(request.is_admin, export_date, settings)

    logger.info(f"Export ready: {filename} ({len(content)} bytes)")
    return ExportResult(content=content, filename=filename, output_dir=settings.output_dir)
