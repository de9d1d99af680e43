"""
Report Builder - Converts grouped records to Document AST

Transforms the aggregator output into a rendering-oriented DocumentAST.

Flow:
    OrderedGroups → ReportBuilder → DocumentAST → DOCX adapter

Layout, in order:
    1. Title block (organization, banner, export date)
    2. Researcher identity (individual mode with a requester)
    3. Summary (total publication count)
    4. Admin: per-owner heading, affiliation, table, details
       Individual: one table, then details
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from config.constants import (
    ADMIN_COLUMN_WIDTHS,
    BANNER_SIZE_PT,
    DATA_CELL_SIZE_PT,
    EXPORT_DATE_SIZE_PT,
    GROUP_FIELD_SIZE_PT,
    HEADER_CELL_SHADING,
    HEADER_CELL_SIZE_PT,
    HEADING_SIZES_PT,
    INDIVIDUAL_COLUMN_WIDTHS,
    ORGANIZATION_SIZE_PT,
    RESEARCHER_FIELD_SIZE_PT,
    RESEARCHER_NAME_SIZE_PT,
    SUMMARY_SIZE_PT,
)
from config.logging_config import get_logger
from config.settings import Settings, settings as default_settings
from pubreport.contracts.errors import InvalidRecordError
from pubreport.contracts.records import ExportMode, ProfileSummary, PublicationRecord
from pubreport.export.aggregator import NumberedRecord, OrderedGroups, RecordGroup
from pubreport.export.labels import (
    EMPTY_CELL,
    NOT_SPECIFIED,
    THIS_CONTRIBUTOR,
    UNKNOWN_CONTRIBUTOR,
    document_type_label,
    domain_code,
    domain_label,
    format_export_date,
    or_not_specified,
    yes_no,
)
from pubreport.rendering.document_ast import (
    Alignment,
    Block,
    Cell,
    DocumentAST,
    DocumentBuilder,
    DocumentMetadata,
    HeadingLevel,
    Paragraph,
    Row,
    Table,
    labeled_paragraph,
    text_paragraph,
)

logger = get_logger(__name__)

TABLE_COLUMNS = (
    "#", "Title", "Type", "Domain", "Year", "Principal Author", "Journal/Publisher",
)


@dataclass(frozen=True)
class DetailLayout:
    """Per-mode sizes and heading levels for detail blocks."""
    text_pt: float
    abstract_pt: float
    record_heading: HeadingLevel
    record_space_before_pt: float
    doi_space_after_pt: float


ADMIN_LAYOUT = DetailLayout(
    text_pt=10.0,
    abstract_pt=9.0,
    record_heading=HeadingLevel.H3,
    record_space_before_pt=10.0,
    doi_space_after_pt=7.5,
)

INDIVIDUAL_LAYOUT = DetailLayout(
    text_pt=11.0,
    abstract_pt=10.0,
    record_heading=HeadingLevel.H2,
    record_space_before_pt=15.0,
    doi_space_after_pt=10.0,
)


# ============================================================================
# Shared Formatting
# ============================================================================

def format_author_lines(
    authors: Sequence[str],
    affiliations: Sequence[str],
) -> List[str]:
    """
    One line per author, with the affiliation at the same index when present.

    Example:
        >>> format_author_lines(["A", "B"], ["X"])
        ['A (X)', 'B']
    """
    if not authors:
        return [NOT_SPECIFIED]

    lines = []
    for index, author in enumerate(authors):
        affiliation = affiliations[index] if index < len(affiliations) else ""
        lines.append(f"{author} ({affiliation})" if affiliation else author)
    return lines


def heading(text: str, level: HeadingLevel, space_before_pt: float = 0.0,
            space_after_pt: float = 0.0) -> Paragraph:
    return text_paragraph(
        text,
        HEADING_SIZES_PT[level.value],
        bold=True,
        heading_level=level,
        space_before_pt=space_before_pt,
        space_after_pt=space_after_pt,
    )


def header_cell(text: str, width: int) -> Cell:
    return Cell(
        paragraphs=(text_paragraph(text, HEADER_CELL_SIZE_PT, bold=True,
                                   alignment=Alignment.CENTER),),
        width_twips=width,
        shading=HEADER_CELL_SHADING,
    )


def data_cell(text: str, width: int) -> Cell:
    return Cell(
        paragraphs=(text_paragraph(text, DATA_CELL_SIZE_PT),),
        width_twips=width,
    )


def validate_records(records: Sequence[PublicationRecord]) -> None:
    """Reject records that cannot be given a heading."""
    for record in records:
        if not record.title or not record.title.strip():
            raise InvalidRecordError(record, "title is empty")


# ============================================================================
# Builder
# ============================================================================

class ReportBuilder:
    """
    Builds the publication report DocumentAST.

    Usage:
        builder = ReportBuilder(export_date=date(2026, 10, 18))
        ast = builder.build(groups, ExportMode.ADMIN)
    """

    def __init__(self, export_date: Optional[date] = None,
                 settings: Optional[Settings] = None):
        self.export_date = export_date or date.today()
        self.settings = settings or default_settings

    def build(
        self,
        groups: OrderedGroups,
        mode: ExportMode,
        requester: Optional[ProfileSummary] = None,
    ) -> DocumentAST:
        """
        Build DocumentAST from grouped records.

        Raises:
            InvalidRecordError: If any record has a blank title
        """
        validate_records([entry.record for entry in groups.flattened()])

        doc = DocumentBuilder(DocumentMetadata(
            title=self.settings.report_title,
            author=self.settings.organization_name,
            language=self.settings.report_language,
            created=self.export_date,
        ))

        doc.extend(self._title_block())
        if mode is ExportMode.INDIVIDUAL and requester is not None:
            doc.extend(self._researcher_block(requester))
        doc.extend(self._summary_block(groups.total_count))

        if mode is ExportMode.ADMIN:
            for group in groups.groups:
                doc.extend(self._admin_group(group))
        else:
            doc.extend(self._individual_body(list(groups.flattened())))

        ast = doc.build()
        logger.info(f"Built report AST ({mode.value}): {groups.total_count} records, {ast}")
        return ast

    # ------------------------------------------------------------------
    # Front matter
    # ------------------------------------------------------------------

    def _title_block(self) -> List[Block]:
        return [
            text_paragraph(self.settings.organization_name, ORGANIZATION_SIZE_PT,
                           bold=True, alignment=Alignment.CENTER, space_after_pt=10.0),
            text_paragraph(self.settings.report_title, BANNER_SIZE_PT,
                           bold=True, alignment=Alignment.CENTER, space_after_pt=10.0),
            text_paragraph(f"Export date: {format_export_date(self.export_date)}",
                           EXPORT_DATE_SIZE_PT, italic=True,
                           alignment=Alignment.CENTER, space_after_pt=20.0),
        ]

    def _researcher_block(self, profile: ProfileSummary) -> List[Block]:
        return [
            text_paragraph(f"Researcher: {or_not_specified(profile.full_name)}",
                           RESEARCHER_NAME_SIZE_PT, bold=True, space_after_pt=5.0),
            text_paragraph(f"Institute/UFR: {or_not_specified(profile.institute)}",
                           RESEARCHER_FIELD_SIZE_PT, space_after_pt=5.0),
            text_paragraph(f"Department: {or_not_specified(profile.department)}",
                           RESEARCHER_FIELD_SIZE_PT, space_after_pt=5.0),
            text_paragraph(f"Research team: {or_not_specified(profile.research_team)}",
                           RESEARCHER_FIELD_SIZE_PT, space_after_pt=20.0),
        ]

    def _summary_block(self, total_count: int) -> List[Block]:
        return [
            heading("Summary", HeadingLevel.H1, space_after_pt=10.0),
            text_paragraph(f"Total number of publications: {total_count}",
                           SUMMARY_SIZE_PT, space_after_pt=20.0),
        ]

    # ------------------------------------------------------------------
    # Bodies
    # ------------------------------------------------------------------

    def _admin_group(self, group: RecordGroup) -> List[Block]:
        name = group.display_name
        blocks: List[Block] = [
            heading(name or UNKNOWN_CONTRIBUTOR, HeadingLevel.H1,
                    space_before_pt=20.0, space_after_pt=10.0),
        ]

        profile = group.profile
        if profile is not None:
            blocks.append(labeled_paragraph(
                [("Institute/UFR: ", or_not_specified(profile.institute)),
                 (" | Department: ", or_not_specified(profile.department))],
                GROUP_FIELD_SIZE_PT, space_after_pt=5.0,
            ))
            blocks.append(labeled_paragraph(
                [("Research team: ", or_not_specified(profile.research_team))],
                GROUP_FIELD_SIZE_PT, space_after_pt=10.0,
            ))

        blocks.append(summary_table(group.entries, ADMIN_COLUMN_WIDTHS))
        blocks.append(heading(f"Publication details for {name or THIS_CONTRIBUTOR}",
                              HeadingLevel.H2, space_before_pt=15.0, space_after_pt=10.0))

        # Detail headings are numbered within the group
        for position, entry in enumerate(group.entries, start=1):
            blocks.extend(detail_block(entry.record, position, ADMIN_LAYOUT))
        return blocks

    def _individual_body(self, entries: List[NumberedRecord]) -> List[Block]:
        blocks: List[Block] = [
            summary_table(entries, INDIVIDUAL_COLUMN_WIDTHS),
            heading("Publication Details", HeadingLevel.H1,
                    space_before_pt=20.0, space_after_pt=10.0),
        ]
        for entry in entries:
            blocks.extend(detail_block(entry.record, entry.index, INDIVIDUAL_LAYOUT))
        return blocks


# ============================================================================
# Tables and Detail Blocks
# ============================================================================

def summary_table(entries: Sequence[NumberedRecord], widths: Sequence[int]) -> Table:
    """Header row plus one row per entry, numbered by entry.index."""
    rows = [Row(cells=tuple(header_cell(title, width)
                            for title, width in zip(TABLE_COLUMNS, widths)),
                is_header=True)]

    for entry in entries:
        record = entry.record
        values = (
            str(entry.index),
            record.title,
            document_type_label(record.document_type),
            domain_code(record.domain),
            str(record.year) if record.year is not None else EMPTY_CELL,
            yes_no(record.is_principal_author),
            record.journal or EMPTY_CELL,
        )
        rows.append(Row(cells=tuple(data_cell(value, width)
                                    for value, width in zip(values, widths))))
    return Table(rows=tuple(rows))


def detail_block(record: PublicationRecord, number: int,
                 layout: DetailLayout) -> List[Paragraph]:
    """Paragraphs describing one record."""
    size = layout.text_pt
    blocks = [
        heading(f"{number}. {record.title}", layout.record_heading,
                space_before_pt=layout.record_space_before_pt, space_after_pt=5.0),
        labeled_paragraph(
            [("Type: ", document_type_label(record.document_type)),
             (" | Principal author: ", yes_no(record.is_principal_author))],
            size, space_after_pt=2.5,
        ),
        labeled_paragraph([("Domain: ", domain_label(record.domain))],
                          size, space_after_pt=2.5),
        text_paragraph("Authors and affiliations:", size, bold=True, space_after_pt=2.5),
    ]

    for line in format_author_lines(record.authors, record.affiliations):
        blocks.append(text_paragraph(line, size, bulleted=True, space_after_pt=1.5))

    blocks.append(labeled_paragraph([("Journal/Publisher: ", or_not_specified(record.journal))],
                                    size, space_after_pt=2.5))
    blocks.append(labeled_paragraph([("Year: ", or_not_specified(record.year))],
                                    size, space_after_pt=2.5))

    if record.abstract:
        blocks.append(text_paragraph("Abstract:", size, bold=True, space_after_pt=2.5))
        blocks.append(text_paragraph(record.abstract, layout.abstract_pt,
                                     italic=True, space_after_pt=5.0))

    if record.doi:
        blocks.append(labeled_paragraph([("DOI: ", f"https://doi.org/{record.doi}")],
                                        size, space_after_pt=layout.doi_space_after_pt))
    return blocks


def build_report(
    groups: OrderedGroups,
    mode: ExportMode,
    requester: Optional[ProfileSummary] = None,
    export_date: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> DocumentAST:
    """Convenience wrapper around ReportBuilder.build()."""
    return ReportBuilder(export_date=export_date, settings=settings).build(
        groups, mode, requester
    )
