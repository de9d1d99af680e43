"""
DOCX Adapter - Converts Document AST to a DOCX package

This module provides the bridge between the format-agnostic Document AST
and the python-docx library.

Architecture:
    DocumentAST → render_docx_bytes() → .docx bytes

Output guarantees:
    - Blocks are emitted in AST order, one element per node
    - Core properties are pinned from the AST metadata
    - Zip entries carry fixed timestamps and permissions, so the same AST
      always serializes to the same bytes

Usage:
    from pubreport.rendering.docx_adapter import render_docx_bytes

    data = render_docx_bytes(ast)
"""

import io
import re
import zipfile
from datetime import datetime, time

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, Twips

from config.constants import (
    PACKAGE_LAST_MODIFIED_BY,
    PACKAGE_REVISION,
    TABLE_FULL_WIDTH_PCT,
    ZIP_FILE_MODE,
    ZIP_FIXED_TIMESTAMP,
)
from config.logging_config import get_logger
from pubreport.contracts.errors import SerializationError
from pubreport.rendering.document_ast import (
    Alignment,
    Cell,
    DocumentAST,
    DocumentMetadata,
    HeadingLevel,
    Paragraph,
    Row,
    Table,
)

logger = get_logger(__name__)

ALIGNMENT_MAP = {
    Alignment.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
    Alignment.RIGHT: WD_ALIGN_PARAGRAPH.RIGHT,
    Alignment.JUSTIFY: WD_ALIGN_PARAGRAPH.JUSTIFY,
}

HEADING_STYLES = {
    HeadingLevel.H1: 'Heading 1',
    HeadingLevel.H2: 'Heading 2',
    HeadingLevel.H3: 'Heading 3',
}

BULLET_STYLE = 'List Bullet'
TABLE_STYLE = 'Table Grid'

# Code points XML 1.0 forbids in character data (tab, LF and CR are allowed)
XML_ILLEGAL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f]')


def xml_safe(text: str) -> str:
    """Drop control characters that cannot appear in WordprocessingML text."""
    return XML_ILLEGAL_CHARS.sub('', text)


# ============================================================================
# Main Rendering Function
# ============================================================================

def render_docx_bytes(ast: DocumentAST) -> bytes:
    """
    Render DocumentAST to DOCX package bytes.

    Args:
        ast: The DocumentAST to render

    Returns:
        The zipped WordprocessingML package

    Raises:
        SerializationError: If any block cannot be encoded or the package
            cannot be written. No partial output is returned.

    Example:
        >>> data = render_docx_bytes(ast)
        >>> data[:2]
        b'PK'
    """
    logger.info(f"Rendering DocumentAST to DOCX: {ast}")

    try:
        doc = Document()
        _setup_document_properties(doc, ast.metadata)

        for idx, block in enumerate(ast.blocks):
            _render_block(doc, block)
            logger.debug(f"Rendered block {idx}: {type(block).__name__}")

        buffer = io.BytesIO()
        doc.save(buffer)
        data = _normalize_package(buffer.getvalue())
    except Exception as e:
        logger.error(f"Failed to serialize DOCX package: {e}")
        raise SerializationError(f"Cannot serialize document package: {e}") from e

    logger.info(f"✅ DOCX package ready: {len(data)} bytes")
    return data


# ============================================================================
# Document Setup
# ============================================================================

def _setup_document_properties(doc: Document, metadata: DocumentMetadata) -> None:
    """Pin core properties so output does not depend on the wall clock."""
    stamp = datetime.combine(metadata.created, time())

    props = doc.core_properties
    props.title = xml_safe(metadata.title)
    props.author = xml_safe(metadata.author)
    props.language = metadata.language
    props.created = stamp
    props.modified = stamp
    props.last_modified_by = PACKAGE_LAST_MODIFIED_BY
    props.revision = PACKAGE_REVISION

    logger.debug(f"Document properties set: title={props.title}, author={props.author}")


# ============================================================================
# Block Rendering Dispatch
# ============================================================================

def _render_block(doc: Document, block) -> None:
    """Dispatch on the closed Block variant."""
    if isinstance(block, Paragraph):
        _render_paragraph(doc, block)
    elif isinstance(block, Table):
        _render_table(doc, block)
    else:
        raise TypeError(f"Unknown block type: {type(block).__name__}")


def _paragraph_style_name(para: Paragraph):
    if para.heading_level is not None:
        return HEADING_STYLES[para.heading_level]
    if para.bulleted:
        return BULLET_STYLE
    return None


def _render_paragraph(container, para: Paragraph) -> None:
    """Append a paragraph to a Document or a table cell."""
    p = container.add_paragraph(style=_paragraph_style_name(para))
    _fill_paragraph(p, para)


def _fill_paragraph(p, para: Paragraph) -> None:
    """Write runs and paragraph formatting onto a python-docx paragraph."""
    for run in para.runs:
        r = p.add_run(xml_safe(run.text))
        r.font.size = Pt(run.size_pt)
        if run.bold:
            r.bold = True
        if run.italic:
            r.italic = True

    p.alignment = ALIGNMENT_MAP[para.alignment]

    fmt = p.paragraph_format
    if para.space_before_pt:
        fmt.space_before = Pt(para.space_before_pt)
    if para.space_after_pt:
        fmt.space_after = Pt(para.space_after_pt)


# ============================================================================
# Tables
# ============================================================================

def _render_table(doc: Document, table: Table) -> None:
    """Render a table with fixed column widths at full page width."""
    widths = table.column_widths
    t = doc.add_table(rows=0, cols=len(widths))
    t.style = TABLE_STYLE
    _set_table_full_width(t)

    for grid_col, width in zip(t._tbl.tblGrid.gridCol_lst, widths):
        grid_col.w = Twips(width)

    for row in table.rows:
        _render_row(t, row)

    logger.debug(f"Rendered table: {len(table.rows)} rows x {len(widths)} columns")


def _render_row(t, row: Row) -> None:
    r = t.add_row()
    if row.is_header:
        # Repeat header row on each page
        trPr = r._tr.get_or_add_trPr()
        header_elm = OxmlElement('w:tblHeader')
        header_elm.set(qn('w:val'), 'true')
        trPr.append(header_elm)

    for cell_node, cell in zip(row.cells, r.cells):
        _render_cell(cell, cell_node)


def _render_cell(cell, cell_node: Cell) -> None:
    cell.width = Twips(cell_node.width_twips)

    if cell_node.shading:
        # Background shading - Use OxmlElement for low-level XML manipulation
        tcPr = cell._tc.get_or_add_tcPr()
        shading_elm = OxmlElement('w:shd')
        shading_elm.set(qn('w:val'), 'clear')
        shading_elm.set(qn('w:color'), 'auto')
        shading_elm.set(qn('w:fill'), cell_node.shading.upper())
        tcPr.append(shading_elm)

    # A new cell already holds one empty paragraph; fill it first
    for idx, para in enumerate(cell_node.paragraphs):
        if idx == 0:
            p = cell.paragraphs[0]
            style = _paragraph_style_name(para)
            if style:
                p.style = style
            _fill_paragraph(p, para)
        else:
            _render_paragraph(cell, para)


def _set_table_full_width(t) -> None:
    tblPr = t._tbl.tblPr
    tblW = tblPr.find(qn('w:tblW'))
    if tblW is None:
        tblW = OxmlElement('w:tblW')
        tblStyle = tblPr.find(qn('w:tblStyle'))
        if tblStyle is not None:
            tblStyle.addnext(tblW)
        else:
            tblPr.insert(0, tblW)
    tblW.set(qn('w:type'), 'pct')
    tblW.set(qn('w:w'), str(TABLE_FULL_WIDTH_PCT))


# ============================================================================
# Package Normalization
# ============================================================================

def _normalize_package(raw: bytes) -> bytes:
    """
    Rewrite the zip with fixed entry metadata.

    Part order and content are kept as python-docx wrote them; only the
    per-entry timestamp, permissions and creator system are pinned.
    """
    out = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(raw)) as src, \
            zipfile.ZipFile(out, 'w', zipfile.ZIP_DEFLATED) as dst:
        for info in src.infolist():
            entry = zipfile.ZipInfo(info.filename, date_time=ZIP_FIXED_TIMESTAMP)
            entry.compress_type = zipfile.ZIP_DEFLATED
            entry.create_system = 3
            entry.external_attr = ZIP_FILE_MODE << 16
            dst.writestr(entry, src.read(info.filename))
    return out.getvalue()
