"""
Tests for AST → DOCX package rendering

These tests verify:
1. Blocks come out in AST order with their formatting
2. Tables carry widths, shading and header-row flags
3. Output is byte-for-byte reproducible
4. Encoder failures surface as SerializationError
"""

import io
import zipfile
from datetime import date
from unittest.mock import patch

import pytest
from docx.enum.text import WD_ALIGN_PARAGRAPH

from pubreport.contracts.errors import SerializationError
from pubreport.rendering.docx_adapter import render_docx_bytes
from pubreport.rendering.document_ast import (
    Alignment,
    Cell,
    DocumentAST,
    DocumentMetadata,
    HeadingLevel,
    Paragraph,
    Row,
    Run,
    Table,
    text_paragraph,
)

W = '{http://schemas.openxmlformats.org/wordprocessingml/2006/main}'
NS = {'w': 'http://schemas.openxmlformats.org/wordprocessingml/2006/main'}


def _metadata():
    return DocumentMetadata(title="Report", author="Test University", created=date(2026, 10, 18))


def _sample_ast():
    header = Row(cells=(
        Cell((text_paragraph("#", 10.0, bold=True, alignment=Alignment.CENTER),), 500, "E8E8E8"),
        Cell((text_paragraph("Title", 10.0, bold=True, alignment=Alignment.CENTER),), 3000, "E8E8E8"),
    ), is_header=True)
    data = Row(cells=(
        Cell((text_paragraph("1", 9.0),), 500),
        Cell((text_paragraph("First line", 9.0), text_paragraph("Second line", 9.0)), 3000),
    ))
    return DocumentAST(metadata=_metadata(), blocks=(
        text_paragraph("Test University", 16.0, bold=True, alignment=Alignment.CENTER),
        text_paragraph("Summary", 14.0, bold=True, heading_level=HeadingLevel.H1),
        Table(rows=(header, data)),
        Paragraph(runs=(Run("DOI: ", 10.0, bold=True), Run("https://doi.org/10.1/xyz", 10.0))),
        text_paragraph("A (X)", 10.0, bulleted=True),
        text_paragraph("An abstract.", 9.0, italic=True, space_after_pt=5.0),
    ))


class TestRenderParagraphs:
    """Paragraph and run formatting."""

    def test_paragraph_order_and_text(self, open_docx):
        doc = open_docx(render_docx_bytes(_sample_ast()))
        texts = [p.text for p in doc.paragraphs]
        assert texts == [
            "Test University",
            "Summary",
            "DOI: https://doi.org/10.1/xyz",
            "A (X)",
            "An abstract.",
        ]

    def test_run_formatting(self, open_docx):
        doc = open_docx(render_docx_bytes(_sample_ast()))
        title = doc.paragraphs[0]
        assert title.runs[0].bold is True
        assert title.runs[0].font.size.pt == 16.0
        assert title.alignment == WD_ALIGN_PARAGRAPH.CENTER

        doi = doc.paragraphs[2]
        assert doi.runs[0].bold is True
        assert doi.runs[1].bold is None

        abstract = doc.paragraphs[4]
        assert abstract.runs[0].italic is True
        assert abstract.runs[0].font.size.pt == 9.0
        assert abstract.paragraph_format.space_after.pt == 5.0

    def test_heading_and_bullet_styles(self, open_docx):
        doc = open_docx(render_docx_bytes(_sample_ast()))
        assert doc.paragraphs[1].style.name == "Heading 1"
        assert doc.paragraphs[3].style.name == "List Bullet"

    def test_every_run_has_explicit_size(self, document_xml):
        root = document_xml(render_docx_bytes(_sample_ast()))
        runs = root.findall('.//w:r', NS)
        assert runs
        for run in runs:
            assert run.find('w:rPr/w:sz', NS) is not None


class TestRenderTables:
    """Table widths, shading and header rows."""

    def test_table_content(self, open_docx):
        doc = open_docx(render_docx_bytes(_sample_ast()))
        assert len(doc.tables) == 1
        table = doc.tables[0]
        assert len(table.rows) == 2
        assert [c.text for c in table.rows[0].cells] == ["#", "Title"]
        assert table.rows[1].cells[1].text == "First line\nSecond line"

    def test_table_xml_attributes(self, document_xml):
        root = document_xml(render_docx_bytes(_sample_ast()))
        tbl = root.find('.//w:tbl', NS)

        tblW = tbl.find('w:tblPr/w:tblW', NS)
        assert tblW.get(W + 'type') == 'pct'
        assert tblW.get(W + 'w') == '5000'

        rows = tbl.findall('w:tr', NS)
        assert rows[0].find('w:trPr/w:tblHeader', NS) is not None
        assert rows[1].find('w:trPr/w:tblHeader', NS) is None

        header_cells = rows[0].findall('w:tc', NS)
        assert [c.find('w:tcPr/w:tcW', NS).get(W + 'w') for c in header_cells] == ['500', '3000']
        assert all(c.find('w:tcPr/w:tcW', NS).get(W + 'type') == 'dxa' for c in header_cells)
        assert header_cells[0].find('w:tcPr/w:shd', NS).get(W + 'fill') == 'E8E8E8'

        data_cells = rows[1].findall('w:tc', NS)
        assert data_cells[0].find('w:tcPr/w:shd', NS) is None

    def test_block_order_in_body(self, document_xml):
        """Table sits between the heading and the DOI line."""
        root = document_xml(render_docx_bytes(_sample_ast()))
        body = root.find('w:body', NS)
        tags = [child.tag.replace(W, '') for child in body]
        assert tags[:6] == ['p', 'p', 'tbl', 'p', 'p', 'p']


class TestPackage:
    """Package-level guarantees."""

    def test_deterministic_output(self):
        ast = _sample_ast()
        assert render_docx_bytes(ast) == render_docx_bytes(ast)

    def test_fixed_zip_metadata(self):
        data = render_docx_bytes(_sample_ast())
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            infos = zf.infolist()
            assert infos[0].filename == '[Content_Types].xml'
            assert {i.date_time for i in infos} == {(1980, 1, 1, 0, 0, 0)}

    def test_empty_document_is_valid_package(self, open_docx):
        data = render_docx_bytes(DocumentAST(metadata=_metadata()))
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            names = set(zf.namelist())
        assert {'[Content_Types].xml', '_rels/.rels', 'word/document.xml',
                'word/_rels/document.xml.rels', 'word/styles.xml'} <= names
        doc = open_docx(data)
        assert doc.tables == []

    def test_core_properties_pinned(self, open_docx):
        doc = open_docx(render_docx_bytes(_sample_ast()))
        props = doc.core_properties
        assert props.title == "Report"
        assert props.author == "Test University"
        assert props.created.date() == date(2026, 10, 18)
        assert props.modified.date() == date(2026, 10, 18)
        assert props.revision == 1

    def test_encoder_failure_raises_serialization_error(self):
        with patch("pubreport.rendering.docx_adapter.Document", side_effect=MemoryError("boom")):
            with pytest.raises(SerializationError) as excinfo:
                render_docx_bytes(_sample_ast())
        assert isinstance(excinfo.value.__cause__, MemoryError)

    def test_package_write_failure_raises_serialization_error(self):
        with patch("pubreport.rendering.docx_adapter._normalize_package",
                   side_effect=zipfile.BadZipFile("truncated")):
            with pytest.raises(SerializationError) as excinfo:
                render_docx_bytes(_sample_ast())
        assert isinstance(excinfo.value.__cause__, zipfile.BadZipFile)

    def test_control_characters_are_dropped(self, open_docx):
        """Form feeds and similar bytes from pasted PDF text are not valid XML."""
        ast = DocumentAST(
            metadata=DocumentMetadata(title="Report\x0b", created=date(2026, 10, 18)),
            blocks=(text_paragraph("Line one\x0cpage\x02 two\tend", 10.0),),
        )
        doc = open_docx(render_docx_bytes(ast))
        assert doc.paragraphs[0].text == "Line onepage two\tend"
        assert doc.core_properties.title == "Report"
