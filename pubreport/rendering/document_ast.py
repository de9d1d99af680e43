"""
Document AST (Abstract Syntax Tree) for Rendering

A rendering-oriented intermediate representation that sits between:
- Report data (records, groups) - WHAT the report says
- Output formats (DOCX) - HOW it is encoded

Design goals:
1. Keep the report builder free of any output-format library
2. Closed set of block kinds (Paragraph | Table) so renderers can match exhaustively
3. Immutable nodes: built once per export, never mutated after construction

Architecture:
    Grouped records
         ↓
    Report Builder (converts)
         ↓
    Document AST (this layer)
         ↓
    Package serializer (DOCX)
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union


# ============================================================================
# Enums
# ============================================================================

class Alignment(Enum):
    """Paragraph alignment."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class HeadingLevel(Enum):
    """Heading hierarchy levels."""
    H1 = 1
    H2 = 2
    H3 = 3


# ============================================================================
# Inline Content
# ============================================================================

@dataclass(frozen=True)
class Run:
    """
    Styled span of text.

    size_pt has no default: a run without an explicit size would render at
    zero size, so it is rejected at construction.
    """
    text: str
    size_pt: float
    bold: bool = False
    italic: bool = False

    def __post_init__(self):
        if self.size_pt is None or self.size_pt <= 0:
            raise ValueError(f"Run size must be positive, got {self.size_pt!r}")


# ============================================================================
# Block Classes
# ============================================================================

@dataclass(frozen=True)
class Paragraph:
    """Paragraph made of ordered runs."""
    runs: Tuple[Run, ...]
    alignment: Alignment = Alignment.LEFT
    heading_level: Optional[HeadingLevel] = None
    bulleted: bool = False
    space_before_pt: float = 0.0
    space_after_pt: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "runs", tuple(self.runs))

    @property
    def text(self) -> str:
        """Concatenated text of all runs."""
        return "".join(run.text for run in self.runs)

    @property
    def is_heading(self) -> bool:
        return self.heading_level is not None


@dataclass(frozen=True)
class Cell:
    """Table cell. Width is in twentieths of a point (DXA)."""
    paragraphs: Tuple[Paragraph, ...]
    width_twips: int
    shading: Optional[str] = None  # Hex fill (without #)

    def __post_init__(self):
        object.__setattr__(self, "paragraphs", tuple(self.paragraphs))
        if self.width_twips <= 0:
            raise ValueError(f"Cell width must be positive, got {self.width_twips!r}")
        if self.shading is not None and len(self.shading) != 6:
            raise ValueError(f"Invalid shading fill: {self.shading!r}")

    @property
    def text(self) -> str:
        return "\n".join(p.text for p in self.paragraphs)


@dataclass(frozen=True)
class Row:
    """Table row."""
    cells: Tuple[Cell, ...]
    is_header: bool = False

    def __post_init__(self):
        object.__setattr__(self, "cells", tuple(self.cells))


@dataclass(frozen=True)
class Table:
    """Table of rows; every row has the same number of cells."""
    rows: Tuple[Row, ...]

    def __post_init__(self):
        object.__setattr__(self, "rows", tuple(self.rows))
        if not self.rows:
            raise ValueError("Table needs at least one row")
        widths = {len(row.cells) for row in self.rows}
        if len(widths) != 1 or 0 in widths:
            raise ValueError(f"Table rows have inconsistent cell counts: {sorted(widths)}")

    @property
    def column_widths(self) -> Tuple[int, ...]:
        return tuple(cell.width_twips for cell in self.rows[0].cells)

    @property
    def header_rows(self) -> Tuple[Row, ...]:
        return tuple(row for row in self.rows if row.is_header)

    @property
    def data_rows(self) -> Tuple[Row, ...]:
        return tuple(row for row in self.rows if not row.is_header)


Block = Union[Paragraph, Table]
"""Closed set of block-level nodes"""


# ============================================================================
# Document-level Classes
# ============================================================================

@dataclass(frozen=True)
class DocumentMetadata:
    """Metadata for the entire document."""
    title: str = ""
    author: str = ""
    language: str = "en"
    created: date = field(default_factory=date.today)


@dataclass(frozen=True)
class DocumentAST:
    """
    Top-level Document AST.

    Structure:
        metadata: Document-level settings
        blocks: Sequential tuple of content blocks

    Usage:
        ast = build_report(groups, total, mode)
        data = render_docx_bytes(ast)
    """
    metadata: DocumentMetadata
    blocks: Tuple[Block, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "blocks", tuple(self.blocks))

    def paragraphs(self) -> List[Paragraph]:
        """Top-level paragraphs (table contents excluded)."""
        return [b for b in self.blocks if isinstance(b, Paragraph)]

    def tables(self) -> List[Table]:
        return [b for b in self.blocks if isinstance(b, Table)]

    def headings(self, level: Optional[HeadingLevel] = None) -> List[Paragraph]:
        """Heading paragraphs, optionally restricted to one level."""
        return [
            p for p in self.paragraphs()
            if p.is_heading and (level is None or p.heading_level == level)
        ]

    def iter_runs(self) -> Iterator[Run]:
        """All runs in document order, including those inside tables."""
        for block in self.blocks:
            if isinstance(block, Paragraph):
                yield from block.runs
            else:
                for row in block.rows:
                    for cell in row.cells:
                        for para in cell.paragraphs:
                            yield from para.runs

    def get_statistics(self) -> Dict[str, int]:
        """
        Get statistics about blocks in the document.

        Returns:
            Dict with counts of headings, paragraphs, tables and table rows
        """
        levels = Counter(p.heading_level for p in self.headings())
        return {
            'paragraphs': len(self.paragraphs()),
            'headings': sum(levels.values()),
            'tables': len(self.tables()),
            'table_rows': sum(len(t.rows) for t in self.tables()),
        }

    def __len__(self) -> int:
        """Number of blocks in document."""
        return len(self.blocks)

    def __repr__(self) -> str:
        stats = self.get_statistics()
        return (f"DocumentAST(blocks={len(self.blocks)}, "
                f"headings={stats['headings']}, "
                f"tables={stats['tables']})")


class DocumentBuilder:
    """
    Mutable accumulator producing a frozen DocumentAST.

    Usage:
        builder = DocumentBuilder(metadata)
        builder.add(Paragraph(runs=(Run("Hello", 11.0),)))
        ast = builder.build()
    """

    def __init__(self, metadata: DocumentMetadata):
        self.metadata = metadata
        self._blocks: List[Block] = []

    def add(self, block: Block) -> None:
        if not isinstance(block, (Paragraph, Table)):
            raise TypeError(f"Unsupported block type: {type(block).__name__}")
        self._blocks.append(block)

    def extend(self, blocks) -> None:
        for block in blocks:
            self.add(block)

    def build(self) -> DocumentAST:
        return DocumentAST(metadata=self.metadata, blocks=tuple(self._blocks))


# ============================================================================
# Helper Functions
# ============================================================================

def text_paragraph(
    text: str,
    size_pt: float,
    bold: bool = False,
    italic: bool = False,
    **paragraph_kwargs
) -> Paragraph:
    """Paragraph with a single run."""
    return Paragraph(
        runs=(Run(text=text, size_pt=size_pt, bold=bold, italic=italic),),
        **paragraph_kwargs
    )


def labeled_paragraph(
    pairs: List[Tuple[str, str]],
    size_pt: float,
    **paragraph_kwargs
) -> Paragraph:
    """
    Paragraph of bold label runs each followed by a plain value run.

    Example:
        >>> labeled_paragraph([("Year: ", "2021")], 10.0).text
        'Year: 2021'
    """
    runs: List[Run] = []
    for label, value in pairs:
        runs.append(Run(text=label, size_pt=size_pt, bold=True))
        if value:
            runs.append(Run(text=value, size_pt=size_pt))
    return Paragraph(runs=tuple(runs), **paragraph_kwargs)
