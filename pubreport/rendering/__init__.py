"""
Rendering Module

Format-agnostic document model and its DOCX package serializer.
"""

from .document_ast import (
    Alignment,
    HeadingLevel,
    Run,
    Paragraph,
    Cell,
    Row,
    Table,
    Block,
    DocumentMetadata,
    DocumentAST,
    DocumentBuilder,
)
from .docx_adapter import render_docx_bytes

__all__ = [
    'Alignment',
    'HeadingLevel',
    'Run',
    'Paragraph',
    'Cell',
    'Row',
    'Table',
    'Block',
    'DocumentMetadata',
    'DocumentAST',
    'DocumentBuilder',
    'render_docx_bytes',
]
