"""
Pytest configuration and shared fixtures for the report exporter tests.
"""
import io
import sys
import zipfile
import pytest
import tempfile
import shutil
from datetime import date
from pathlib import Path
from typing import Generator

from docx import Document
from lxml import etree

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import Settings
from pubreport.contracts.records import (
    DocumentType,
    ExportMode,
    ProfileSummary,
    PublicationRecord,
    ReportRequest,
    TechnicalDomain,
)

# ============================================================================
# Fixtures: Configuration & Settings
# ============================================================================

@pytest.fixture(scope="session")
def test_settings():
    """Settings with a fixed organization name."""
    return Settings(
        organization_name="Test University",
        report_title="Scientific Publications Report",
    )


@pytest.fixture
def export_date() -> date:
    return date(2026, 10, 18)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================================
# Fixtures: Sample Data
# ============================================================================

@pytest.fixture
def sample_profiles():
    """Profiles keyed by owner id; 'u-ghost' deliberately has none."""
    return {
        "u-yacouba": ProfileSummary(
            owner_id="u-yacouba",
            full_name="Yacouba Kabore",
            institute="UFR Sciences",
            department="Physics",
            research_team="Optics Lab",
        ),
        "u-alice": ProfileSummary(
            owner_id="u-alice",
            full_name="Alice Ouedraogo",
            institute="UFR Health",
            department=None,
            research_team=None,
        ),
    }


@pytest.fixture
def sample_records():
    """Records from three owners, interleaved."""
    return (
        PublicationRecord(
            owner_id="u-yacouba",
            title="Photonic crystals in arid climates",
            journal="Optics Letters",
            doi="10.1/xyz",
            authors=("Yacouba Kabore", "Paul Sawadogo"),
            affiliations=("UFR Sciences",),
            document_type=DocumentType.ARTICLE,
            domain=TechnicalDomain.ST,
            year=2021,
            is_principal_author=True,
        ),
        PublicationRecord(
            owner_id="u-alice",
            title="Malaria screening at scale",
            abstract="We screen a large cohort.",
            authors=("Alice Ouedraogo",),
            affiliations=("UFR Health",),
            document_type=DocumentType.BOOK_CHAPTER,
            domain=TechnicalDomain.SDS,
            year=2020,
        ),
        PublicationRecord(
            owner_id="u-ghost",
            title="Orphaned record",
        ),
        PublicationRecord(
            owner_id="u-yacouba",
            title="Solar drying of mangoes",
            document_type=DocumentType.TECHNOLOGY,
            year=2023,
        ),
    )


@pytest.fixture
def admin_request(sample_records, sample_profiles):
    return ReportRequest(
        records=sample_records,
        mode=ExportMode.ADMIN,
        profiles=sample_profiles,
    )


@pytest.fixture
def individual_request(sample_records, sample_profiles):
    own_records = tuple(r for r in sample_records if r.owner_id == "u-yacouba")
    return ReportRequest(
        records=own_records,
        mode=ExportMode.INDIVIDUAL,
        requester=sample_profiles["u-yacouba"],
    )


# ============================================================================
# Fixtures: Package Inspection
# ============================================================================

@pytest.fixture
def open_docx():
    """Open package bytes with python-docx."""
    def _open(data: bytes):
        return Document(io.BytesIO(data))
    return _open


@pytest.fixture
def document_xml():
    """Parse word/document.xml out of package bytes."""
    def _parse(data: bytes):
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            return etree.fromstring(zf.read("word/document.xml"))
    return _parse
