#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Publication Record Contracts

Read-only snapshots handed over by the registry backend:
- PublicationRecord: one publication entry
- ProfileSummary: a researcher's identity and affiliation
- ReportRequest: what to export and for whom

Row mapping follows the backend column names (user_id, annee_parution, ...).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


class DocumentType(Enum):
    """Publication types, valued by their backend storage code."""
    ARTICLE = "article_scientifique"
    BOOK_CHAPTER = "chapitre_livre"
    MONOGRAPH = "ouvrage_scientifique"
    TECHNOLOGY = "technologie"
    INNOVATION = "innovation"


class TechnicalDomain(Enum):
    """Technical domain codes."""
    ST = "ST"
    SDS = "SDS"
    LSH = "LSH"
    SEG = "SEG"
    SJP = "SJP"


class ExportMode(Enum):
    """Who the report is generated for."""
    ADMIN = "admin"
    INDIVIDUAL = "individual"


def _parse_enum(enum_cls, value):
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _as_tuple(values: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    if not values:
        return ()
    return tuple("" if v is None else str(v) for v in values)


@dataclass(frozen=True)
class PublicationRecord:
    """One publication entry owned by a researcher."""
    owner_id: str
    title: str
    abstract: Optional[str] = None
    journal: Optional[str] = None
    doi: Optional[str] = None
    statute: Optional[str] = None
    verification_source: Optional[str] = None
    authors: Tuple[str, ...] = ()
    affiliations: Tuple[str, ...] = ()  # index-aligned with authors, may be shorter
    document_type: Optional[DocumentType] = None
    domain: Optional[TechnicalDomain] = None
    year: Optional[int] = None
    is_principal_author: bool = False

    def __post_init__(self):
        # Frozen: normalize through object.__setattr__
        object.__setattr__(self, "authors", _as_tuple(self.authors))
        object.__setattr__(self, "affiliations", _as_tuple(self.affiliations))
        object.__setattr__(self, "document_type", _parse_enum(DocumentType, self.document_type))
        object.__setattr__(self, "domain", _parse_enum(TechnicalDomain, self.domain))

    def affiliation_at(self, index: int) -> str:
        """Affiliation paired with authors[index], empty when missing."""
        if index < len(self.affiliations):
            return self.affiliations[index]
        return ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'PublicationRecord':
        """Create from a backend row dictionary"""
        year = row.get("annee_parution")
        return cls(
            owner_id=row.get("user_id", ""),
            title=row.get("title") or "",
            abstract=row.get("abstract"),
            journal=row.get("journal"),
            doi=row.get("doi"),
            statute=row.get("statut_revue"),
            verification_source=row.get("source_verification"),
            authors=row.get("authors"),
            affiliations=row.get("affiliations"),
            document_type=row.get("document_type"),
            domain=row.get("domaine_technique"),
            year=int(year) if year is not None else None,
            is_principal_author=bool(row.get("is_principal_author")),
        )


@dataclass(frozen=True)
class ProfileSummary:
    """Researcher identity and institutional unit."""
    owner_id: str
    full_name: Optional[str] = None
    institute: Optional[str] = None
    department: Optional[str] = None
    research_team: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'ProfileSummary':
        """Create from a backend profile row"""
        return cls(
            owner_id=row.get("user_id", ""),
            full_name=row.get("full_name"),
            institute=row.get("ufr_institut"),
            department=row.get("departement"),
            research_team=row.get("equipe_recherche"),
        )


@dataclass(frozen=True)
class ReportRequest:
    """
    Export request.

    profiles is only consulted in admin mode, requester only in
    individual mode.
    """
    records: Tuple[PublicationRecord, ...]
    mode: ExportMode = ExportMode.INDIVIDUAL
    profiles: Optional[Mapping[str, ProfileSummary]] = None
    requester: Optional[ProfileSummary] = None

    def __post_init__(self):
        object.__setattr__(self, "records", tuple(self.records))
        object.__setattr__(self, "mode", ExportMode(self.mode))
        if self.profiles is not None:
            # Snapshot so later changes by the caller are not observed
            object.__setattr__(self, "profiles", dict(self.profiles))

    @property
    def is_admin(self) -> bool:
        return self.mode is ExportMode.ADMIN

    @classmethod
    def from_rows(
        cls,
        reference_rows: Iterable[Mapping[str, Any]],
        mode: ExportMode = ExportMode.INDIVIDUAL,
        profile_rows: Optional[Iterable[Mapping[str, Any]]] = None,
        requester_row: Optional[Mapping[str, Any]] = None,
    ) -> 'ReportRequest':
        """Create a request from backend rows"""
        profiles: Optional[Dict[str, ProfileSummary]] = None
        if profile_rows is not None:
            profiles = {}
            for row in profile_rows:
                profile = ProfileSummary.from_row(row)
                profiles[profile.owner_id] = profile

        return cls(
            records=tuple(PublicationRecord.from_row(r) for r in reference_rows),
            mode=mode,
            profiles=profiles,
            requester=ProfileSummary.from_row(requester_row) if requester_row else None,
        )
