"""
Record Aggregator - Groups and numbers records for presentation

Flow:
    records + profiles + mode → aggregate() → OrderedGroups → Report Builder

Admin mode partitions records by owner and orders the groups by display
name. Owners without a known name sort under the sentinel "ZZZ", so a real
name above "ZZZ" lands after them; that ordering is kept as is.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from config.logging_config import get_logger
from pubreport.contracts.records import (
    ExportMode,
    ProfileSummary,
    PublicationRecord,
)

logger = get_logger(__name__)

UNKNOWN_NAME_SORT_KEY = "ZZZ"


@dataclass(frozen=True)
class NumberedRecord:
    """A record with its 1-based position in the report tables."""
    index: int
    record: PublicationRecord


@dataclass(frozen=True)
class RecordGroup:
    """Records of one owner (or all records in individual mode)."""
    owner_id: Optional[str]
    profile: Optional[ProfileSummary]
    entries: Tuple[NumberedRecord, ...]

    @property
    def display_name(self) -> Optional[str]:
        if self.profile is None:
            return None
        return self.profile.full_name or None

    @property
    def records(self) -> Tuple[PublicationRecord, ...]:
        return tuple(entry.record for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class OrderedGroups:
    """Aggregator output consumed by the report builder."""
    groups: Tuple[RecordGroup, ...]
    total_count: int

    def flattened(self) -> Iterator[NumberedRecord]:
        """All entries in group order."""
        for group in self.groups:
            yield from group.entries

    def __len__(self) -> int:
        return len(self.groups)


def sort_key(profile: Optional[ProfileSummary]) -> str:
    """Group ordering key: display name, or the sentinel when unknown."""
    if profile is None or not profile.full_name:
        return UNKNOWN_NAME_SORT_KEY
    return profile.full_name


def aggregate(
    records: Sequence[PublicationRecord],
    profiles: Optional[Mapping[str, ProfileSummary]] = None,
    mode: ExportMode = ExportMode.INDIVIDUAL,
) -> OrderedGroups:
    """
    Group, order and number records.

    Args:
        records: Records in caller order
        profiles: owner_id → profile (admin mode only; None = all unknown)
        mode: Export mode

    Returns:
        OrderedGroups with running 1-based indices
    """
    records = tuple(records)
    if not records:
        return OrderedGroups(groups=(), total_count=0)

    if mode is ExportMode.INDIVIDUAL:
        entries = tuple(
            NumberedRecord(index=i, record=r)
            for i, r in enumerate(records, start=1)
        )
        return OrderedGroups(
            groups=(RecordGroup(owner_id=records[0].owner_id, profile=None, entries=entries),),
            total_count=len(records),
        )

    profiles = profiles or {}

    # Each owner gets a group index on first appearance
    owner_index: Dict[str, int] = {}
    buckets: List[List[PublicationRecord]] = []
    owners: List[str] = []
    for record in records:
        slot = owner_index.get(record.owner_id)
        if slot is None:
            slot = owner_index[record.owner_id] = len(buckets)
            buckets.append([])
            owners.append(record.owner_id)
        buckets[slot].append(record)

    # sorted() is stable: equal keys keep first-appearance order
    order = sorted(range(len(buckets)), key=lambda slot: sort_key(profiles.get(owners[slot])))

    groups: List[RecordGroup] = []
    running = 0
    for slot in order:
        entries = []
        for record in buckets[slot]:
            running += 1
            entries.append(NumberedRecord(index=running, record=record))
        groups.append(RecordGroup(
            owner_id=owners[slot],
            profile=profiles.get(owners[slot]),
            entries=tuple(entries),
        ))

    logger.debug(f"Aggregated {running} records into {len(groups)} owner groups")
    return OrderedGroups(groups=tuple(groups), total_count=len(records))
