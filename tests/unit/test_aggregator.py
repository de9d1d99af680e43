"""
Unit Tests for record aggregation (grouping, ordering, numbering).
"""

from pubreport.contracts.records import ExportMode, ProfileSummary, PublicationRecord
from pubreport.export.aggregator import UNKNOWN_NAME_SORT_KEY, aggregate, sort_key


def _record(owner, title):
    return PublicationRecord(owner_id=owner, title=title)


class TestIndividualMode:
    """Single flat group."""

    def test_one_group_in_input_order(self, sample_records):
        groups = aggregate(sample_records, mode=ExportMode.INDIVIDUAL)
        assert len(groups) == 1
        assert groups.groups[0].records == sample_records
        assert [e.index for e in groups.flattened()] == [1, 2, 3, 4]
        assert groups.total_count == 4

    def test_profiles_are_ignored(self, sample_records, sample_profiles):
        groups = aggregate(sample_records, sample_profiles, ExportMode.INDIVIDUAL)
        assert len(groups) == 1

    def test_empty(self):
        groups = aggregate([], mode=ExportMode.INDIVIDUAL)
        assert groups.groups == ()
        assert groups.total_count == 0


class TestAdminMode:
    """Grouping by owner."""

    def test_groups_sorted_by_name_unknown_last(self, sample_records, sample_profiles):
        groups = aggregate(sample_records, sample_profiles, ExportMode.ADMIN)
        assert [g.owner_id for g in groups.groups] == ["u-alice", "u-yacouba", "u-ghost"]
        assert groups.groups[2].profile is None
        assert groups.groups[2].display_name is None

    def test_records_keep_relative_order(self, sample_records, sample_profiles):
        groups = aggregate(sample_records, sample_profiles, ExportMode.ADMIN)
        yacouba = groups.groups[1]
        assert [r.title for r in yacouba.records] == [
            "Photonic crystals in arid climates",
            "Solar drying of mangoes",
        ]

    def test_running_index_spans_groups(self, sample_records, sample_profiles):
        groups = aggregate(sample_records, sample_profiles, ExportMode.ADMIN)
        assert [[e.index for e in g.entries] for g in groups.groups] == [[1], [2, 3], [4]]

    def test_no_record_dropped_or_duplicated(self, sample_records, sample_profiles):
        groups = aggregate(sample_records, sample_profiles, ExportMode.ADMIN)
        assert sum(len(g) for g in groups.groups) == len(sample_records)
        assert sorted(id(e.record) for e in groups.flattened()) == sorted(id(r) for r in sample_records)
        assert groups.total_count == len(sample_records)

    def test_sorting_is_case_sensitive(self):
        profiles = {
            "u1": ProfileSummary(owner_id="u1", full_name="bob"),
            "u2": ProfileSummary(owner_id="u2", full_name="Carl"),
        }
        groups = aggregate([_record("u1", "a"), _record("u2", "b")], profiles, ExportMode.ADMIN)
        # Uppercase sorts before lowercase in native string order
        assert [g.owner_id for g in groups.groups] == ["u2", "u1"]

    def test_name_above_sentinel_sorts_after_unknown(self):
        profiles = {"u1": ProfileSummary(owner_id="u1", full_name="Zzzu")}
        groups = aggregate([_record("u1", "a"), _record("ghost", "b")], profiles, ExportMode.ADMIN)
        assert [g.owner_id for g in groups.groups] == ["ghost", "u1"]

    def test_unknown_owners_keep_first_appearance_order(self):
        records = [_record("g2", "a"), _record("g1", "b"), _record("g2", "c")]
        groups = aggregate(records, {}, ExportMode.ADMIN)
        assert [g.owner_id for g in groups.groups] == ["g2", "g1"]
        assert [e.index for e in groups.flattened()] == [1, 2, 3]

    def test_missing_profile_map_treats_all_as_unknown(self, sample_records):
        groups = aggregate(sample_records, None, ExportMode.ADMIN)
        assert [g.owner_id for g in groups.groups] == ["u-yacouba", "u-alice", "u-ghost"]
        assert all(g.profile is None for g in groups.groups)

    def test_empty(self, sample_profiles):
        groups = aggregate([], sample_profiles, ExportMode.ADMIN)
        assert len(groups) == 0
        assert groups.total_count == 0


class TestSortKey:
    """Sentinel handling."""

    def test_sort_key(self):
        assert sort_key(None) == UNKNOWN_NAME_SORT_KEY == "ZZZ"
        assert sort_key(ProfileSummary(owner_id="u", full_name="")) == "ZZZ"
        assert sort_key(ProfileSummary(owner_id="u", full_name="Ann")) == "Ann"
