"""Tests for record visibility, filtering and ordering."""

import pytest

from colih.core.filters import (
    filter_by_access,
    filter_by_criteria,
    sort_records,
    visible_records,
)
from colih.core.records import (
    AttendanceRecord,
    FilterCriteria,
    Group,
    Role,
    Status,
    User,
    YesNo,
)


def make_record(id: str, group: Group, created_at: int, **overrides) -> AttendanceRecord:
    fields = dict(
        id=id,
        group=group,
        responsible_member="Ana Souza",
        patient_initials="J.S.",
        hospital="Hospital Geral",
        status=Status.IN_PROGRESS,
        hlc7_finalized=YesNo.NO,
        hlc7_sent=YesNo.NO,
        observations="",
        created_at=created_at,
        updated_at=created_at,
        created_by_user_id="usr1",
    )
    fields.update(overrides)
    return AttendanceRecord(**fields)


@pytest.fixture
def manager():
    return User(id="mgr1", name="Gestor Geral", role=Role.MANAGER)


@pytest.fixture
def member_a():
    return User(id="usr1", name="Membro Grupo A", role=Role.MEMBER, group=Group.GRUPO_A)


@pytest.fixture
def member_b():
    return User(id="usr2", name="Membro Grupo B", role=Role.MEMBER, group=Group.GRUPO_B)


@pytest.fixture
def sample_records():
    """Mixed groups, statuses and creation times."""
    return [
        make_record("a1", Group.GRUPO_A, 100),
        make_record("a2", Group.GRUPO_A, 300, status=Status.FINALIZED, hlc7_sent=YesNo.YES),
        make_record("b1", Group.GRUPO_B, 200, responsible_member="Bruno Lima", hospital="HGE"),
        make_record("b2", Group.GRUPO_B, 400, status=Status.FINALIZED, hlc7_finalized=YesNo.YES),
        make_record("c1", Group.CAMACARI, 500, patient_initials="M.A."),
    ]


class TestFilterByAccess:
    def test_manager_sees_all(self, sample_records, manager):
        """Managers see records from every group."""
        assert filter_by_access(sample_records, manager) == sample_records

    def test_member_sees_only_own_group(self, sample_records, member_b):
        """Members see only their own group."""
        visible = filter_by_access(sample_records, member_b)
        assert [r.id for r in visible] == ["b1", "b2"]
        assert all(r.group == Group.GRUPO_B for r in visible)

    def test_member_of_empty_group_sees_nothing(self, sample_records):
        user = User(id="u", name="SAJ", role=Role.MEMBER, group=Group.SAJ)
        assert filter_by_access(sample_records, user) == []

    def test_manager_with_group_still_sees_all(self, sample_records):
        user = User(id="m", name="M", role=Role.MANAGER, group=Group.GRUPO_A)
        assert len(filter_by_access(sample_records, user)) == len(sample_records)


class TestFilterByCriteria:
    def test_empty_criteria_keeps_everything(self, sample_records):
        assert filter_by_criteria(sample_records, FilterCriteria()) == sample_records

    def test_text_is_case_insensitive_substring(self, sample_records):
        result = filter_by_criteria(sample_records, FilterCriteria(responsible_member="bruno"))
        assert [r.id for r in result] == ["b1"]

    def test_hospital_substring(self, sample_records):
        result = filter_by_criteria(sample_records, FilterCriteria(hospital="hge"))
        assert [r.id for r in result] == ["b1"]

    def test_patient_initials_substring(self, sample_records):
        result = filter_by_criteria(sample_records, FilterCriteria(patient_initials="m.a"))
        assert [r.id for r in result] == ["c1"]

    def test_status_exact_match(self, sample_records):
        result = filter_by_criteria(sample_records, FilterCriteria(status=Status.FINALIZED))
        assert [r.id for r in result] == ["a2", "b2"]

    def test_criteria_are_and_combined(self, sample_records):
        criteria = FilterCriteria(status=Status.FINALIZED, hlc7_sent=YesNo.YES)
        result = filter_by_criteria(sample_records, criteria)
        assert [r.id for r in result] == ["a2"]

    def test_checkpoint_filters(self, sample_records):
        result = filter_by_criteria(sample_records, FilterCriteria(hlc7_finalized=YesNo.YES))
        assert [r.id for r in result] == ["b2"]

    def test_whitespace_criterion_is_ignored(self, sample_records):
        assert filter_by_criteria(sample_records, FilterCriteria(hospital="   ")) == sample_records


class TestSortRecords:
    def test_in_progress_before_finalized(self, sample_records):
        result = sort_records(sample_records)
        statuses = [r.status for r in result]
        first_finalized = statuses.index(Status.FINALIZED)
        assert all(s == Status.FINALIZED for s in statuses[first_finalized:])

    def test_newest_first_within_status(self, sample_records):
        result = sort_records(sample_records)
        assert [r.id for r in result] == ["c1", "b1", "a1", "b2", "a2"]

    def test_stable_for_equal_keys(self):
        records = [
            make_record("x", Group.GRUPO_A, 100),
            make_record("y", Group.GRUPO_A, 100),
        ]
        assert [r.id for r in sort_records(records)] == ["x", "y"]

    def test_does_not_mutate_input(self, sample_records):
        before = list(sample_records)
        sort_records(sample_records)
        assert sample_records == before


class TestVisibleRecords:
    def test_member_view_is_filtered_and_sorted(self, sample_records, member_a):
        result = visible_records(sample_records, member_a, FilterCriteria())
        assert [r.id for r in result] == ["a1", "a2"]

    def test_manager_view_with_criteria(self, sample_records, manager):
        result = visible_records(sample_records, manager, FilterCriteria(status=Status.IN_PROGRESS))
        assert [r.id for r in result] == ["c1", "b1", "a1"]

    def test_criteria_cannot_widen_member_scope(self, sample_records, member_a):
        result = visible_records(sample_records, member_a, FilterCriteria(responsible_member="bruno"))
        assert result == []

    def test_empty_input(self, manager):
        assert visible_records([], manager) == []

    def test_returns_fresh_list(self, sample_records, manager):
        result = visible_records(sample_records, manager)
        assert result is not sample_records
        result.clear()
        assert len(sample_records) == 5
