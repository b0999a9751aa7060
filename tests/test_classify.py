"""Tests for record classification."""

import itertools

import pytest

from colih.core.classify import Classification, classify, count_by_classification
from colih.core.records import AttendanceRecord, Group, Status, YesNo


def make_record(status: Status, finalized: YesNo, sent: YesNo, **overrides) -> AttendanceRecord:
    fields = dict(
        id="r1",
        group=Group.GRUPO_A,
        responsible_member="Ana",
        patient_initials="J.S.",
        hospital="H1",
        status=status,
        hlc7_finalized=finalized,
        hlc7_sent=sent,
        observations="",
        created_at=1000,
        updated_at=1000,
        created_by_user_id="usr1",
    )
    fields.update(overrides)
    return AttendanceRecord(**fields)


class TestClassify:
    def test_new_record_not_sent_needs_attention(self):
        """In progress with nothing done yet needs attention."""
        record = make_record(Status.IN_PROGRESS, YesNo.NO, YesNo.NO)
        assert classify(record) == Classification.NEEDS_ATTENTION

    def test_in_progress_and_sent_is_active(self):
        """Sent to the secretary with the form still open is active."""
        record = make_record(Status.IN_PROGRESS, YesNo.NO, YesNo.YES)
        assert classify(record) == Classification.ACTIVE

    def test_finalized_without_form_needs_attention(self):
        """Finalized while the HLC-7 form is still open needs attention."""
        record = make_record(Status.FINALIZED, YesNo.NO, YesNo.YES)
        assert classify(record) == Classification.NEEDS_ATTENTION

    def test_fully_done_is_complete(self):
        """Finalized with the form finalized and sent is complete."""
        record = make_record(Status.FINALIZED, YesNo.YES, YesNo.YES)
        assert classify(record) == Classification.COMPLETE

    def test_not_sent_dominates_finalized_form(self):
        record = make_record(Status.FINALIZED, YesNo.YES, YesNo.NO)
        assert classify(record) == Classification.NEEDS_ATTENTION

    def test_in_progress_with_form_finalized_and_sent_is_active(self):
        record = make_record(Status.IN_PROGRESS, YesNo.YES, YesNo.YES)
        assert classify(record) == Classification.ACTIVE

    @pytest.mark.parametrize(
        "status,finalized,sent",
        list(itertools.product(Status, YesNo, YesNo)),
    )
    def test_depends_only_on_status_and_checkpoints(self, status, finalized, sent):
        base = make_record(status, finalized, sent)
        other = make_record(
            status,
            finalized,
            sent,
            id="other",
            group=Group.SAJ,
            hospital="Elsewhere",
            observations="notes",
            created_at=5,
            updated_at=9,
            created_by_user_id="someone",
        )
        assert classify(base) == classify(other)
        assert classify(base) in set(Classification)


class TestClassificationDisplay:
    def test_colors(self):
        assert Classification.NEEDS_ATTENTION.color == "red"
        assert Classification.COMPLETE.color == "green"
        assert Classification.ACTIVE.color == "blue"

    def test_every_classification_has_label(self):
        for c in Classification:
            assert c.label


class TestCountByClassification:
    def test_counts_all_categories(self):
        records = [
            make_record(Status.IN_PROGRESS, YesNo.NO, YesNo.NO, id="1"),
            make_record(Status.FINALIZED, YesNo.NO, YesNo.YES, id="2"),
            make_record(Status.FINALIZED, YesNo.YES, YesNo.YES, id="3"),
            make_record(Status.IN_PROGRESS, YesNo.NO, YesNo.YES, id="4"),
        ]
        counts = count_by_classification(records)
        assert counts == {
            Classification.NEEDS_ATTENTION: 2,
            Classification.COMPLETE: 1,
            Classification.ACTIVE: 1,
        }

    def test_empty_has_zero_for_each(self):
        counts = count_by_classification([])
        assert set(counts) == set(Classification)
        assert all(v == 0 for v in counts.values())
