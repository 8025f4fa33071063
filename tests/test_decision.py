from __future__ import annotations

from datetime import timedelta

import pytest

from tutorbook.application.exceptions import InvalidDecisionError, NotFoundError
from tutorbook.domain.entities.appointment import AppointmentStatus, Decision

from helpers import NOW, make_appointment


def test_approve_pending(decision, store, notifier):
    store.save([make_appointment("a1", NOW + timedelta(days=3))])

    outcome = decision.decide("a1", Decision.approve)

    assert outcome.appointment.status == AppointmentStatus.approved
    assert outcome.previous_status == AppointmentStatus.pending
    assert store.load()[0].status == AppointmentStatus.approved
    assert [(n.recipient, n.kind) for n in notifier.sent] == [("student@example.com", "decision_approved")]


def test_reject_pending(decision, store, notifier):
    store.save([make_appointment("a1", NOW + timedelta(days=3))])

    outcome = decision.decide("a1", "reject")

    assert outcome.appointment.status == AppointmentStatus.rejected
    assert notifier.sent[0].kind == "decision_rejected"


@pytest.mark.parametrize(
    ("current", "action", "expected"),
    [
        (AppointmentStatus.approved, "approve", AppointmentStatus.approved),
        (AppointmentStatus.rejected, "approve", AppointmentStatus.approved),
        (AppointmentStatus.approved, "reject", AppointmentStatus.rejected),
        (AppointmentStatus.cancelled, "approve", AppointmentStatus.approved),
    ],
)
def test_decision_applies_from_any_status(decision, store, current, action, expected):
    store.save([make_appointment("a1", NOW + timedelta(days=3), current)])

    outcome = decision.decide("a1", action)

    assert outcome.previous_status == current
    assert store.load()[0].status == expected


def test_decision_unknown_id(decision, store):
    with pytest.raises(NotFoundError):
        decision.decide("missing", "approve")
    assert store.save_count == 0


@pytest.mark.parametrize("action", ["maybe", "", None])
def test_decision_bad_action(decision, store, action):
    store.save([make_appointment("a1", NOW + timedelta(days=3))])

    with pytest.raises(InvalidDecisionError):
        decision.decide("a1", action)
    assert store.load()[0].status == AppointmentStatus.pending


def test_decision_survives_notification_failure(decision, store, notifier):
    store.save([make_appointment("a1", NOW + timedelta(days=3))])
    notifier.failing_recipients.add("student@example.com")

    outcome = decision.decide("a1", "approve")

    assert store.load()[0].status == AppointmentStatus.approved
    assert [f.kind for f in outcome.notification_failures] == ["decision_approved"]
