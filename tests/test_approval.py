import logging
from datetime import timedelta

from sqlalchemy import select

from conftest import NOW, TODAY, add_entry, reload

from app.models.time_entry import EntryStatus, TimeEntry
from app.services.approval import AutoApprover


def test_complete_past_and_today_entries_are_approved(db, clock, user):
    today = add_entry(db, user, TODAY, "7.5")
    last_month = add_entry(db, user, TODAY - timedelta(days=30), "6.0")

    updated = AutoApprover(db, clock).run(user_id=user.user_id)
    db.commit()

    assert updated == 2
    assert reload(db, today).status == EntryStatus.APPROVED
    assert reload(db, last_month).status == EntryStatus.APPROVED
    assert reload(db, today).approved_at == NOW


def test_incomplete_entries_stay_pending(db, clock, user):
    no_logout = add_entry(db, user, TODAY, "0", logout=False)
    no_login = add_entry(db, user, TODAY, "4.0", login=False)
    neither = add_entry(db, user, TODAY, "0", login=False, logout=False)

    assert AutoApprover(db, clock).run(user_id=user.user_id) == 0

    for entry in (no_logout, no_login, neither):
        refreshed = reload(db, entry)
        assert refreshed.status == EntryStatus.PENDING
        assert refreshed.approved_at is None


def test_future_entries_are_never_approved(db, clock, user):
    tomorrow = add_entry(db, user, TODAY + timedelta(days=1))
    next_week = add_entry(db, user, TODAY + timedelta(days=7), logout=False)

    assert AutoApprover(db, clock).run() == 0
    assert reload(db, tomorrow).status == EntryStatus.PENDING
    assert reload(db, next_week).status == EntryStatus.PENDING


def test_future_entry_becomes_eligible_once_its_date_arrives(db, clock, user):
    tomorrow = add_entry(db, user, TODAY + timedelta(days=1))

    assert AutoApprover(db, clock).run() == 0

    clock.advance(days=1)
    assert AutoApprover(db, clock).run() == 1
    assert reload(db, tomorrow).status == EntryStatus.APPROVED


def test_running_twice_changes_nothing_the_second_time(db, clock, user):
    add_entry(db, user, TODAY)
    add_entry(db, user, TODAY - timedelta(days=1))
    add_entry(db, user, TODAY, logout=False)

    approver = AutoApprover(db, clock)
    assert approver.run(user_id=user.user_id) == 2
    db.commit()
    first = {e.id: e.status for e in user_entries(db, user)}

    assert approver.run(user_id=user.user_id) == 0
    db.commit()
    second = {e.id: e.status for e in user_entries(db, user)}

    assert first == second


def test_user_scope_leaves_other_users_alone(db, clock, user, other_user):
    mine = add_entry(db, user, TODAY)
    theirs = add_entry(db, other_user, TODAY)

    assert AutoApprover(db, clock).run(user_id=user.user_id) == 1
    assert reload(db, mine).status == EntryStatus.APPROVED
    assert reload(db, theirs).status == EntryStatus.PENDING


def test_global_scope_covers_every_user(db, clock, user, other_user):
    mine = add_entry(db, user, TODAY)
    theirs = add_entry(db, other_user, TODAY - timedelta(days=2))

    assert AutoApprover(db, clock).run() == 2
    assert reload(db, mine).status == EntryStatus.APPROVED
    assert reload(db, theirs).status == EntryStatus.APPROVED


def test_logs_count_only_when_something_was_approved(db, clock, user, caplog):
    caplog.set_level(logging.INFO, logger="app.services.approval")

    AutoApprover(db, clock).run(user_id=user.user_id)
    assert "Auto-approved" not in caplog.text

    add_entry(db, user, TODAY)
    AutoApprover(db, clock).run(user_id=user.user_id)
    assert f"Auto-approved 1 work hours entries for user {user.user_id}" in caplog.text


def user_entries(db, user):
    db.expire_all()
    return db.execute(
        select(TimeEntry).where(TimeEntry.user_id == user.user_id)
    ).scalars().all()
