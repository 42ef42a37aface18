from datetime import datetime, timedelta

import pytest

from conftest import NOW, TODAY, add_entry

from app.models.time_entry import EntryStatus, TimeEntry
from app.models.user_session import UserSession
from app.services.clock import Clock, FixedClock, SystemClock


def test_status_is_a_closed_set():
    assert {s.value for s in EntryStatus} == {"pending", "approved"}
    with pytest.raises(ValueError):
        EntryStatus("rejected")


def test_unknown_status_cannot_be_assigned():
    entry = TimeEntry(user_id=1, entry_date=TODAY)
    with pytest.raises(ValueError):
        entry.status = "rejected"


def test_approved_entry_cannot_return_to_pending(db, user):
    entry = add_entry(db, user, TODAY, status=EntryStatus.APPROVED)

    with pytest.raises(ValueError):
        entry.status = EntryStatus.PENDING


def test_status_strings_are_coerced(db, user):
    entry = TimeEntry(user_id=user.user_id, entry_date=TODAY, status="pending")

    assert entry.status is EntryStatus.PENDING


def test_eligibility_matches_rule():
    def entry(**overrides):
        fields = dict(
            user_id=1,
            entry_date=TODAY,
            login_time=NOW - timedelta(hours=8),
            logout_time=NOW,
            status=EntryStatus.PENDING,
        )
        fields.update(overrides)
        return TimeEntry(**fields)

    assert entry().is_eligible_for_approval(TODAY)
    assert not entry(logout_time=None).is_eligible_for_approval(TODAY)
    assert not entry(login_time=None).is_eligible_for_approval(TODAY)
    assert not entry(entry_date=TODAY + timedelta(days=1)).is_eligible_for_approval(TODAY)
    assert not entry(status=EntryStatus.APPROVED).is_eligible_for_approval(TODAY)


def test_fixed_clock():
    clock = FixedClock(datetime(2025, 1, 19, 23, 59))

    assert clock.week_bounds() == (datetime(2025, 1, 13).date(), datetime(2025, 1, 19).date())

    clock.advance(minutes=1)
    assert clock.today() == datetime(2025, 1, 20).date()
    assert clock.week_bounds()[0] == datetime(2025, 1, 20).date()


def test_system_clock_returns_naive_times():
    assert SystemClock("UTC").now().tzinfo is None
    assert SystemClock().now().tzinfo is None


def test_clock_subclass_must_implement_now():
    class Broken(Clock):
        pass

    with pytest.raises(TypeError):
        Broken()


def test_session_token_lifecycle(db, user):
    session = UserSession.issue(user.user_id, timedelta(hours=1), user_agent="x" * 600)

    assert len(session.session_token) == 64
    assert len(session.user_agent) == 500
    assert not session.is_expired()
    assert session.is_expired(session.expires_at + timedelta(seconds=1))

    session.end()
    assert session.is_active is False
    assert session.logged_out_at is not None
