from datetime import date, timedelta
from decimal import Decimal

from conftest import TODAY, add_entry

from app.models.time_entry import EntryStatus
from app.services.clock import get_week_bounds
from app.services.summary import DashboardSummary, SummaryCalculator, round_hours

APPROVED = EntryStatus.APPROVED


def test_empty_history_sums_to_zero(db, clock, user):
    summary = SummaryCalculator(db, clock).summarize(user.user_id)

    assert summary.hours_today == Decimal("0")
    assert summary.hours_this_week == Decimal("0")
    assert summary.has_pending_hours is False
    assert summary.as_dict()["hours_today"] == 0.0


def test_pending_entries_never_count_toward_totals(db, clock, user):
    add_entry(db, user, TODAY, "3.0", status=APPROVED)
    add_entry(db, user, TODAY, "5.0")
    add_entry(db, user, TODAY - timedelta(days=1), "4.0")

    calculator = SummaryCalculator(db, clock)

    assert calculator.hours_today(user.user_id) == Decimal("3.0")
    assert calculator.hours_this_week(user.user_id) == Decimal("3.0")
    assert calculator.has_pending_hours(user.user_id) is True


def test_week_runs_monday_through_sunday(db, clock, user):
    monday, sunday = get_week_bounds(TODAY)
    add_entry(db, user, monday - timedelta(days=1), "9.0", status=APPROVED)
    add_entry(db, user, monday, "1.25", status=APPROVED)
    add_entry(db, user, sunday, "2.5", status=APPROVED)
    add_entry(db, user, sunday + timedelta(days=1), "9.0", status=APPROVED)

    assert SummaryCalculator(db, clock).hours_this_week(user.user_id) == Decimal("3.75")


def test_get_week_bounds_uses_monday_start():
    assert get_week_bounds(date(2025, 1, 15)) == (date(2025, 1, 13), date(2025, 1, 19))
    assert get_week_bounds(date(2025, 1, 13)) == (date(2025, 1, 13), date(2025, 1, 19))
    assert get_week_bounds(date(2025, 1, 19)) == (date(2025, 1, 13), date(2025, 1, 19))


def test_other_users_hours_are_not_mixed_in(db, clock, user, other_user):
    add_entry(db, user, TODAY, "2.0", status=APPROVED)
    add_entry(db, other_user, TODAY, "6.0", status=APPROVED)
    add_entry(db, other_user, TODAY, "1.0")

    calculator = SummaryCalculator(db, clock)

    assert calculator.hours_today(user.user_id) == Decimal("2.0")
    assert calculator.has_pending_hours(user.user_id) is False


def test_pending_flag_ignores_date_and_completeness(db, clock, user):
    add_entry(db, user, TODAY + timedelta(days=40), login=False, logout=False)

    assert SummaryCalculator(db, clock).has_pending_hours(user.user_id) is True


def test_summary_does_not_approve_anything(db, clock, user):
    add_entry(db, user, TODAY, "7.5")

    summary = SummaryCalculator(db, clock).summarize(user.user_id)

    assert summary.hours_today == Decimal("0")
    assert summary.has_pending_hours is True


def test_counters_are_zero_placeholders(db, clock, user):
    calculator = SummaryCalculator(db, clock)

    assert calculator.count_events_this_week(user.user_id) == 0
    assert calculator.count_leave_this_week(user.user_id) == 0


def test_totals_are_rounded_once_to_one_decimal():
    assert round_hours(Decimal("7.25")) == 7.3
    assert round_hours(Decimal("7.24")) == 7.2
    assert round_hours(Decimal("0.05")) == 0.1

    # Thirds would drift if each were rounded before summing
    thirds = Decimal("0.33") + Decimal("0.33") + Decimal("0.33")
    summary = DashboardSummary(thirds, thirds * 5, 0, 0, False)
    assert summary.as_dict()["hours_today"] == 1.0
    assert summary.as_dict()["hours_this_week"] == 5.0
