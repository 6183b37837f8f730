"""Tests for the streak tracking system."""

from pushup_league.streaks import (
    STREAK_MULTIPLIERS,
    StreakResult,
    advance_streak,
    days_between,
    get_streak_multiplier,
    streak_status,
)


class TestDaysBetween:
    """Tests for days_between function."""

    def test_same_day(self):
        assert days_between("2026-01-05", "2026-01-05") == 0

    def test_next_day(self):
        assert days_between("2026-01-05", "2026-01-06") == 1

    def test_across_month_boundary(self):
        assert days_between("2026-01-31", "2026-02-01") == 1

    def test_across_leap_day(self):
        assert days_between("2028-02-28", "2028-03-01") == 2

    def test_backwards_is_negative(self):
        assert days_between("2026-01-05", "2026-01-03") == -2


class TestAdvanceStreak:
    """Tests for advance_streak function."""

    def test_first_workout(self):
        result = advance_streak(None, "2026-01-05", 0)
        assert result == StreakResult(length=1, broken=False)

    def test_same_day_does_not_increment(self):
        result = advance_streak("2026-01-05", "2026-01-05", 4)
        assert result.length == 4
        assert result.broken is False

    def test_next_day_increments(self):
        result = advance_streak("2026-01-05", "2026-01-06", 4)
        assert result.length == 5
        assert result.broken is False

    def test_two_day_gap_resets(self):
        result = advance_streak("2026-01-05", "2026-01-07", 4)
        assert result.length == 1
        assert result.broken is True

    def test_long_gap_resets(self):
        result = advance_streak("2026-01-05", "2026-03-01", 40)
        assert result.length == 1
        assert result.broken is True

    def test_day_sequence_with_skip(self):
        # Day 1, day 2, then day 4
        first = advance_streak(None, "2026-01-01", 0)
        second = advance_streak("2026-01-01", "2026-01-02", first.length)
        third = advance_streak("2026-01-02", "2026-01-04", second.length)
        assert [first.length, second.length, third.length] == [1, 2, 1]
        assert third.broken is True

    def test_earlier_date_treated_as_same_day(self):
        result = advance_streak("2026-01-05", "2026-01-04", 3)
        assert result.length == 3
        assert result.broken is False

    def test_same_day_with_zero_prior_is_one(self):
        assert advance_streak("2026-01-05", "2026-01-05", 0).length == 1


class TestStreakFreeze:
    """Tests for the freeze option of advance_streak."""

    def test_freeze_bridges_one_missed_day(self):
        result = advance_streak("2026-01-05", "2026-01-07", 4, use_freeze=True)
        assert result.length == 5
        assert result.broken is False
        assert result.freeze_used is True

    def test_freeze_not_used_on_next_day(self):
        result = advance_streak("2026-01-05", "2026-01-06", 4, use_freeze=True)
        assert result.length == 5
        assert result.freeze_used is False

    def test_freeze_does_not_cover_two_missed_days(self):
        result = advance_streak("2026-01-05", "2026-01-08", 4, use_freeze=True)
        assert result.length == 1
        assert result.broken is True
        assert result.freeze_used is False

    def test_freeze_not_used_same_day(self):
        result = advance_streak("2026-01-05", "2026-01-05", 4, use_freeze=True)
        assert result.freeze_used is False


class TestStreakMultiplier:
    """Tests for get_streak_multiplier function."""

    def test_table(self):
        expected = {
            0: 1.0, 1: 1.0, 3: 1.0,
            4: 1.1, 7: 1.1,
            8: 1.25, 14: 1.25,
            15: 1.5, 30: 1.5,
            31: 1.75, 60: 1.75,
            61: 2.0, 365: 2.0,
        }
        for days, multiplier in expected.items():
            assert get_streak_multiplier(days) == multiplier, days

    def test_monotonic(self):
        previous = 0.0
        for days in range(0, 200):
            current = get_streak_multiplier(days)
            assert current >= previous
            previous = current

    def test_thresholds_sorted_by_value(self):
        values = [STREAK_MULTIPLIERS[k] for k in sorted(STREAK_MULTIPLIERS)]
        assert values == sorted(values)


class TestStreakStatus:
    """Tests for streak_status function."""

    def test_no_workouts(self):
        status = streak_status(None, 0, "2026-01-05")
        assert status.days == 0
        assert status.broken is False
        assert status.active_today is False

    def test_logged_today(self):
        status = streak_status("2026-01-05", 3, "2026-01-05")
        assert status.days == 3
        assert status.broken is False
        assert status.active_today is True

    def test_logged_yesterday_still_alive(self):
        status = streak_status("2026-01-04", 3, "2026-01-05")
        assert status.broken is False
        assert status.active_today is False

    def test_missed_a_day_is_broken(self):
        status = streak_status("2026-01-03", 3, "2026-01-05")
        assert status.broken is True
        assert status.days == 3

    def test_armed_freeze_keeps_streak_alive(self):
        status = streak_status("2026-01-03", 3, "2026-01-05", freeze_armed=True)
        assert status.broken is False

    def test_idempotent(self):
        first = streak_status("2026-01-03", 3, "2026-01-05")
        second = streak_status("2026-01-03", 3, "2026-01-05")
        assert first == second
