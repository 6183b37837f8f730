"""Tests for workout plausibility checks."""

from pushup_league.integrity import MOST_IN_24_HOURS, Suspicion, check_integrity


class TestCapacity:
    def test_normal_workout_is_clean(self):
        check = check_integrity("beginner", 50, [])
        assert check.suspicion is Suspicion.NONE
        assert check.warnings == []
        assert check.is_valid

    def test_above_capacity_is_low(self):
        check = check_integrity("beginner", 150, [])
        assert check.suspicion is Suspicion.LOW
        assert len(check.warnings) == 1
        assert check.is_valid

    def test_double_capacity_is_high(self):
        check = check_integrity("beginner", 250, [])
        assert check.suspicion is Suspicion.HIGH
        assert "250" in check.warnings[0]
        assert "Beginner" in check.warnings[0]
        assert check.is_valid


class TestWorldRecord:
    def test_half_record_flags_territory(self):
        check = check_integrity("world-class", 25000, [])
        assert check.world_record_territory is True
        assert check.suspicion is Suspicion.HIGH
        assert check.is_valid

    def test_beyond_record_is_rejected(self):
        check = check_integrity("world-class", MOST_IN_24_HOURS + 1, [])
        assert check.suspicion is Suspicion.EXTREME
        assert not check.is_valid
        assert "Exceeds the 24-hour world record" in check.warnings


class TestSpikes:
    def test_needs_more_than_a_week_of_history(self):
        check = check_integrity("intermediate", 90, [10] * 7)
        assert check.warnings == []

    def test_triple_average_is_medium(self):
        check = check_integrity("intermediate", 40, [10] * 8)
        assert check.suspicion is Suspicion.MEDIUM
        assert len(check.warnings) == 1

    def test_five_times_average_is_high(self):
        check = check_integrity("intermediate", 60, [10] * 8)
        assert check.suspicion is Suspicion.HIGH
        assert len(check.warnings) == 2

    def test_spike_does_not_downgrade_capacity_warning(self):
        check = check_integrity("beginner", 120, [30] * 8)
        assert check.suspicion is Suspicion.LOW
